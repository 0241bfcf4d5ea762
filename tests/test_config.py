import pytest

from gridsnake.config import (
    UP, DOWN, LEFT, RIGHT,
    ConfigError, DifficultyConfig, GridConfig, Settings,
)


def test_direction_opposites():
    assert UP.opposite is DOWN
    assert DOWN.opposite is UP
    assert LEFT.opposite is RIGHT
    assert RIGHT.opposite is LEFT


def test_default_settings():
    settings = Settings()
    assert (settings.difficulty, settings.grid_size, settings.snake_color) == ("medium", "medium", "primary")
    assert settings.grid() == GridConfig(20, 20)
    assert settings.difficulty_config().tick_interval_ms == 150


@pytest.mark.parametrize("label,size", [("small", (15, 15)), ("medium", (20, 20)), ("large", (25, 25))])
def test_grid_labels(label, size):
    grid = GridConfig.from_label(label)
    assert (grid.cols, grid.rows) == size


@pytest.mark.parametrize("label,ms", [("easy", 200), ("medium", 150), ("hard", 100)])
def test_difficulty_labels(label, ms):
    assert DifficultyConfig.from_label(label).tick_interval_ms == ms


def test_settings_from_camel_case_record():
    settings = Settings.from_record({"difficulty": "hard", "gridSize": "large", "snakeColor": "purple"})
    assert settings == Settings("hard", "large", "purple")


def test_settings_from_stored_record():
    settings = Settings.from_record({"difficulty": "easy", "grid_size": "small", "snake_color": "accent", "Id": 4})
    assert settings == Settings("easy", "small", "accent")


def test_settings_from_partial_record_uses_defaults():
    assert Settings.from_record({"difficulty": "easy"}) == Settings(difficulty="easy")


@pytest.mark.parametrize("record", [
    {"difficulty": "insane"},
    {"gridSize": "huge"},
    {"snakeColor": "plaid"},
])
def test_unknown_labels_are_rejected(record):
    with pytest.raises(ConfigError):
        Settings.from_record(record)


def test_unknown_grid_label_is_rejected():
    with pytest.raises(ConfigError):
        GridConfig.from_label("tiny")


def test_grid_validate():
    GridConfig(1, 1).validate()
    with pytest.raises(ConfigError):
        GridConfig(0, 1).validate()
