# config.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class ConfigError(ValueError):
    """Raised for malformed grid/difficulty/settings values."""


# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT

# ----- Scoring & difficulty curve -----
FOOD_REWARD = 10
SPEEDUP_EVERY = 50        # score milestone that triggers a speed-up
SPEEDUP_STEP_MS = 10
MIN_TICK_MS = 50

# Random draws before falling back to a full scan of free cells
FOOD_SAMPLE_ATTEMPTS = 100

# ----- Input -----
SWIPE_THRESHOLD = 30      # device-independent pixels

# ----- Label tables -----
DIFFICULTIES = {
    "easy": 200,
    "medium": 150,
    "hard": 100,
}

GRID_SIZES = {
    "small": (15, 15),
    "medium": (20, 20),
    "large": (25, 25),
}

# Rendering hints only; the engine never reads these
SNAKE_COLORS = {
    "primary": (99, 102, 241),
    "secondary": (236, 72, 153),
    "accent": (16, 185, 129),
    "purple": (168, 85, 247),
}


@dataclass(frozen=True)
class GridConfig:
    cols: int
    rows: int

    def validate(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise ConfigError(f"grid dimensions must be positive, got {self.cols}x{self.rows}")

    @classmethod
    def from_label(cls, label: str) -> "GridConfig":
        try:
            cols, rows = GRID_SIZES[label]
        except KeyError:
            raise ConfigError(f"unknown grid size {label!r}") from None
        return cls(cols, rows)

    @property
    def cells(self) -> int:
        return self.cols * self.rows


@dataclass(frozen=True)
class DifficultyConfig:
    label: str
    tick_interval_ms: int

    def validate(self) -> None:
        if self.tick_interval_ms <= 0:
            raise ConfigError(f"tick interval must be positive, got {self.tick_interval_ms}")

    @classmethod
    def from_label(cls, label: str) -> "DifficultyConfig":
        try:
            return cls(label, DIFFICULTIES[label])
        except KeyError:
            raise ConfigError(f"unknown difficulty {label!r}") from None


# ----- Settings record (what the settings source hands us) -----
@dataclass(frozen=True)
class Settings:
    difficulty: str = "medium"
    grid_size: str = "medium"
    snake_color: str = "primary"

    def __post_init__(self):
        if self.difficulty not in DIFFICULTIES:
            raise ConfigError(f"unknown difficulty {self.difficulty!r}")
        if self.grid_size not in GRID_SIZES:
            raise ConfigError(f"unknown grid size {self.grid_size!r}")
        if self.snake_color not in SNAKE_COLORS:
            raise ConfigError(f"unknown snake color {self.snake_color!r}")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Settings":
        """
        Build settings from a settings-source record.
        Accepts camelCase keys (gridSize, snakeColor) as well as the stored
        column names (grid_size, snake_color). Missing keys use defaults.
        """
        defaults = cls()
        difficulty = record.get("difficulty", defaults.difficulty)
        grid_size = record.get("gridSize", record.get("grid_size", defaults.grid_size))
        snake_color = record.get("snakeColor", record.get("snake_color", defaults.snake_color))
        return cls(difficulty=difficulty, grid_size=grid_size, snake_color=snake_color)

    def grid(self) -> GridConfig:
        return GridConfig.from_label(self.grid_size)

    def difficulty_config(self) -> DifficultyConfig:
        return DifficultyConfig.from_label(self.difficulty)

    @property
    def color(self) -> tuple:
        return SNAKE_COLORS[self.snake_color]
