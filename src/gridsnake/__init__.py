"""Grid snake: a tick-driven snake engine with wrap-around movement."""

from .config import ConfigError, Direction, DifficultyConfig, GridConfig, Settings
from .game import (
    BoardFullError,
    GameState,
    new_game_state,
    request_direction,
    set_running,
    step_game,
    toggle_running,
)
from .session import GameSession, TickScheduler

__all__ = [
    "BoardFullError", "ConfigError", "Direction", "DifficultyConfig", "GameSession",
    "GameState", "GridConfig", "Settings", "TickScheduler",
    "new_game_state", "request_direction", "set_running", "step_game", "toggle_running",
]
