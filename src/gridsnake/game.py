# game.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple
import logging
import random

from .config import (
    RIGHT,
    FOOD_REWARD, SPEEDUP_EVERY, SPEEDUP_STEP_MS, MIN_TICK_MS,
    FOOD_SAMPLE_ATTEMPTS,
    Direction, GridConfig, DifficultyConfig,
)

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class BoardFullError(RuntimeError):
    """No free cell is left for food."""


# ---------- Helpers ----------
def spawn_food(snake: Sequence[Cell], grid: GridConfig,
               rng: Optional[random.Random] = None) -> Cell:
    """
    Pick a uniformly random free cell. Rejection-samples a bounded number of
    times, then falls back to scanning every free cell.
    Raises BoardFullError if the snake covers the whole grid.
    """
    rng = rng if rng is not None else random
    occupied = set(snake)
    for _ in range(FOOD_SAMPLE_ATTEMPTS):
        cell = (rng.randrange(grid.cols), rng.randrange(grid.rows))
        if cell not in occupied:
            return cell

    free = [
        (x, y)
        for y in range(grid.rows)
        for x in range(grid.cols)
        if (x, y) not in occupied
    ]
    if not free:
        raise BoardFullError(f"no free cell on {grid.cols}x{grid.rows} grid")
    return rng.choice(free)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


# ---------- State ----------
@dataclass(frozen=True)
class GameState:
    grid: GridConfig
    snake: Tuple[Cell, ...]        # head at index 0
    food: Optional[Cell]           # None only once the board is full
    direction: Direction           # applied on the last tick
    queued: Direction              # applied on the next tick
    score: int
    tick_interval_ms: int
    is_running: bool = False
    is_over: bool = False

    @property
    def head(self) -> Cell:
        return self.snake[0]


def new_game_state(grid: GridConfig, difficulty: DifficultyConfig,
                   rng: Optional[random.Random] = None) -> GameState:
    """Fresh Idle state: one-cell snake at (cols//3, rows//2) heading right."""
    grid.validate()
    difficulty.validate()

    snake = ((grid.cols // 3, grid.rows // 2),)
    state = GameState(
        grid=grid,
        snake=snake,
        food=None,
        direction=RIGHT,
        queued=RIGHT,
        score=0,
        tick_interval_ms=difficulty.tick_interval_ms,
    )
    try:
        return replace(state, food=spawn_food(snake, grid, rng))
    except BoardFullError as exc:
        logger.warning("Board full at reset, game over: %s", exc)
        return replace(state, is_over=True)


# ---------- Transitions ----------
def request_direction(state: GameState, direction: Direction) -> GameState:
    """Buffer a direction for the next tick; reversals and requests after game over are ignored."""
    if state.is_over or is_opposite(direction, state.direction):
        return state
    return replace(state, queued=direction)


def set_running(state: GameState, running: bool) -> GameState:
    if state.is_over or state.is_running == running:
        return state
    return replace(state, is_running=running)


def toggle_running(state: GameState, difficulty: DifficultyConfig,
                   rng: Optional[random.Random] = None) -> GameState:
    """
    Play/pause button semantics: flips the run state, or on a finished game
    starts a fresh one right away.
    """
    if state.is_over:
        return set_running(new_game_state(state.grid, difficulty, rng), True)
    return set_running(state, not state.is_running)


def _next_interval(score: int, interval_ms: int) -> int:
    if score % SPEEDUP_EVERY == 0:
        return max(interval_ms - SPEEDUP_STEP_MS, MIN_TICK_MS)
    return interval_ms


def step_game(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """
    Advance the game by one tick.
    No-op unless running and not over. The collision test runs against the
    whole pre-move body, tail included, even though the tail would move away
    on a plain step.
    """
    if not state.is_running or state.is_over:
        return state

    # Commit direction once per tick
    direction = state.queued
    cols, rows = state.grid.cols, state.grid.rows
    hx, hy = state.head
    new_head = ((hx + direction.dx) % cols, (hy + direction.dy) % rows)

    # Self collision
    if new_head in state.snake:
        return replace(state, is_over=True, is_running=False)

    snake = (new_head,) + state.snake

    if new_head != state.food:
        return replace(state, snake=snake[:-1], direction=direction)

    # Eat & grow
    score = state.score + FOOD_REWARD
    interval = _next_interval(score, state.tick_interval_ms)
    grown = replace(state, snake=snake, direction=direction,
                    score=score, tick_interval_ms=interval)
    try:
        return replace(grown, food=spawn_food(snake, state.grid, rng))
    except BoardFullError as exc:
        logger.warning("Board full after eating, game over: %s", exc)
        return replace(grown, food=None, is_over=True, is_running=False)
