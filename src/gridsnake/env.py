# env.py
from __future__ import annotations
from dataclasses import dataclass, field
import random

import numpy as np  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT, Direction, Settings
from .game import (
    GameState,
    new_game_state, request_direction, set_running, step_game,
)

# -----------------------------------------------------------------------------
# Actions: integers -> grid directions
# -----------------------------------------------------------------------------
ACTIONS = {
    0: UP,
    1: DOWN,
    2: LEFT,
    3: RIGHT,
}

# -----------------------------------------------------------------------------
# Small geometry helpers (toroidal grid)
# -----------------------------------------------------------------------------
def left_of(direction: Direction) -> Direction:
    """Rotate a direction 90° CCW (screen coordinates, y grows downward)."""
    return Direction((direction.dy, -direction.dx))

def right_of(direction: Direction) -> Direction:
    """Rotate a direction 90° CW."""
    return Direction((-direction.dy, direction.dx))

def next_cell(state: GameState, direction: Direction):
    hx, hy = state.head
    return ((hx + direction.dx) % state.grid.cols, (hy + direction.dy) % state.grid.rows)

def would_hit(state: GameState, direction: Direction) -> bool:
    """True if moving one cell in 'direction' lands on the snake's body."""
    return next_cell(state, direction) in state.snake

def wrapped_delta(a: int, b: int, size: int) -> int:
    """Signed shortest step count from a to b on a ring of 'size' cells."""
    d = (b - a) % size
    return d - size if d > size // 2 else d

def wrapped_distance(state: GameState) -> int:
    if state.food is None:
        return 0
    hx, hy = state.head
    fx, fy = state.food
    return (abs(wrapped_delta(hx, fx, state.grid.cols))
            + abs(wrapped_delta(hy, fy, state.grid.rows)))

# -----------------------------------------------------------------------------
# Observation function
# -----------------------------------------------------------------------------
def observe(state: GameState) -> np.ndarray:
    """
    9-D observation vector:
      0: hx_n  - head x normalized in [0, 1]
      1: hy_n  - head y normalized in [0, 1]
      2: fx_n  - food x normalized in [0, 1] (head x when there is no food)
      3: fy_n  - food y normalized in [0, 1]
      4: dx    - current direction x component in {-1, 0, 1}
      5: dy    - current direction y component in {-1, 0, 1}
      6: danger_ahead  - 1.0 if the next cell forward is body
      7: danger_left   - 1.0 if the next cell to the left is body
      8: danger_right  - 1.0 if the next cell to the right is body
    """
    hx, hy = state.head
    fx, fy = state.food if state.food is not None else state.head

    denom_w = max(state.grid.cols - 1, 1)
    denom_h = max(state.grid.rows - 1, 1)

    d = state.direction
    return np.array(
        [
            hx / denom_w, hy / denom_h, fx / denom_w, fy / denom_h,
            float(d.dx), float(d.dy),
            float(would_hit(state, d)),
            float(would_hit(state, left_of(d))),
            float(would_hit(state, right_of(d))),
        ],
        dtype=np.float32,
    )

# -----------------------------------------------------------------------------
# Headless environment
# -----------------------------------------------------------------------------
@dataclass
class SnakeEnv:
    """
    Gym-like wrapper that drives the engine one tick per step.

    Rewards:
      + eat_reward  when food is eaten
      + shaping_coef * (d_before - d_after) per step (closer -> positive)
      + step_penalty per step
      + death_reward on death
    """
    settings: Settings = field(default_factory=Settings)
    seed_value: int = 0
    step_penalty: float = -0.001
    eat_reward: float = 1.0
    death_reward: float = -1.0
    shaping_coef: float = 0.01

    def __post_init__(self):
        self.rng = random.Random(self.seed_value)
        self.np_rng = np.random.default_rng(self.seed_value)
        self.state: GameState | None = None

    def reset(self, seed: int | None = None) -> np.ndarray:
        if seed is not None:
            self.rng.seed(seed)
            self.np_rng = np.random.default_rng(seed)
        state = new_game_state(self.settings.grid(), self.settings.difficulty_config(), self.rng)
        self.state = set_running(state, True)
        return observe(self.state)

    def step(self, action: int):
        """
        Apply an action (0..3), advance exactly one tick, and return:
          (obs, reward, terminated, info)
        """
        if self.state is None:
            raise RuntimeError("Call reset() first.")
        if action not in ACTIONS:
            raise ValueError(f"Invalid action {action}")

        before = self.state
        d_before = wrapped_distance(before)

        # Reversal guard lives in the engine
        after = step_game(request_direction(before, ACTIONS[action]), self.rng)
        self.state = after

        if after.is_over and after.snake == before.snake:
            reward = self.death_reward
        else:
            reward = self.step_penalty
            if after.score > before.score:
                reward += self.eat_reward
            else:
                reward += self.shaping_coef * (d_before - wrapped_distance(after))

        info = {
            "score": after.score,
            "length": len(after.snake),
            "tick_interval_ms": after.tick_interval_ms,
        }
        return observe(after), reward, after.is_over, info

    @property
    def action_space_n(self) -> int:
        return len(ACTIONS)

    @property
    def observation_space_shape(self):
        return (9,)
