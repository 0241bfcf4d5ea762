# input.py
"""
Input routing: turn key presses, swipes and on-screen button presses into a
single direction request (or a lifecycle action). Stateless; the reversal
guard is applied by the engine, not here.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import pygame  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT, SWIPE_THRESHOLD, Direction


class LifecycleAction(Enum):
    TOGGLE = "toggle"     # play / pause, or play again after game over
    RESTART = "restart"


Point = Tuple[float, float]


@dataclass(frozen=True)
class KeyPress:
    key: int              # pygame key code


@dataclass(frozen=True)
class Swipe:
    start: Point
    end: Point


@dataclass(frozen=True)
class ButtonPress:
    button: str           # "up" / "down" / "left" / "right" / "toggle" / "restart"


InputEvent = Union[KeyPress, Swipe, ButtonPress]

KEY_DIRECTIONS = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
}

KEY_ACTIONS = {
    pygame.K_SPACE: LifecycleAction.TOGGLE,
    pygame.K_r: LifecycleAction.RESTART,
}

BUTTON_DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}

BUTTON_ACTIONS = {
    "toggle": LifecycleAction.TOGGLE,
    "restart": LifecycleAction.RESTART,
}


def swipe_direction(start: Point, end: Point,
                    threshold: float = SWIPE_THRESHOLD) -> Optional[Direction]:
    """Dominant axis wins; ties count as vertical. Short gestures are taps, not swipes."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) > abs(dy):
        if dx > threshold:
            return RIGHT
        if dx < -threshold:
            return LEFT
        return None
    if dy > threshold:
        return DOWN
    if dy < -threshold:
        return UP
    return None


def route(event: InputEvent) -> Optional[Direction]:
    if isinstance(event, KeyPress):
        return KEY_DIRECTIONS.get(event.key)
    if isinstance(event, Swipe):
        return swipe_direction(event.start, event.end)
    if isinstance(event, ButtonPress):
        return BUTTON_DIRECTIONS.get(event.button)
    return None


def route_action(event: InputEvent) -> Optional[LifecycleAction]:
    if isinstance(event, KeyPress):
        return KEY_ACTIONS.get(event.key)
    if isinstance(event, ButtonPress):
        return BUTTON_ACTIONS.get(event.button)
    return None
