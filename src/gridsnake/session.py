# session.py
from __future__ import annotations
from typing import Callable, List, Optional
import logging
import random
import threading

from .config import Direction, Settings
from .game import (
    GameState,
    new_game_state, request_direction, step_game, set_running, toggle_running,
)
from .input import InputEvent, LifecycleAction, route, route_action

logger = logging.getLogger(__name__)

ScoreSink = Callable[[int], None]
Observer = Callable[[GameState], None]


class GameSession:
    """
    Single owner of one GameState.

    Every mutation goes through one lock, so a timer thread calling tick()
    and input handlers calling request_direction() never interleave.
    Observers receive the new (immutable) state after each operation; the
    score sink is called once each time a game ends.
    """

    def __init__(self, settings: Settings = Settings(),
                 on_game_over: Optional[ScoreSink] = None,
                 seed: Optional[int] = None):
        self._lock = threading.RLock()
        self._rng = random.Random(seed)
        self._observers: List[Observer] = []
        self._on_game_over = on_game_over
        self.settings = settings
        self._state = new_game_state(settings.grid(), settings.difficulty_config(), self._rng)

    @property
    def state(self) -> GameState:
        return self._state

    def subscribe(self, observer: Observer) -> None:
        with self._lock:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            self._observers.remove(observer)

    # ---------- Operations ----------
    def tick(self) -> GameState:
        with self._lock:
            return self._commit(step_game(self._state, self._rng))

    def request_direction(self, direction: Direction) -> GameState:
        with self._lock:
            return self._commit(request_direction(self._state, direction))

    def set_running(self, running: bool) -> GameState:
        with self._lock:
            return self._commit(set_running(self._state, running))

    def toggle(self) -> GameState:
        with self._lock:
            if self._state.is_over:
                logger.info("Starting a new game")
            return self._commit(
                toggle_running(self._state, self.settings.difficulty_config(), self._rng)
            )

    def restart(self) -> GameState:
        with self._lock:
            logger.info("Restarting game")
            return self._commit(
                new_game_state(self.settings.grid(), self.settings.difficulty_config(), self._rng)
            )

    def apply_settings(self, settings: Settings) -> GameState:
        """New settings begin a new game."""
        with self._lock:
            logger.info("Applying settings %s", settings)
            self.settings = settings
            return self.restart()

    def dispatch(self, event: InputEvent) -> GameState:
        """Feed a raw input event: directions go to the engine, the rest to lifecycle actions."""
        direction = route(event)
        if direction is not None:
            return self.request_direction(direction)
        action = route_action(event)
        if action is LifecycleAction.TOGGLE:
            return self.toggle()
        if action is LifecycleAction.RESTART:
            return self.restart()
        return self._state

    # ---------- Internals ----------
    def _commit(self, new_state: GameState) -> GameState:
        old_state, self._state = self._state, new_state
        if new_state is old_state:
            return new_state

        try:
            for observer in list(self._observers):
                observer(new_state)
        finally:
            if new_state.is_over and not old_state.is_over:
                logger.info("Game over, score %d", new_state.score)
                if self._on_game_over is not None:
                    self._on_game_over(new_state.score)
        return new_state


class TickScheduler:
    """
    Drives session.tick() from a background timer.

    The interval is re-read after every tick so speed-ups apply to the next
    scheduled tick. Pausing cancels the pending timer; resuming schedules a
    new one.
    """

    def __init__(self, session: GameSession):
        self.session = session
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._active = False
        self._firing = False

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        self._active = True
        self.session.subscribe(self._on_state)
        self._on_state(self.session.state)

    def stop(self) -> None:
        self._active = False
        try:
            self.session.unsubscribe(self._on_state)
        except ValueError:
            pass  # already stopped
        self._cancel()

    def _on_state(self, state: GameState) -> None:
        if self._active and state.is_running and not state.is_over:
            self._schedule(state.tick_interval_ms)
        else:
            self._cancel()

    def _schedule(self, interval_ms: int) -> None:
        with self._lock:
            # _fire schedules the next tick itself once its tick is done
            if self._timer is not None or self._firing:
                return
            self._timer = threading.Timer(interval_ms / 1000.0, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
            self._firing = True
        try:
            if self._active:
                self.session.tick()
        finally:
            with self._lock:
                self._firing = False
        self._on_state(self.session.state)
