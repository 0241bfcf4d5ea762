# main.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple
import argparse
import csv
import logging
import os

import pygame  # type: ignore

from .config import DIFFICULTIES, GRID_SIZES, SNAKE_COLORS, Settings
from .game import GameState
from .input import ButtonPress, InputEvent, KeyPress, Swipe
from .session import GameSession, ScoreSink

logger = logging.getLogger(__name__)

# ----- Window -----
CELL_SIZE = 20
BAR_HEIGHT = 28           # score line above the board
PAD_HEIGHT = 56           # on-screen controls below the board

# ----- Colors -----
BG    = (20, 20, 24)
GRID  = (32, 32, 40)
FOOD  = (245, 158, 11)
TEXT  = (220, 220, 230)
BTN   = (48, 48, 60)

BUTTONS = ("left", "up", "down", "right", "toggle", "restart")
BUTTON_LABELS = {
    "left": "<", "up": "^", "down": "v", "right": ">",
    "toggle": "||", "restart": "R",
}


# ---------- Score sink ----------
@dataclass
class ScoreRecord:
    player_name: str
    score: int
    difficulty: str
    grid_size: str
    snake_color: str
    game_date: str


def make_score_sink(settings: Settings, player: str, csv_path: Optional[str]) -> ScoreSink:
    """Print the final score and, if csv_path is set, append it as a score record."""
    def report(score: int) -> None:
        print(f"Game over! {player} scored {score}")
        if csv_path is None:
            return
        record = ScoreRecord(
            player_name=player,
            score=score,
            difficulty=settings.difficulty,
            grid_size=settings.grid_size,
            snake_color=settings.snake_color,
            game_date=datetime.now(timezone.utc).isoformat(),
        )
        new_file = not os.path.exists(csv_path)
        with open(csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(asdict(record)))
            if new_file:
                writer.writeheader()
            writer.writerow(asdict(record))
        logger.debug("Saved score record → %s", csv_path)
    return report


# ---------- Input translation ----------
class SwipeTracker:
    """Remembers where a press started so the release can be turned into a Swipe."""

    def __init__(self):
        self.start: Optional[Tuple[float, float]] = None

    def press(self, pos) -> None:
        self.start = (float(pos[0]), float(pos[1]))

    def release(self, pos) -> Optional[Swipe]:
        if self.start is None:
            return None
        swipe = Swipe(self.start, (float(pos[0]), float(pos[1])))
        self.start = None
        return swipe


def layout_buttons(width: int, top: int) -> Dict[str, pygame.Rect]:
    w = width // len(BUTTONS)
    return {
        name: pygame.Rect(i * w + 2, top + 4, w - 4, PAD_HEIGHT - 8)
        for i, name in enumerate(BUTTONS)
    }


def translate_event(event: pygame.event.Event, tracker: SwipeTracker,
                    buttons: Dict[str, pygame.Rect],
                    window_size: Tuple[int, int]) -> Optional[InputEvent]:
    """Map a raw pygame event to an input-router event (or None)."""
    if event.type == pygame.KEYDOWN:
        return KeyPress(event.key)

    # Touch screens also emit synthetic mouse events; use the finger ones
    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and getattr(event, "touch", False):
        return None

    if event.type == pygame.MOUSEBUTTONDOWN:
        for name, rect in buttons.items():
            if rect.collidepoint(event.pos):
                return ButtonPress(name)
        tracker.press(event.pos)
    elif event.type == pygame.MOUSEBUTTONUP:
        return tracker.release(event.pos)
    elif event.type in (pygame.FINGERDOWN, pygame.FINGERUP):
        w, h = window_size
        pos = (event.x * w, event.y * h)
        if event.type == pygame.FINGERUP:
            return tracker.release(pos)
        for name, rect in buttons.items():
            if rect.collidepoint(pos):
                return ButtonPress(name)
        tracker.press(pos)
    return None


# ---------- Draw ----------
def draw_cell(screen: pygame.Surface, gx: int, gy: int, color, inset: int = 1) -> None:
    rect = pygame.Rect(gx * CELL_SIZE + inset, BAR_HEIGHT + gy * CELL_SIZE + inset,
                       CELL_SIZE - 2 * inset, CELL_SIZE - 2 * inset)
    pygame.draw.rect(screen, color, rect, border_radius=3)


def draw_game(screen: pygame.Surface, font: pygame.font.Font, state: GameState,
              settings: Settings, buttons: Dict[str, pygame.Rect]) -> None:
    screen.fill(BG)
    # grid lines
    for x in range(state.grid.cols + 1):
        pygame.draw.line(screen, GRID, (x * CELL_SIZE, BAR_HEIGHT),
                         (x * CELL_SIZE, BAR_HEIGHT + state.grid.rows * CELL_SIZE))
    for y in range(state.grid.rows + 1):
        pygame.draw.line(screen, GRID, (0, BAR_HEIGHT + y * CELL_SIZE),
                         (state.grid.cols * CELL_SIZE, BAR_HEIGHT + y * CELL_SIZE))
    # food
    if state.food is not None:
        draw_cell(screen, state.food[0], state.food[1], FOOD, inset=3)
    # snake, head drawn brighter
    body = settings.color
    head = tuple(min(255, c + 50) for c in body)
    for i, (x, y) in enumerate(state.snake):
        draw_cell(screen, x, y, head if i == 0 else body)
    # score
    txt = font.render(f"Score: {state.score}   {settings.difficulty} / {settings.grid_size}", True, TEXT)
    screen.blit(txt, (8, 6))
    # controls
    for name, rect in buttons.items():
        pygame.draw.rect(screen, BTN, rect, border_radius=6)
        label = BUTTON_LABELS[name]
        if name == "toggle" and not state.is_running:
            label = ">"
        surf = font.render(label, True, TEXT)
        screen.blit(surf, surf.get_rect(center=rect.center))


def draw_overlay(screen: pygame.Surface, font: pygame.font.Font, lines, board_h: int) -> None:
    width = screen.get_width()
    overlay = pygame.Surface((width, board_h), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, BAR_HEIGHT))

    mid = BAR_HEIGHT + board_h // 2 - 16 * (len(lines) - 1)
    for i, line in enumerate(lines):
        surf = font.render(line, True, (240, 240, 250))
        screen.blit(surf, surf.get_rect(center=(width // 2, mid + 32 * i)))


# ---------- Entry point ----------
def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play snake on a wrap-around grid.")
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default="medium")
    parser.add_argument("--grid-size", choices=sorted(GRID_SIZES), default="medium")
    parser.add_argument("--snake-color", choices=sorted(SNAKE_COLORS), default="primary")
    parser.add_argument("--player", default="Player")
    parser.add_argument("--scores-csv", default=None,
                        help="Append a score record here after each game")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = Settings(args.difficulty, args.grid_size, args.snake_color)
    session = GameSession(
        settings,
        on_game_over=make_score_sink(settings, args.player, args.scores_csv),
        seed=args.seed,
    )
    grid = settings.grid()

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    board_h = grid.rows * CELL_SIZE
    size = (max(grid.cols * CELL_SIZE, 300), BAR_HEIGHT + board_h + PAD_HEIGHT)
    screen = pygame.display.set_mode(size)
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    buttons = layout_buttons(size[0], BAR_HEIGHT + board_h)
    tracker = SwipeTracker()
    last_tick = pygame.time.get_ticks()
    running = True

    while running:
        # 1) input
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                running = False
                break
            raw = translate_event(event, tracker, buttons, size)
            if raw is None:
                continue
            was_running = session.state.is_running
            session.dispatch(raw)
            if session.state.is_running and not was_running:
                # resumed: first tick is a full interval away
                last_tick = pygame.time.get_ticks()

        # 2) update, gated on the current interval
        now = pygame.time.get_ticks()
        state = session.state
        if state.is_running and now - last_tick >= state.tick_interval_ms:
            state = session.tick()
            last_tick = now

        # 3) render
        draw_game(screen, font, state, settings, buttons)
        if state.is_over:
            draw_overlay(screen, font, ["GAME OVER", f"Score: {state.score}",
                                        "Space to play again"], board_h)
        elif not state.is_running:
            draw_overlay(screen, font, ["Space to play", "Arrows / swipe to steer"], board_h)
        pygame.display.flip()
        clock.tick(60)  # high FPS; movement gated on tick_interval_ms

    pygame.quit()


if __name__ == "__main__":
    main()
