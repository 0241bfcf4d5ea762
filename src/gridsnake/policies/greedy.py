# policies/greedy.py
import numpy as np # type: ignore

from ..config import UP, DOWN, LEFT, RIGHT, Direction
from ..env import ACTIONS, left_of, right_of, wrapped_delta


def best_move_toward_food(hx: int, hy: int, fx: int, fy: int, cols: int, rows: int):
    """
    Returns a preference ordering of moves that shorten the wrapped
    Manhattan distance to food, followed by the remaining moves.
    Does NOT check collisions; caller should filter unsafe moves.
    """
    prefs = []
    dx = wrapped_delta(hx, fx, cols)
    dy = wrapped_delta(hy, fy, rows)
    if dx < 0:
        prefs.append(LEFT)
    elif dx > 0:
        prefs.append(RIGHT)
    if dy < 0:
        prefs.append(UP)
    elif dy > 0:
        prefs.append(DOWN)
    for d in (UP, DOWN, LEFT, RIGHT):
        if d not in prefs:
            prefs.append(d)
    return prefs  # length 4


def dir_to_action(direction: Direction) -> int:
    """Map a Direction to the env action id."""
    for a, d in ACTIONS.items():
        if d == direction:
            return a
    raise ValueError(f"Unknown direction {direction}")


def decode_obs(obs: np.ndarray):
    """
    Matches env.observe() layout (9 dims):
    [hx_n, hy_n, fx_n, fy_n, dx, dy, danger_ahead, danger_left, danger_right]
    """
    hx_n, hy_n, fx_n, fy_n, dx, dy, dan_f, dan_l, dan_r = obs.tolist()
    return hx_n, hy_n, fx_n, fy_n, int(dx), int(dy), bool(dan_f), bool(dan_l), bool(dan_r)


def policy_greedy(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Greedy on wrapped food distance with simple safety:
    - prefer actions that reduce distance
    - avoid any move flagged dangerous if possible
    - the backwards move is never chosen (the engine would ignore it)
    - if every move is dangerous, keep going forward
    """
    hx_n, hy_n, fx_n, fy_n, dx, dy, dan_f, dan_l, dan_r = decode_obs(obs)
    cols, rows = env.state.grid.cols, env.state.grid.rows

    # Convert normalized to grid ints
    hx = int(round(hx_n * max(cols - 1, 1)))
    hy = int(round(hy_n * max(rows - 1, 1)))
    fx = int(round(fx_n * max(cols - 1, 1)))
    fy = int(round(fy_n * max(rows - 1, 1)))

    forward = Direction((dx, dy))
    danger_map = {
        dir_to_action(forward): dan_f,
        dir_to_action(left_of(forward)): dan_l,
        dir_to_action(right_of(forward)): dan_r,
    }

    for d in best_move_toward_food(hx, hy, fx, fy, cols, rows):
        a = dir_to_action(d)
        if a in danger_map and not danger_map[a]:
            return a

    return dir_to_action(forward)
