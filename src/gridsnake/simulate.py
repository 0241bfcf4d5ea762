# simulate.py
from __future__ import annotations
import argparse
import csv
import logging
import os
from typing import Tuple

from .config import DIFFICULTIES, GRID_SIZES, Settings
from .env import SnakeEnv
from .policies import POLICIES


# --------------------------
# Episode loop
# --------------------------
def run_episode(env: SnakeEnv, policy: str, epsilon: float,
                max_steps: int = 10_000) -> Tuple[int, float, int]:
    """
    Run a single autoplay episode.

    Returns:
        steps: number of ticks taken
        total: total return (sum of rewards)
        score: final game score
    """
    try:
        choose = POLICIES[policy]
    except KeyError:
        raise ValueError(f"Unknown policy: {policy}") from None

    obs = env.reset()
    total = 0.0
    steps = 0
    score = 0

    while True:
        a = choose(obs, env, epsilon)
        obs, r, done, info = env.step(a)
        total += r
        steps += 1
        score = info["score"]

        if done or steps >= max_steps:
            break

    return steps, total, score


# --------------------------
# Main
# --------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run headless autoplay episodes.")
    parser.add_argument("--episodes", type=int, default=50)
    parser.add_argument("--policy", type=str, default="greedy", choices=sorted(POLICIES))
    parser.add_argument(
        "--epsilon",
        type=float,
        default=0.1,
        help="epsilon for eps-greedy (ignored otherwise)",
    )
    parser.add_argument("--max-steps", type=int, default=10_000)
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default="medium")
    parser.add_argument("--grid-size", choices=sorted(GRID_SIZES), default="medium")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--outdir",
        type=str,
        default="data/runs",
        help="CSV will be saved here",
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    os.makedirs(args.outdir, exist_ok=True)
    out_csv = os.path.join(args.outdir, f"sim_{args.policy}.csv")

    settings = Settings(difficulty=args.difficulty, grid_size=args.grid_size)
    env = SnakeEnv(settings=settings, seed_value=args.seed)

    print(
        f"Running {args.episodes} episode(s) with "
        f"policy={args.policy} ε={args.epsilon}"
    )
    print("ep,steps,return,score")

    rows = [("ep", "steps", "return", "score")]
    for ep in range(1, args.episodes + 1):
        steps, ret, score = run_episode(env, args.policy, args.epsilon, args.max_steps)
        print(f"{ep},{steps},{ret:.3f},{score}")
        rows.append((ep, steps, float(f"{ret:.6f}"), score))

    with open(out_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)

    print(f"\nSaved results → {out_csv}")
    return out_csv


if __name__ == "__main__":
    main()
