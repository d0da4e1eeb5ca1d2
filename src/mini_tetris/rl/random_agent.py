from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

import gymnasium as gym

import mini_tetris.env  # noqa: F401


def run_random(steps: int = 2000, seed: Optional[int] = None) -> Tuple[float, int]:
    """Play random actions; returns (total lines cleared, finished episodes)."""
    env = gym.make("MiniTetris-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_lines = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_lines += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    return total_lines, episodes


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level)
    lines, episodes = run_random(args.steps, args.seed)
    print(f"Random agent: {lines:.0f} lines cleared over {episodes} finished episode(s)")


if __name__ == "__main__":  # pragma: no cover
    main()
