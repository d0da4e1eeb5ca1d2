"""Gymnasium environments for mini-tetris."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="MiniTetris-v0",
    entry_point="mini_tetris.env.tetris_env:TetrisEnv",
)

__all__ = ["MiniTetris-v0"]
