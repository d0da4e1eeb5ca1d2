"""Minimal falling-block puzzle engine with gymnasium and pygame front ends."""

from mini_tetris.game import Action, GameConfig, GameStatus, TetrisGame

__version__ = "0.1.0"

__all__ = ["Action", "GameConfig", "GameStatus", "TetrisGame", "__version__"]
