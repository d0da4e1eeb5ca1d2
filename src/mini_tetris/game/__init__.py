"""Game module for mini-tetris.

Exports the rules engine and the session that drives it:
- TetrominoDef / TETROMINOES: the seven piece templates
- Piece, create_piece, rotate: positioned pieces
- GameGrid: board occupancy, collision, locking and line clearing
- Move, MoveResult, simulate_move: move validation
- TetrisGame: session state machine (NOT_STARTED -> RUNNING -> GAME_OVER)
"""

from .errors import GameNotStartedError, SessionCreationError, TetrisError
from .pieces import TETROMINOES, Piece, TetrominoDef, TetrominoType, create_piece, rotate
from .rules import Move, MoveResult, apply_move, simulate_move
from .grid import GameGrid
from .core import Action, GameConfig, GameStatus, StepResult, TetrisGame

__all__ = [
    "TetrisError",
    "SessionCreationError",
    "GameNotStartedError",
    "TETROMINOES",
    "TetrominoDef",
    "TetrominoType",
    "Piece",
    "create_piece",
    "rotate",
    "Move",
    "MoveResult",
    "apply_move",
    "simulate_move",
    "GameGrid",
    "Action",
    "GameConfig",
    "GameStatus",
    "StepResult",
    "TetrisGame",
]
