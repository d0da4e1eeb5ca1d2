from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from .pieces import Piece, rotate

if TYPE_CHECKING:
    from .grid import GameGrid


class Move(IntEnum):
    ROTATE = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


class MoveResult(IntEnum):
    VALID = 0
    OUT_OF_BOUNDS = -1
    LOCKED_COLLISION = -2
    # Only returned for Move.DOWN: hit the floor or a locked cell.
    BLOCKED = 1


def apply_move(piece: Piece, move: Move) -> Piece:
    """Return the candidate piece for `move`; the input is left untouched."""
    if move == Move.DOWN:
        return piece.moved(0, 1)
    if move == Move.LEFT:
        return piece.moved(-1, 0)
    if move == Move.RIGHT:
        return piece.moved(1, 0)
    return rotate(piece)


def simulate_move(grid: "GameGrid", piece: Piece, move: Move) -> MoveResult:
    """Test `move` against the board without mutating anything.

    Sideways moves and rotation report the full collision classification.
    A downward move collapses both failures into BLOCKED, which the session
    treats as "lock here".
    """
    result = grid.check_collision(apply_move(piece, move))
    if move == Move.DOWN and result != MoveResult.VALID:
        return MoveResult.BLOCKED
    return result
