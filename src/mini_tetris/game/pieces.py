from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    O = 1
    I = 2
    Z = 3
    S = 4
    T = 5
    J = 6
    L = 7


Shape = np.ndarray

PIECE_SIZE = 4


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class TetrominoDef:
    """Immutable 4x4 template, active cells packed into the top-left corner."""

    kind: TetrominoType
    shape: Shape


TETROMINOES: Tuple[TetrominoDef, ...] = (
    TetrominoDef(TetrominoType.O, _frozen([[0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]])),
    TetrominoDef(TetrominoType.I, _frozen([[1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])),
    TetrominoDef(TetrominoType.Z, _frozen([[1, 1, 0, 0], [0, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]])),
    TetrominoDef(TetrominoType.S, _frozen([[0, 1, 1, 0], [1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])),
    TetrominoDef(TetrominoType.T, _frozen([[0, 1, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]])),
    TetrominoDef(TetrominoType.J, _frozen([[1, 0, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]])),
    TetrominoDef(TetrominoType.L, _frozen([[0, 0, 1, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]])),
)


@dataclass(frozen=True, eq=False)
class Piece:
    """A positioned copy of a tetromino; (x, y) is the board cell of shape[0, 0]."""

    kind: TetrominoType
    shape: Shape = field(repr=False)
    x: int = 0
    y: int = 0

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, self.shape, self.x + dx, self.y + dy)

    def rotated(self) -> "Piece":
        return rotate(self)

    def cells(self) -> List[Tuple[int, int]]:
        """Board (x, y) of every active cell, in row-major order."""
        cells: List[Tuple[int, int]] = []
        for dy in range(PIECE_SIZE):
            for dx in range(PIECE_SIZE):
                if self.shape[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells


def create_piece(definition: TetrominoDef, x: int, y: int) -> Piece:
    # No validation; callers simulate before committing.
    return Piece(definition.kind, definition.shape.copy(), int(x), int(y))


def rotate(piece: Piece) -> Piece:
    """Anti-clockwise quarter turn inside the 4x4 box: out[3 - col][row] = in[row][col].

    The origin is left where it is; there is no wall-kick compensation.
    """
    shape = np.rot90(piece.shape, 1).copy()
    return Piece(piece.kind, shape, piece.x, piece.y)
