from __future__ import annotations

import numpy as np

from .pieces import PIECE_SIZE, Piece
from .rules import MoveResult


class GameGrid:
    """Fixed-size board of locked cells.

    Cells hold 0 (empty) or 1 (locked); no piece identity is kept. Row 0 is
    the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_locked(self, x: int, y: int) -> bool:
        return bool(self.grid[y, x])

    def check_collision(self, piece: Piece) -> MoveResult:
        """Classify a piece position against the board.

        Cells are scanned row-major; the first offending active cell decides
        the result, bounds being tested before occupancy.
        """
        for py in range(PIECE_SIZE):
            for px in range(PIECE_SIZE):
                if not piece.shape[py, px]:
                    continue
                x = piece.x + px
                y = piece.y + py
                if not self.is_inside(x, y):
                    return MoveResult.OUT_OF_BOUNDS
                if self.grid[y, x] != 0:
                    return MoveResult.LOCKED_COLLISION
        return MoveResult.VALID

    def lock_piece(self, piece: Piece) -> int:
        """Mark the piece's cells as locked and return how many were written.

        Out-of-bounds cells are skipped silently.
        """
        written = 0
        for x, y in piece.cells():
            if self.is_inside(x, y):
                self.grid[y, x] = 1
                written += 1
        return written

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def clear_lines(self) -> int:
        """Remove full rows and compact the rest downward in one bottom-up pass."""
        cleared = 0
        for y in range(self.height - 1, -1, -1):
            if self.is_row_full(y):
                cleared += 1
            elif cleared > 0:
                self.grid[y + cleared] = self.grid[y]
        if cleared:
            self.grid[:cleared] = 0
        return cleared

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
