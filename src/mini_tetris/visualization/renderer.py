from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from mini_tetris.game.core import ACTIVE_CELL
from mini_tetris.game.pieces import Piece, TetrominoType


def _color_for_kind(kind: TetrominoType) -> Tuple[int, int, int]:
    palette = {
        TetrominoType.O: (240, 240, 0),
        TetrominoType.I: (0, 240, 240),
        TetrominoType.Z: (240, 0, 0),
        TetrominoType.S: (0, 240, 0),
        TetrominoType.T: (160, 0, 240),
        TetrominoType.J: (0, 0, 240),
        TetrominoType.L: (240, 160, 0),
    }
    return palette.get(kind, (200, 200, 200))


LOCKED_COLOR = (70, 120, 220)
EMPTY_COLOR = (20, 20, 26)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return width * self.cell_size + self.margin * 2, height * self.cell_size + self.margin * 2

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)

    def _grid_surface(self, state: np.ndarray, piece: Optional[Piece]) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        active = _color_for_kind(piece.kind) if piece is not None else (200, 200, 200)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v == ACTIVE_CELL:
                    color = active
                elif v:
                    color = LOCKED_COLOR
                else:
                    color = EMPTY_COLOR
                pygame.draw.rect(surf, color, self._cell_rect(x, y))
        return surf

    def draw(self, screen: pygame.Surface, state: np.ndarray, piece: Optional[Piece] = None) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state, piece), (self.margin, self.margin))
