from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from .errors import GameNotStartedError, SessionCreationError
from .grid import GameGrid
from .pieces import TETROMINOES, Piece, create_piece, rotate
from .rules import Move, MoveResult, simulate_move

logger = logging.getLogger(__name__)


class GameStatus(IntEnum):
    NOT_STARTED = 0
    RUNNING = 1
    GAME_OVER = 2


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    DOWN = 3
    NONE = 4


ACTION_TO_MOVE = {
    Action.LEFT: Move.LEFT,
    Action.RIGHT: Move.RIGHT,
    Action.ROTATE: Move.ROTATE,
}

# Observation value for cells of the falling piece.
ACTIVE_CELL = 2


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0
    initial_rotation_chance: float = 0.5

    def validate(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if not 0.0 <= self.initial_rotation_chance <= 1.0:
            raise ValueError("initial_rotation_chance must be within [0, 1]")
        if not 0 <= self.spawn_y <= self.height - 4:
            raise ValueError(f"spawn_y must be within [0, {self.height - 4}], got {self.spawn_y}")


@dataclass
class StepResult:
    action: Action
    result: Optional[MoveResult] = None
    moved: bool = False
    locked: bool = False
    lines_cleared: int = 0
    game_over: bool = False


class TetrisGame:
    """One game session: the board, the falling piece and the run status.

    Every move is simulated on a copy of the piece first; the stored piece and
    board only change once the simulation comes back VALID (or BLOCKED for a
    downward step, which locks the piece).
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        try:
            self.config.validate()
            self.grid = GameGrid(self.config.width, self.config.height)
        except (ValueError, MemoryError) as exc:
            raise SessionCreationError(f"cannot create game: {exc}") from exc
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.status = GameStatus.NOT_STARTED
        self.current_piece: Optional[Piece] = None
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.step_count = 0

    @property
    def spawn_x(self) -> int:
        return self.grid.width // 2 - 2

    @property
    def game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    def start(self, seed: Optional[int] = None) -> None:
        """Clear the board and spawn the first piece; also used to restart."""
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.step_count = 0
        piece = self._random_piece()
        if self.rng.random() < self.config.initial_rotation_chance:
            piece = rotate(piece)
        self.current_piece = piece
        self.status = GameStatus.RUNNING
        logger.info("Game started (seed=%s, first piece %s)", seed, piece.kind.name)

    def _random_piece(self) -> Piece:
        definition = TETROMINOES[self.rng.randrange(len(TETROMINOES))]
        logger.debug("Spawning %s at (%d, %d)", definition.kind.name, self.spawn_x, self.config.spawn_y)
        return create_piece(definition, self.spawn_x, self.config.spawn_y)

    def _active_piece(self) -> Piece:
        if self.current_piece is None:
            raise GameNotStartedError("start() must be called before moving pieces")
        return self.current_piece

    def simulate(self, move: Move) -> MoveResult:
        return simulate_move(self.grid, self._active_piece(), move)

    def try_move(self, move: Move) -> Optional[MoveResult]:
        """Shift or rotate the piece if the simulation allows it.

        Failed attempts leave the session untouched. Returns None once the
        game is over, since nothing is attempted. Use `step_down` for
        downward moves.
        """
        if move == Move.DOWN:
            raise ValueError("downward moves go through step_down()")
        piece = self._active_piece()
        if self.status != GameStatus.RUNNING:
            return None
        result = simulate_move(self.grid, piece, move)
        if result == MoveResult.VALID:
            if move == Move.ROTATE:
                self.current_piece = rotate(piece)
            else:
                dx = -1 if move == Move.LEFT else 1
                self.current_piece = piece.moved(dx, 0)
        return result

    def step_down(self) -> StepResult:
        """Advance one row, or lock, clear lines and spawn when blocked."""
        if self.status != GameStatus.RUNNING:
            return StepResult(Action.DOWN, game_over=self.game_over)
        piece = self._active_piece()
        result = simulate_move(self.grid, piece, Move.DOWN)
        if result == MoveResult.VALID:
            self.current_piece = piece.moved(0, 1)
            return StepResult(Action.DOWN, result, moved=True)

        self.grid.lock_piece(piece)
        self.pieces_locked += 1
        lines = self.grid.clear_lines()
        self.lines_cleared_total += lines
        logger.debug("Locked %s at (%d, %d), cleared %d line(s)", piece.kind.name, piece.x, piece.y, lines)

        self.current_piece = self._random_piece()
        if simulate_move(self.grid, self.current_piece, Move.DOWN) != MoveResult.VALID:
            self.status = GameStatus.GAME_OVER
            logger.info(
                "Game over after %d piece(s), %d line(s) cleared",
                self.pieces_locked,
                self.lines_cleared_total,
            )
        return StepResult(
            Action.DOWN,
            result,
            locked=True,
            lines_cleared=lines,
            game_over=self.game_over,
        )

    def step(self, action: Action) -> StepResult:
        if self.status != GameStatus.RUNNING:
            return StepResult(action, game_over=self.game_over)
        self.step_count += 1
        if action == Action.DOWN:
            return self.step_down()
        if action == Action.NONE:
            return StepResult(action)
        result = self.try_move(ACTION_TO_MOVE[action])
        return StepResult(action, result, moved=result == MoveResult.VALID)

    def get_board(self) -> np.ndarray:
        return self.grid.clone_state()

    def get_state(self) -> np.ndarray:
        # Overlay the falling piece on a copy of the board
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    state[y, x] = ACTIVE_CELL
        return state
