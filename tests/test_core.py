import random
import unittest
from unittest import mock

import numpy as np

from mini_tetris.game import (
    Action,
    GameConfig,
    GameNotStartedError,
    GameStatus,
    Move,
    MoveResult,
    SessionCreationError,
    TetrisGame,
    TetrominoType,
)
from mini_tetris.game.core import ACTIVE_CELL

LINE_INDEX = 1


class ScriptedRandom(random.Random):
    """Random source that replays queued piece indices and rotation rolls."""

    def __init__(self, indices, rolls=()):
        super().__init__(0)
        self.indices = list(indices)
        self.rolls = list(rolls)

    def randrange(self, *args, **kwargs):
        return self.indices.pop(0)

    def random(self):
        return self.rolls.pop(0) if self.rolls else 0.99


def started_game(indices, rolls=(0.99,)):
    game = TetrisGame(rng=ScriptedRandom(indices, rolls))
    game.start()
    return game


class CreationTests(unittest.TestCase):
    def test_new_game_is_not_started(self):
        game = TetrisGame()
        self.assertEqual(game.status, GameStatus.NOT_STARTED)
        self.assertIsNone(game.current_piece)
        self.assertEqual(game.get_board().shape, (20, 10))
        self.assertEqual(int(game.get_board().sum()), 0)

    def test_moves_before_start_raise(self):
        game = TetrisGame()
        with self.assertRaises(GameNotStartedError):
            game.simulate(Move.LEFT)
        self.assertFalse(game.step(Action.DOWN).moved)

    def test_invalid_config_fails_creation(self):
        with self.assertRaises(SessionCreationError):
            TetrisGame(GameConfig(width=3))
        with self.assertRaises(SessionCreationError):
            TetrisGame(GameConfig(initial_rotation_chance=1.5))

    def test_allocation_failure_is_reported(self):
        with mock.patch("mini_tetris.game.core.GameGrid", side_effect=MemoryError("no room")):
            with self.assertRaises(SessionCreationError) as ctx:
                TetrisGame()
        self.assertIsInstance(ctx.exception.__cause__, MemoryError)

    def test_spawn_row_must_fit_a_piece(self):
        for spawn_y in (-1, 17, 18):
            with self.assertRaises(SessionCreationError):
                TetrisGame(GameConfig(spawn_y=spawn_y))

    def test_lowest_spawn_row_keeps_rotated_piece_on_board(self):
        game = TetrisGame(GameConfig(spawn_y=16), rng=ScriptedRandom([LINE_INDEX], rolls=[0.0]))
        game.start()
        self.assertEqual(game.grid.check_collision(game.current_piece), MoveResult.VALID)
        self.assertEqual(game.current_piece.cells(), [(3, 16), (3, 17), (3, 18), (3, 19)])


class StartTests(unittest.TestCase):
    def test_start_spawns_centered_piece(self):
        game = started_game([LINE_INDEX])
        self.assertEqual(game.status, GameStatus.RUNNING)
        piece = game.current_piece
        self.assertEqual(piece.kind, TetrominoType.I)
        self.assertEqual((piece.x, piece.y), (3, 0))
        self.assertEqual(piece.cells(), [(3, 0), (4, 0), (5, 0), (6, 0)])

    def test_start_may_rotate_first_piece(self):
        game = started_game([LINE_INDEX], rolls=[0.1])
        self.assertEqual(game.current_piece.cells(), [(3, 0), (3, 1), (3, 2), (3, 3)])

    def test_seeded_start_is_reproducible(self):
        a, b = TetrisGame(), TetrisGame()
        a.start(seed=42)
        b.start(seed=42)
        self.assertEqual(a.current_piece.kind, b.current_piece.kind)
        self.assertTrue(np.array_equal(a.current_piece.shape, b.current_piece.shape))

    def test_restart_clears_board_and_counters(self):
        game = started_game([LINE_INDEX, LINE_INDEX, LINE_INDEX])
        for _ in range(20):
            game.step(Action.DOWN)
        self.assertEqual(game.pieces_locked, 1)
        game.start()
        self.assertEqual(int(game.get_board().sum()), 0)
        self.assertEqual((game.pieces_locked, game.step_count, game.lines_cleared_total), (0, 0, 0))


class MoveTests(unittest.TestCase):
    def test_try_move_commits_valid_shift(self):
        game = started_game([LINE_INDEX])
        self.assertEqual(game.try_move(Move.LEFT), MoveResult.VALID)
        self.assertEqual(game.current_piece.x, 2)
        self.assertEqual(game.try_move(Move.RIGHT), MoveResult.VALID)
        self.assertEqual(game.current_piece.x, 3)

    def test_blocked_shift_changes_nothing(self):
        game = started_game([LINE_INDEX])
        for _ in range(3):
            game.try_move(Move.LEFT)
        self.assertEqual(game.current_piece.x, 0)
        self.assertEqual(game.try_move(Move.LEFT), MoveResult.OUT_OF_BOUNDS)
        self.assertEqual(game.current_piece.x, 0)

    def test_try_move_rotates(self):
        game = started_game([LINE_INDEX])
        self.assertEqual(game.try_move(Move.ROTATE), MoveResult.VALID)
        self.assertEqual(game.current_piece.cells(), [(3, 0), (3, 1), (3, 2), (3, 3)])

    def test_try_move_rejects_down(self):
        game = started_game([LINE_INDEX])
        with self.assertRaises(ValueError):
            game.try_move(Move.DOWN)

    def test_step_reports_move_outcome(self):
        game = started_game([LINE_INDEX])
        result = game.step(Action.RIGHT)
        self.assertTrue(result.moved)
        self.assertEqual(result.result, MoveResult.VALID)
        self.assertFalse(game.step(Action.NONE).moved)
        self.assertEqual(game.step_count, 2)


class StepDownTests(unittest.TestCase):
    def test_step_down_advances_row(self):
        game = started_game([LINE_INDEX])
        outcome = game.step_down()
        self.assertTrue(outcome.moved)
        self.assertFalse(outcome.locked)
        self.assertEqual(game.current_piece.y, 1)

    def test_blocked_step_locks_and_spawns(self):
        game = started_game([LINE_INDEX, 4])
        for _ in range(19):
            self.assertTrue(game.step_down().moved)
        outcome = game.step_down()
        self.assertTrue(outcome.locked)
        self.assertEqual(outcome.result, MoveResult.BLOCKED)
        self.assertEqual(outcome.lines_cleared, 0)
        self.assertFalse(outcome.game_over)
        board = game.get_board()
        self.assertEqual(board[19].tolist(), [0, 0, 0, 1, 1, 1, 1, 0, 0, 0])
        self.assertEqual(game.current_piece.kind, TetrominoType.T)
        self.assertEqual((game.current_piece.x, game.current_piece.y), (3, 0))
        self.assertEqual(game.pieces_locked, 1)
        self.assertEqual(game.status, GameStatus.RUNNING)

    def test_locking_completes_line(self):
        game = started_game([LINE_INDEX, LINE_INDEX])
        game.grid.grid[19] = 1
        game.grid.grid[19, 3:7] = 0
        game.grid.grid[18, 0] = 1
        for _ in range(19):
            game.step_down()
        outcome = game.step_down()
        self.assertEqual(outcome.lines_cleared, 1)
        self.assertEqual(game.lines_cleared_total, 1)
        board = game.get_board()
        self.assertEqual(int(board.sum()), 1)
        self.assertEqual(board[19, 0], 1)

    def test_full_spawn_area_ends_game(self):
        game = started_game([LINE_INDEX, LINE_INDEX])
        game.grid.grid[:4, :9] = 1
        game.current_piece = game.current_piece.moved(0, 19)
        outcome = game.step_down()
        self.assertTrue(outcome.locked)
        self.assertTrue(outcome.game_over)
        self.assertEqual(game.status, GameStatus.GAME_OVER)

        board = game.get_board()
        after = game.step(Action.LEFT)
        self.assertFalse(after.moved)
        self.assertTrue(after.game_over)
        self.assertFalse(game.step_down().locked)
        self.assertTrue(np.array_equal(game.get_board(), board))

    def test_locked_top_band_ends_game(self):
        game = started_game([LINE_INDEX, LINE_INDEX])
        game.current_piece = game.current_piece.moved(0, 19)
        game.grid.grid[:4] = 1
        game.grid.grid[19, 0] = 1
        # Keep the band in place through the lock so the spawn lands on it
        with mock.patch.object(game.grid, "clear_lines", return_value=0):
            outcome = game.step_down()
        self.assertTrue(outcome.locked)
        self.assertTrue(outcome.game_over)
        self.assertEqual(game.status, GameStatus.GAME_OVER)
        self.assertEqual(game.current_piece.cells(), [(3, 0), (4, 0), (5, 0), (6, 0)])
        self.assertEqual(int(game.get_board()[:4].sum()), 40)

    def test_full_top_band_is_cleared_before_spawning(self):
        game = started_game([LINE_INDEX, LINE_INDEX])
        game.current_piece = game.current_piece.moved(0, 19)
        game.grid.grid[:4] = 1
        outcome = game.step_down()
        self.assertEqual(outcome.lines_cleared, 4)
        self.assertFalse(outcome.game_over)
        self.assertEqual(game.status, GameStatus.RUNNING)

    def test_moves_after_game_over_report_nothing(self):
        game = started_game([LINE_INDEX, LINE_INDEX])
        game.grid.grid[:4, :9] = 1
        game.current_piece = game.current_piece.moved(0, 19)
        game.step_down()
        self.assertTrue(game.game_over)
        piece = game.current_piece
        for move in (Move.LEFT, Move.RIGHT, Move.ROTATE):
            self.assertIsNone(game.try_move(move))
        self.assertIs(game.current_piece, piece)
        self.assertEqual(game.simulate(Move.RIGHT), MoveResult.LOCKED_COLLISION)


class LoggingTests(unittest.TestCase):
    def test_spawns_are_logged_at_debug(self):
        with self.assertLogs("mini_tetris.game.core", level="DEBUG") as logs:
            started_game([LINE_INDEX])
        self.assertTrue(any("Spawning I at (3, 0)" in line for line in logs.output))


class StateTests(unittest.TestCase):
    def test_state_overlays_active_piece(self):
        game = started_game([LINE_INDEX])
        game.grid.grid[19, 0] = 1
        state = game.get_state()
        self.assertEqual(state[0, 3:7].tolist(), [ACTIVE_CELL] * 4)
        self.assertEqual(state[19, 0], 1)
        self.assertEqual(int(game.get_board()[0].sum()), 0)


if __name__ == "__main__":
    unittest.main()
