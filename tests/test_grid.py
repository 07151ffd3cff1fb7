import unittest

import numpy as np

from tetris_rl.game import ActivePiece, GameGrid, TetrominoType, clear_full_rows, is_legal, lock


def empty_board(width=10, height=20):
    return np.zeros((height, width), dtype=np.int8)


class CollisionTests(unittest.TestCase):
    def test_o_piece_spawn_above_board_is_legal(self):
        self.assertTrue(is_legal(empty_board(), TetrominoType.O, 0, 4, -2))

    def test_walls_and_floor_are_illegal(self):
        board = empty_board()
        # O occupies frame columns 0-1, rows 0-1
        self.assertFalse(is_legal(board, TetrominoType.O, 0, -1, 5))
        self.assertFalse(is_legal(board, TetrominoType.O, 0, 9, 5))
        self.assertFalse(is_legal(board, TetrominoType.O, 0, 4, 19))
        self.assertTrue(is_legal(board, TetrominoType.O, 0, 8, 18))

    def test_empty_frame_cells_may_leave_the_board(self):
        board = empty_board()
        # I at rotation 0 only fills frame row 1; rows 2-3 may hang below the floor
        self.assertTrue(is_legal(board, TetrominoType.I, 0, 0, 18))
        self.assertFalse(is_legal(board, TetrominoType.I, 0, 0, 19))
        # vertical I fills frame column 2 only
        self.assertTrue(is_legal(board, TetrominoType.I, 1, -2, 0))
        self.assertFalse(is_legal(board, TetrominoType.I, 1, -3, 0))

    def test_occupied_cells_collide(self):
        board = empty_board()
        board[10, 5] = int(TetrominoType.Z)
        self.assertFalse(is_legal(board, TetrominoType.O, 0, 4, 9))
        self.assertTrue(is_legal(board, TetrominoType.O, 0, 6, 9))

    def test_cells_above_top_ignore_occupancy(self):
        board = empty_board()
        board[0, :] = 1
        self.assertTrue(is_legal(board, TetrominoType.O, 0, 4, -2))
        self.assertFalse(is_legal(board, TetrominoType.O, 0, 4, -1))

    def test_is_legal_does_not_mutate(self):
        board = empty_board()
        before = board.copy()
        is_legal(board, TetrominoType.T, 2, 3, 3)
        np.testing.assert_array_equal(board, before)


class LockAndClearTests(unittest.TestCase):
    def test_lock_writes_kind_and_skips_hidden_rows(self):
        board = empty_board()
        out = lock(board, ActivePiece(TetrominoType.O, 0, 4, -1))
        self.assertEqual(int(np.count_nonzero(out)), 2)
        self.assertEqual(out[0, 4], int(TetrominoType.O))
        self.assertEqual(out[0, 5], int(TetrominoType.O))
        self.assertEqual(int(np.count_nonzero(board)), 0)

    def test_no_full_rows_is_a_noop(self):
        board = empty_board()
        board[19, :9] = 3
        out, count = clear_full_rows(board)
        self.assertEqual(count, 0)
        np.testing.assert_array_equal(out, board)

    def test_clear_compacts_and_preserves_order(self):
        board = empty_board(4, 6)
        board[5, :] = 1          # full
        board[4, 0] = 2          # partial
        board[3, :] = 3          # full
        board[2, 1] = 4          # partial
        out, count = clear_full_rows(board)
        self.assertEqual(count, 2)
        self.assertEqual(out.shape, (6, 4))
        self.assertFalse(out[:2].any())
        np.testing.assert_array_equal(out[5], [2, 0, 0, 0])
        np.testing.assert_array_equal(out[4], [0, 4, 0, 0])
        self.assertEqual(int(np.count_nonzero(out)), int(np.count_nonzero(board)) - 2 * 4)

    def test_adjacent_full_rows_all_clear(self):
        board = empty_board(4, 6)
        board[2:6, :] = 5
        board[1, 3] = 6
        out, count = clear_full_rows(board)
        self.assertEqual(count, 4)
        self.assertEqual(out[5, 3], 6)
        self.assertEqual(int(np.count_nonzero(out)), 1)

    def test_lock_then_clear_never_exceeds_four_rows(self):
        board = empty_board(4, 8)
        board[:, :2] = 1
        board[:, 3] = 1
        out = lock(board, ActivePiece(TetrominoType.I, 1, 0, 4))
        out, count = clear_full_rows(out)
        self.assertEqual(count, 4)


class GameGridTests(unittest.TestCase):
    def test_grid_helpers(self):
        grid = GameGrid(10, 20)
        self.assertEqual(grid.get_max_height(), 0)
        grid.lock(ActivePiece(TetrominoType.O, 0, 0, 18))
        self.assertEqual(grid.filled_cells(), 4)
        self.assertEqual(grid.get_max_height(), 2)
        self.assertEqual(grid.count_holes(), 0)
        grid.grid[15, 5] = 1
        self.assertEqual(grid.count_holes(), 4)
        self.assertTrue(grid.is_legal(TetrominoType.O, 0, 2, 18))
        self.assertFalse(grid.fits(ActivePiece(TetrominoType.O, 0, 1, 18)))

    def test_grid_clear_full_rows(self):
        grid = GameGrid(4, 4)
        grid.grid[3, :] = 2
        grid.grid[2, 0] = 1
        self.assertEqual(grid.clear_full_rows(), 1)
        self.assertEqual(grid.grid[3, 0], 1)
        self.assertEqual(grid.filled_cells(), 1)
        grid.reset()
        self.assertEqual(grid.filled_cells(), 0)


if __name__ == "__main__":
    unittest.main()
