from __future__ import annotations

from typing import Tuple

import numpy as np

from .pieces import FRAME, ActivePiece, rotated_shape


def is_legal(board: np.ndarray, kind: int, rotation: int, x: int, y: int) -> bool:
    """Whether a piece fits on ``board`` with its frame anchored at (x, y).

    Cells above the top edge (row < 0) only need to be inside the side walls;
    they are never tested against occupancy so pieces can spawn half hidden.
    """
    height, width = board.shape
    s = rotated_shape(kind, rotation)
    for r in range(FRAME):
        for c in range(FRAME):
            if not s[r, c]:
                continue
            row = y + r
            col = x + c
            if col < 0 or col >= width or row >= height:
                return False
            if row >= 0 and board[row, col] != 0:
                return False
    return True


def lock(board: np.ndarray, piece: ActivePiece) -> np.ndarray:
    """Return a copy of ``board`` with ``piece`` written into it.

    No legality check happens here; only cells at row >= 0 are written.
    """
    out = board.copy()
    height, width = out.shape
    value = int(piece.kind)
    for col, row in piece.cells():
        if 0 <= row < height and 0 <= col < width:
            out[row, col] = value
    return out


def clear_full_rows(board: np.ndarray) -> Tuple[np.ndarray, int]:
    full_rows = np.where(np.all(board != 0, axis=1))[0]
    if full_rows.size == 0:
        return board.copy(), 0
    num = int(full_rows.size)
    # Remove full rows and add empty rows at the top
    kept = np.delete(board, full_rows, axis=0)
    new_rows = np.zeros((num, board.shape[1]), dtype=board.dtype)
    return np.vstack((new_rows, kept)), num


class GameGrid:
    """Discrete 2D board for the falling pieces.

    The grid uses 0 for empty cells and the ``TetrominoType`` value of the
    piece that filled a cell otherwise. Row 0 is the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_legal(self, kind: int, rotation: int, x: int, y: int) -> bool:
        return is_legal(self.grid, kind, rotation, x, y)

    def fits(self, piece: ActivePiece) -> bool:
        return is_legal(self.grid, piece.kind, piece.rotation, piece.x, piece.y)

    def lock(self, piece: ActivePiece) -> None:
        self.grid = lock(self.grid, piece)

    def clear_full_rows(self) -> int:
        self.grid, lines = clear_full_rows(self.grid)
        return lines

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
