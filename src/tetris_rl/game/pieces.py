from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray

FRAME = 4

_SOURCE_SHAPES: Dict[TetrominoType, Tuple[str, ...]] = {
    TetrominoType.I: ("....", "XXXX", "....", "...."),
    TetrominoType.J: ("X..", "XXX", "..."),
    TetrominoType.L: ("..X", "XXX", "..."),
    TetrominoType.O: ("XX", "XX"),
    TetrominoType.S: (".XX", "XX.", "..."),
    TetrominoType.T: (".X.", "XXX", "..."),
    TetrominoType.Z: ("XX.", ".XX", "..."),
}


def _to_frame(rows: Tuple[str, ...]) -> Shape:
    # Smaller shapes sit in the top-left corner of the 4x4 frame
    frame = np.zeros((FRAME, FRAME), dtype=np.bool_)
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            frame[r, c] = ch == "X"
    frame.setflags(write=False)
    return frame


def rotate(shape: Shape, times: int) -> Shape:
    """Rotate a 4x4 frame clockwise ``times`` quarter turns.

    The whole frame turns, so pieces smaller than 4x4 pivot around the frame
    center rather than their own bounding box. There are no wall kicks.
    """
    cur = np.rot90(np.asarray(shape, dtype=np.bool_), times % 4, axes=(1, 0)).copy()
    cur.setflags(write=False)
    return cur


BASE_SHAPES: Dict[TetrominoType, Shape] = {kind: _to_frame(rows) for kind, rows in _SOURCE_SHAPES.items()}

_ROTATIONS: Dict[Tuple[TetrominoType, int], Shape] = {
    (kind, r): rotate(base, r) for kind, base in BASE_SHAPES.items() for r in range(4)
}


def shape_of(kind: int) -> Shape:
    return BASE_SHAPES[TetrominoType(kind)]


def rotated_shape(kind: int, rotation: int) -> Shape:
    return _ROTATIONS[(TetrominoType(kind), rotation % 4)]


def piece_cells(kind: int, rotation: int, x: int, y: int) -> List[Tuple[int, int]]:
    """Board (col, row) coordinates of the occupied frame cells."""
    s = rotated_shape(kind, rotation)
    cells: List[Tuple[int, int]] = []
    for dy in range(FRAME):
        for dx in range(FRAME):
            if s[dy, dx]:
                cells.append((x + dx, y + dy))
    return cells


@dataclass(frozen=True)
class ActivePiece:
    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: int = 0
    y: int = 0

    def shape(self) -> Shape:
        return rotated_shape(self.kind, self.rotation)

    def rotated(self, delta: int) -> "ActivePiece":
        return ActivePiece(self.kind, (self.rotation + delta) % 4, self.x, self.y)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.kind, self.rotation, self.x + dx, self.y + dy)

    def cells(self) -> List[Tuple[int, int]]:
        return piece_cells(self.kind, self.rotation, self.x, self.y)
