from __future__ import annotations

from typing import List

from tetris_rl.game import GameSnapshot, rotated_shape

PIECE_CHARS = "@#%*+xo"


def piece_char(value: int) -> str:
    if value <= 0:
        return " "
    return PIECE_CHARS[(value - 1) % len(PIECE_CHARS)]


def render_text(snapshot: GameSnapshot) -> str:
    """Draw the board framed by a border, with the status line and next piece."""
    board = snapshot.board
    h, w = board.shape
    rows: List[List[str]] = [[piece_char(int(board[y, x])) for x in range(w)] for y in range(h)]
    if snapshot.active is not None:
        ch = piece_char(int(snapshot.active.kind))
        for x, y in snapshot.active.cells():
            if 0 <= y < h and 0 <= x < w:
                rows[y][x] = ch

    lines = ["+" + "-" * w + "+"]
    lines.extend("|" + "".join(r) + "|" for r in rows)
    lines.append("+" + "-" * w + "+")
    lines.append(f"Score: {snapshot.score}  Level: {snapshot.level}  Lines: {snapshot.lines_cleared}")
    lines.append("Next:")
    nxt = rotated_shape(snapshot.next_kind, 0)
    ch = piece_char(int(snapshot.next_kind))
    for r in range(nxt.shape[0]):
        lines.append("".join(ch if nxt[r, c] else " " for c in range(nxt.shape[1])).rstrip())
    if snapshot.game_over:
        lines.append(f"GAME OVER! Final Score: {snapshot.score}")
    return "\n".join(lines)


def print_board(snapshot: GameSnapshot) -> None:
    print(render_text(snapshot))
