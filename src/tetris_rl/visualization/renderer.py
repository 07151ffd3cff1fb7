from __future__ import annotations

from typing import Optional, Tuple

import pygame

from tetris_rl.game import GameSnapshot, rotated_shape


def color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (0, 0, 240),    # J
        3: (240, 160, 0),  # L
        4: (240, 240, 0),  # O
        5: (0, 240, 0),    # S
        6: (160, 0, 240),  # T
        7: (240, 0, 0),    # Z
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            self.margin * 3 + (width + self.panel_cells) * self.cell_size,
            self.margin * 2 + height * self.cell_size,
        )

    def _cell_rect(self, x: int, y: int, ox: int = 0, oy: int = 0) -> pygame.Rect:
        return pygame.Rect(
            ox + x * self.cell_size,
            oy + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        board = snapshot.board
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, color_for_value(int(board[y, x])), self._cell_rect(x, y))
        if snapshot.active is not None:
            color = color_for_value(int(snapshot.active.kind))
            for x, y in snapshot.active.cells():
                if 0 <= y < h and 0 <= x < w:
                    pygame.draw.rect(surf, color, self._cell_rect(x, y))
        return surf

    def _draw_panel(self, screen: pygame.Surface, snapshot: GameSnapshot, paused: bool) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        h, w = snapshot.board.shape
        x0 = self.margin * 2 + w * self.cell_size
        y0 = self.margin
        info_lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines_cleared}",
            "Next:",
        ]
        for i, txt in enumerate(info_lines):
            img = self._font.render(txt, True, (230, 230, 230))
            screen.blit(img, (x0, y0 + i * 22))
        shape = rotated_shape(snapshot.next_kind, 0)
        color = color_for_value(int(snapshot.next_kind))
        oy = y0 + len(info_lines) * 22 + 6
        for py in range(shape.shape[0]):
            for px in range(shape.shape[1]):
                if shape[py, px]:
                    pygame.draw.rect(screen, color, self._cell_rect(px, py, x0, oy))
        status = None
        if snapshot.game_over:
            status = "Game Over - R restart, ESC quit"
        elif paused:
            status = "PAUSED - P to resume"
        if status is not None:
            img = self._font.render(status, True, (255, 100, 100))
            screen.blit(img, (x0, oy + 5 * self.cell_size))

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot, paused: bool = False) -> None:
        grid_surf = self._grid_surface(snapshot)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, snapshot, paused)
        pygame.display.flip()
