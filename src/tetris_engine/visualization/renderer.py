from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from tetris_engine.game import GameSnapshot, PieceView
from tetris_engine.game.shapes import color_for


BACKGROUND = (10, 10, 14)
EMPTY_CELL = (30, 30, 36)
FLASH = (255, 255, 255)
TEXT = (230, 230, 230)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY_CELL
    color = pygame.Color(color_for(v))
    return color.r, color.g, color.b


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.font = pygame.font.SysFont(None, 28)

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        side_panel = 6 * self.cell_size
        return (cols * self.cell_size + side_panel + self.margin * 3,
                rows * self.cell_size + self.margin * 2)

    def _cell_rect(self, x: int, y: int, ox: int, oy: int) -> pygame.Rect:
        return pygame.Rect(
            ox + x * self.cell_size,
            oy + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, cells: np.ndarray, pending) -> pygame.Surface:
        h, w = cells.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(EMPTY_CELL)
        for y in range(h):
            for x in range(w):
                v = int(cells[y, x])
                # Rows waiting for compaction flash white
                color = FLASH if v and y in pending else _color_for_value(v)
                pygame.draw.rect(surf, color, self._cell_rect(x, y, 0, 0))
        return surf

    def _draw_piece(self, screen: pygame.Surface, piece: PieceView, ox: int, oy: int) -> None:
        color = pygame.Color(piece.color)
        rows, cols = np.nonzero(piece.shape)
        for r, c in zip(rows, cols):
            y = piece.y + int(r)
            if y < 0:
                continue
            pygame.draw.rect(screen, color, self._cell_rect(piece.x + int(c), y, ox, oy))

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(snapshot.cells, snapshot.pending_rows), (self.margin, self.margin))
        if snapshot.active is not None:
            self._draw_piece(screen, snapshot.active, self.margin, self.margin)

        # Side panel: next piece preview and score
        panel_x = self.margin * 2 + snapshot.cells.shape[1] * self.cell_size
        label = self.font.render("Next", True, TEXT)
        screen.blit(label, (panel_x, self.margin))
        preview = PieceView(snapshot.next.kind, snapshot.next.shape, 0, 0, snapshot.next.color)
        self._draw_piece(screen, preview, panel_x, self.margin + 30)
        score = self.font.render(f"Score: {snapshot.score}", True, TEXT)
        screen.blit(score, (panel_x, self.margin + 30 + 5 * self.cell_size))

        if snapshot.paused or snapshot.game_over:
            msg = "Paused - P to resume" if snapshot.paused else "Game Over - Enter to restart"
            text = self.font.render(msg, True, FLASH)
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
