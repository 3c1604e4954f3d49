# src/wormgrid/render/board.py
from __future__ import annotations

from typing import Iterable, Optional, Tuple

import pygame

from ..geometry import DIR_DELTA, XY
from ..grid import Grid
from ..palette import BOARD_BG, GRID_LINE, darken, unpack_rgb

BLOCKER_OUTLINE = (255, 80, 80)
HINT_OUTLINE = (255, 255, 255)


def board_size(grid: Grid, cell: int) -> Tuple[int, int]:
    return (grid.width * cell, grid.height * cell)


def cell_at(px: int, py: int, cell: int) -> XY:
    """Screen pixel -> board cell (may be off-board; caller checks)."""
    return (px // cell, py // cell)


def draw_board(
    surface: "pygame.Surface",
    grid: Grid,
    cell: int,
    *,
    hint: Optional[int] = None,
    blockers: Iterable[int] = (),
) -> None:
    """
    Paint the board onto `surface` at (0,0). Blocking worms get a red outline,
    the hinted worm a white one. Pure drawing; needs no display.
    """
    surface.fill(unpack_rgb(BOARD_BG))
    line = unpack_rgb(GRID_LINE)
    w, h = board_size(grid, cell)
    for gx in range(grid.width + 1):
        pygame.draw.line(surface, line, (gx * cell, 0), (gx * cell, h))
    for gy in range(grid.height + 1):
        pygame.draw.line(surface, line, (0, gy * cell), (w, gy * cell))

    blockers = set(blockers)
    for worm in grid:
        color = unpack_rgb(worm.color)
        centers = [(x * cell + cell // 2, y * cell + cell // 2) for x, y in worm.cells]
        if len(centers) > 1:
            pygame.draw.lines(surface, color, False, centers, max(2, cell // 2))
        for c in centers:
            pygame.draw.circle(surface, color, c, max(1, cell // 4))

        hx, hy = worm.head
        head_rect = pygame.Rect(hx * cell + cell // 6, hy * cell + cell // 6, cell - cell // 3, cell - cell // 3)
        pygame.draw.rect(surface, darken(worm.color), head_rect)
        dx, dy = DIR_DELTA[worm.direction]
        cx, cy = centers[0]
        pygame.draw.line(surface, (255, 255, 255), (cx, cy),
                         (cx + dx * (cell // 2 - 1), cy + dy * (cell // 2 - 1)), max(1, cell // 8))

        outline = None
        if worm.id in blockers:
            outline = BLOCKER_OUTLINE
        elif worm.id == hint:
            outline = HINT_OUTLINE
        if outline is not None:
            for x, y in worm.cells:
                pygame.draw.rect(surface, outline, pygame.Rect(x * cell, y * cell, cell, cell), 1)
