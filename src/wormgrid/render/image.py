# src/wormgrid/render/image.py
# Render a board to a Pillow image (PNG previews of generated levels).

from typing import Optional, Tuple

from PIL import Image, ImageDraw

from ..geometry import DIR_DELTA, XY
from ..grid import Grid
from ..palette import BOARD_BG, GRID_LINE, darken, unpack_rgb


def _cell_box(x: int, y: int, cell: int, margin: int, inset: int) -> Tuple[int, int, int, int]:
    x0 = margin + x * cell + inset
    y0 = margin + y * cell + inset
    return (x0, y0, x0 + cell - 1 - 2 * inset, y0 + cell - 1 - 2 * inset)


def _center(p: XY, cell: int, margin: int) -> XY:
    return (margin + p[0] * cell + cell // 2, margin + p[1] * cell + cell // 2)


def render_grid(grid: Grid, cell: int = 16, margin: int = 0, highlight: Optional[int] = None) -> Image.Image:
    """
    Draw every worm as a thick polyline over its cells with an arrow-ish
    head marker pointing at its exit. `highlight` outlines one worm in white.
    """
    if cell < 4:
        raise ValueError("cell size must be at least 4 pixels")
    w = grid.width * cell + 2 * margin
    h = grid.height * cell + 2 * margin
    img = Image.new("RGB", (w, h), unpack_rgb(BOARD_BG))
    draw = ImageDraw.Draw(img)

    line = unpack_rgb(GRID_LINE)
    for gx in range(grid.width + 1):
        x = margin + gx * cell
        draw.line([(x, margin), (x, margin + grid.height * cell)], fill=line)
    for gy in range(grid.height + 1):
        y = margin + gy * cell
        draw.line([(margin, y), (margin + grid.width * cell, y)], fill=line)

    body_w = max(2, cell // 2)
    for worm in grid:
        color = unpack_rgb(worm.color)
        pts = [_center(p, cell, margin) for p in worm.cells]
        if len(pts) > 1:
            draw.line(pts, fill=color, width=body_w)
        for p in worm.cells:
            draw.ellipse(_cell_box(p[0], p[1], cell, margin, cell // 4), fill=color)

        # head: darker square with a nub toward the exit
        hx, hy = worm.head
        draw.rectangle(_cell_box(hx, hy, cell, margin, cell // 6), fill=darken(worm.color))
        cx, cy = _center(worm.head, cell, margin)
        dx, dy = DIR_DELTA[worm.direction]
        tip = (cx + dx * (cell // 2 - 1), cy + dy * (cell // 2 - 1))
        draw.line([(cx, cy), tip], fill=(255, 255, 255), width=max(1, cell // 8))

        if highlight == worm.id:
            for p in worm.cells:
                draw.rectangle(_cell_box(p[0], p[1], cell, margin, 0), outline=(255, 255, 255))
    return img


def save_png(grid: Grid, path: str, cell: int = 16, margin: int = 0) -> None:
    render_grid(grid, cell=cell, margin=margin).save(path, format="PNG")
