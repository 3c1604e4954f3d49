# src/wormgrid/mapgen/fill.py
# Phase 1: cover the board with worm-shaped random walks (shape only, no direction).

from itertools import count
from typing import Iterator, List, Optional, Set

from ..config import GeneratorConfig
from ..geometry import XY, ALL_DIRECTIONS, step
from ..grid import Grid, Worm, WormState
from ..palette import pick_color
from ..rng import PMRandom


def grow_body(grid: Grid, start: XY, length: int, rng: PMRandom) -> List[XY]:
    """
    Random walk from `start` for up to `length` cells.
    Each step tries the four directions in shuffled order and takes the first
    one that stays on the board, lands on an empty cell and does not revisit
    the walk; if none does, the walk stops short.
    """
    cells = [start]
    seen: Set[XY] = {start}
    cur = start
    for _ in range(1, length):
        for d in rng.shuffle(ALL_DIRECTIONS):
            nxt = step(cur, d)
            if grid.is_empty(*nxt) and nxt not in seen:
                cells.append(nxt)
                seen.add(nxt)
                cur = nxt
                break
        else:
            break
    return cells


def fill_grid(
    grid: Grid,
    rng: PMRandom,
    config: GeneratorConfig,
    ids: Optional[Iterator[int]] = None,
) -> int:
    """
    Place worms until density reaches config.target_density, the board has
    no empty cell, or config.max_fill_attempts placements were tried.
    Walks shorter than config.min_worm_len are dropped. Worms are added with a
    placeholder direction in state UNASSIGNED. Returns the number placed.
    """
    if ids is None:
        ids = count(max(grid.worms, default=-1) + 1)

    placed = 0
    empty = grid.empty_cells()
    attempts = 0
    while attempts < config.max_fill_attempts:
        attempts += 1
        occupied = grid.area - len(empty)
        if occupied / grid.area >= config.target_density or not empty:
            break

        start = rng.choice(empty)
        length = rng.randint(config.min_worm_len, config.max_worm_len)
        color = pick_color(rng)
        cells = grow_body(grid, start, length, rng)
        if len(cells) < config.min_worm_len:
            continue

        grid.add_worm(Worm(id=next(ids), color=color, cells=cells, state=WormState.UNASSIGNED))
        placed += 1
        # Emptiness only changes on commit.
        empty = grid.empty_cells()
    return placed
