# src/wormgrid/engine/raycast.py
# Straight-line exit checks shared by the generator (peel) and gameplay (removal).
# A ray starts one cell past `start` and walks until it leaves the board or
# meets a worm the caller's predicate counts as blocking.

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Sequence

from ..geometry import XY, Direction, DIR_DELTA
from ..grid import EMPTY, Grid, Worm, WormState

BlockingPredicate = Callable[[Worm], bool]


def walk_ray(grid: Grid, start: XY, direction: Direction) -> Iterator[XY]:
    """Cells after `start` in `direction`, up to the board edge (exclusive)."""
    dx, dy = DIR_DELTA[direction]
    x, y = start[0] + dx, start[1] + dy
    while grid.is_valid(x, y):
        yield (x, y)
        x += dx
        y += dy


def first_blocker(grid: Grid, start: XY, direction: Direction, blocks: BlockingPredicate) -> Optional[int]:
    """Id of the first worm on the ray for which `blocks` is true, else None."""
    for x, y in walk_ray(grid, start, direction):
        wid = grid.buf[grid.idx(x, y)]
        if wid == EMPTY:
            continue
        if blocks(grid.worms[wid]):
            return wid
    return None


def self_blocked(grid: Grid, cells: Sequence[XY], direction: Direction) -> bool:
    """True if the ray from cells[0] re-enters one of `cells` before the edge."""
    body = set(cells[1:])
    return any(p in body for p in walk_ray(grid, cells[0], direction))


# ---------- Predicates ----------

def present_except(transparent_id: int) -> BlockingPredicate:
    """Gameplay: every worm still on the board blocks, except `transparent_id`."""
    def blocks(worm: Worm) -> bool:
        return worm.id != transparent_id
    return blocks


def unassigned_except(subject_id: int) -> BlockingPredicate:
    """Generation: only worms not yet peeled block; peeled ones are transparent."""
    def blocks(worm: Worm) -> bool:
        return worm.id != subject_id and worm.state is WormState.UNASSIGNED
    return blocks


def obstruction(grid: Grid, x: int, y: int, direction: Direction, transparent_id: int = EMPTY) -> List[int]:
    wid = first_blocker(grid, (x, y), direction, present_except(transparent_id))
    return [] if wid is None else [wid]
