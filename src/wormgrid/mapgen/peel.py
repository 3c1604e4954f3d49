# src/wormgrid/mapgen/peel.py
# Phase 2: give every worm an exit direction so the board is clearable.
#
# Worms are assigned one at a time, outside in. A worm may take a direction
# only if its exit ray is clear of every worm that is still UNASSIGNED;
# already-assigned worms are transparent because the player will have removed
# them by then. The first worm assigned is free on the full board, so the
# assignment order doubles as a valid removal order: peeling the onion from
# the outside in is the same walk the player takes.
# Each worm may also be flipped (tail becomes head), giving 8 candidates.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..engine.raycast import first_blocker, self_blocked, unassigned_except
from ..geometry import ALL_DIRECTIONS, Direction
from ..grid import Grid, Worm, WormState
from ..rng import PMRandom

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    id: int
    direction: Direction
    reversed: bool


def find_exit(grid: Grid, worm: Worm, rng: PMRandom) -> Optional[Assignment]:
    """First free (orientation, direction) for `worm`, trying both ends as head."""
    orientations = (
        (worm.cells, False),
        (worm.cells[::-1], True),
    )
    blocks = unassigned_except(worm.id)
    for cells, flipped in orientations:
        for d in rng.shuffle(ALL_DIRECTIONS):
            if self_blocked(grid, cells, d):
                continue
            if first_blocker(grid, cells[0], d, blocks) is None:
                return Assignment(worm.id, d, flipped)
    return None


def assign_directions(grid: Grid, rng: PMRandom) -> Optional[List[Assignment]]:
    """
    Peel the board. On success every worm is flipped/pointed per its
    Assignment, set to PRESENT, and the assignments are returned in
    assignment order. Returns None when some set of worms blocks itself;
    the grid is then left half-assigned and should be thrown away.
    """
    for worm in grid:
        worm.state = WormState.UNASSIGNED
    remaining = list(grid.worms)
    assignments: List[Assignment] = []

    while remaining:
        found = None
        for wid in remaining:
            found = find_exit(grid, grid.worms[wid], rng)
            if found is not None:
                break
        if found is None:
            logger.debug("peel stuck: %d of %d worms have no exit", len(remaining), len(grid))
            return None
        assignments.append(found)
        grid.worms[found.id].state = WormState.ASSIGNED
        remaining.remove(found.id)

    for a in assignments:
        worm = grid.worms[a.id]
        if a.reversed:
            worm.flip()
        worm.direction = a.direction
        worm.state = WormState.PRESENT
    return assignments


def removal_order(assignments: Sequence[Assignment]) -> List[int]:
    return [a.id for a in assignments]
