# src/wormgrid/engine/state.py
# GameState: the caller-facing surface. Owns the live board, the level's
# initial snapshot, and the removal order the generator proved works.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import DEFAULTS, GeneratorConfig
from ..geometry import Direction
from ..grid import EMPTY, Grid
from ..mapgen.generator import generate_level
from ..rng import PMRandom
from ..snapshot import LevelSnapshot, SnapshotError, capture, hydrate
from .raycast import obstruction as _obstruction

logger = logging.getLogger(__name__)

REMOVED = "removed"
BLOCKED = "blocked"
NOT_FOUND = "not_found"


@dataclass
class RemoveResult:
    ok: bool
    reason: str
    blockers: List[int] = field(default_factory=list)


class GameState:
    def __init__(
        self,
        width: int,
        height: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[PMRandom] = None,
        config: GeneratorConfig = DEFAULTS,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        self.width = width
        self.height = height
        self.config = config
        if rng is None:
            rng = PMRandom(seed if seed is not None else 1)
        self.rng = rng

        self.grid = Grid(width, height)
        self.solution: List[int] = []
        self.moves = 0
        self._initial: Optional[LevelSnapshot] = None

    # ---- Generation ----
    def generate(self, target_density: Optional[float] = None, min_worm_count: Optional[int] = None) -> bool:
        """
        Replace the board with a freshly generated, guaranteed-clearable level.
        False means every retry failed; the previous board is kept and the
        caller may simply try again.
        """
        cfg = self.config.with_overrides(target_density=target_density, min_worm_count=min_worm_count)
        result = generate_level(self.width, self.height, self.rng, cfg)
        if result is None:
            return False
        self.grid = result.grid
        self.solution = list(result.removal_order)
        self.moves = 0
        self._initial = capture(self.grid)
        return True

    # ---- Play ----
    def obstruction(self, x: int, y: int, direction: Direction, transparent_id: int = EMPTY) -> List[int]:
        """Ids blocking a ray from (x, y); empty when the path leaves the board."""
        return _obstruction(self.grid, x, y, Direction(direction), transparent_id)

    def try_remove(self, wid: int) -> RemoveResult:
        worm = self.grid.worms.get(wid)
        if worm is None:
            return RemoveResult(ok=False, reason=NOT_FOUND)
        blockers = self.obstruction(worm.head[0], worm.head[1], worm.direction, wid)
        if blockers:
            return RemoveResult(ok=False, reason=BLOCKED, blockers=blockers)
        self.grid.remove_worm(wid)
        self.moves += 1
        return RemoveResult(ok=True, reason=REMOVED)

    def is_free(self, wid: int) -> bool:
        worm = self.grid.worms.get(wid)
        if worm is None:
            return False
        return not self.obstruction(worm.head[0], worm.head[1], worm.direction, wid)

    def free_worms(self) -> List[int]:
        return [wid for wid in sorted(self.grid.worms) if self.is_free(wid)]

    def hint(self) -> Optional[int]:
        """A worm that can be removed now, preferring the generator's order."""
        for wid in self.solution:
            if self.is_free(wid):
                return wid
        free = self.free_worms()
        return free[0] if free else None

    def is_cleared(self) -> bool:
        return len(self.grid) == 0

    # ---- Snapshots ----
    def snapshot(self) -> Optional[LevelSnapshot]:
        """The level as it was generated or imported, untouched by play."""
        return self._initial

    def restore(self, snap: LevelSnapshot) -> bool:
        """
        Replace dimensions and board with `snap`. Fails without touching the
        current board if the snapshot is malformed.
        """
        try:
            snap = LevelSnapshot.from_dict(snap.to_dict())
            grid = hydrate(snap)
        except SnapshotError as e:
            logger.warning("rejected level snapshot: %s", e)
            return False
        self.width, self.height = snap.width, snap.height
        self.grid = grid
        self.solution = []
        self.moves = 0
        self._initial = snap
        return True

    def reset_level(self) -> bool:
        """Start the current level over from its initial snapshot."""
        if self._initial is None:
            return False
        solution = self.solution
        ok = self.restore(self._initial)
        self.solution = solution
        return ok

    def export_json(self, indent=None) -> Optional[str]:
        if self._initial is None:
            return None
        return self._initial.to_json(indent=indent)

    def import_json(self, text: str) -> bool:
        try:
            snap = LevelSnapshot.from_json(text)
        except SnapshotError as e:
            logger.warning("rejected level import: %s", e)
            return False
        if not self.restore(snap):
            return False
        logger.info("imported %dx%d level with %d worms", snap.width, snap.height, len(snap.worms))
        return True
