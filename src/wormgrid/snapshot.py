"""
Level snapshots: the immutable record of a level as generated (or imported),
and its JSON wire form

    {"v": 1, "w": W, "h": H,
     "worms": [{"id": 0, "cells": [{"x": 0, "y": 0}, ...], "dir": 0, "color": 0xF87171}]}

`cells` is head first; `dir` uses the Direction codes (0=UP 1=DOWN 2=LEFT 3=RIGHT).
Decoding validates the whole payload before anything is built, so a bad
snapshot never leaves a half-loaded board behind.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Set, Tuple

from .geometry import XY, Direction, is_adjacent
from .grid import Grid, Worm, WormState

SNAPSHOT_VERSION = 1
# Largest board a snapshot may describe; hydrate allocates one slot per cell.
MAX_SIDE = 1024


class SnapshotError(ValueError):
    """A snapshot payload is missing fields or describes an impossible board."""


@dataclass(frozen=True)
class WormRecord:
    id: int
    cells: Tuple[XY, ...]
    direction: Direction
    color: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cells": [{"x": x, "y": y} for x, y in self.cells],
            "dir": int(self.direction),
            "color": self.color,
        }


@dataclass(frozen=True)
class LevelSnapshot:
    width: int
    height: int
    worms: Tuple[WormRecord, ...]
    version: int = SNAPSHOT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "v": self.version,
            "w": self.width,
            "h": self.height,
            "worms": [r.to_dict() for r in self.worms],
        }

    def to_json(self, indent=None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Any) -> "LevelSnapshot":
        snap = _decode(data)
        validate(snap)
        return snap

    @classmethod
    def from_json(cls, text: str) -> "LevelSnapshot":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"not valid JSON: {e}") from e
        return cls.from_dict(data)

    @property
    def cell_count(self) -> int:
        return sum(len(r.cells) for r in self.worms)


# ---------- Grid <-> snapshot ----------

def capture(grid: Grid) -> LevelSnapshot:
    """Freeze the current board. Later play does not affect the result."""
    records = tuple(
        WormRecord(id=w.id, cells=tuple(w.cells), direction=Direction(w.direction), color=w.color)
        for w in sorted(grid, key=lambda w: w.id)
    )
    return LevelSnapshot(width=grid.width, height=grid.height, worms=records)


def hydrate(snap: LevelSnapshot) -> Grid:
    """Build a fresh Grid from a (validated) snapshot."""
    grid = Grid(snap.width, snap.height)
    for r in snap.worms:
        grid.add_worm(Worm(id=r.id, color=r.color, cells=list(r.cells),
                           direction=r.direction, state=WormState.PRESENT))
    return grid


# ---------- Decoding / validation ----------

def _require_int(obj: Dict[str, Any], key: str, where: str) -> int:
    if key not in obj:
        raise SnapshotError(f"{where}: missing '{key}'")
    v = obj[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(v, bool) or not isinstance(v, int):
        raise SnapshotError(f"{where}: '{key}' must be an integer")
    return v


def _decode(data: Any) -> LevelSnapshot:
    if not isinstance(data, dict):
        raise SnapshotError("snapshot must be a JSON object")
    version = data.get("v", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"unsupported snapshot version {version!r}")
    width = _require_int(data, "w", "level")
    height = _require_int(data, "h", "level")
    if "worms" not in data:
        raise SnapshotError("level: missing 'worms'")
    if not isinstance(data["worms"], list):
        raise SnapshotError("level: 'worms' must be a list")

    records: List[WormRecord] = []
    for i, wd in enumerate(data["worms"]):
        where = f"worm[{i}]"
        if not isinstance(wd, dict):
            raise SnapshotError(f"{where}: must be an object")
        wid = _require_int(wd, "id", where)
        dir_code = _require_int(wd, "dir", where)
        color = _require_int(wd, "color", where)
        try:
            direction = Direction(dir_code)
        except ValueError:
            raise SnapshotError(f"{where}: unknown dir {dir_code}") from None
        raw_cells = wd.get("cells")
        if not isinstance(raw_cells, list):
            raise SnapshotError(f"{where}: 'cells' must be a list")
        cells: List[XY] = []
        for c in raw_cells:
            if not isinstance(c, dict):
                raise SnapshotError(f"{where}: each cell must be an object with x and y")
            cells.append((_require_int(c, "x", where), _require_int(c, "y", where)))
        records.append(WormRecord(id=wid, cells=tuple(cells), direction=direction, color=color))
    return LevelSnapshot(width=width, height=height, worms=tuple(records), version=version)


def validate(snap: LevelSnapshot) -> None:
    """Raise SnapshotError unless the snapshot describes a legal board."""
    if snap.width <= 0 or snap.height <= 0:
        raise SnapshotError(f"bad dimensions {snap.width}x{snap.height}")
    if snap.width > MAX_SIDE or snap.height > MAX_SIDE:
        raise SnapshotError(f"board {snap.width}x{snap.height} exceeds {MAX_SIDE} cells per side")
    ids: Set[int] = set()
    owner: Dict[XY, int] = {}
    for r in snap.worms:
        if r.id < 0:
            raise SnapshotError(f"worm {r.id}: negative id")
        if r.id in ids:
            raise SnapshotError(f"worm {r.id}: duplicate id")
        ids.add(r.id)
        if not r.cells:
            raise SnapshotError(f"worm {r.id}: no cells")
        if not (0 <= r.color <= 0xFFFFFF):
            raise SnapshotError(f"worm {r.id}: color out of range")
        prev = None
        for x, y in r.cells:
            if not (0 <= x < snap.width and 0 <= y < snap.height):
                raise SnapshotError(f"worm {r.id}: cell {(x, y)} out of bounds")
            if (x, y) in owner:
                other = owner[(x, y)]
                what = "repeats a cell" if other == r.id else f"overlaps worm {other}"
                raise SnapshotError(f"worm {r.id}: {what} at {(x, y)}")
            if prev is not None and not is_adjacent(prev, (x, y)):
                raise SnapshotError(f"worm {r.id}: body broken between {prev} and {(x, y)}")
            owner[(x, y)] = r.id
            prev = (x, y)
