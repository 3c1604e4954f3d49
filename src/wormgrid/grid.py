from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from .geometry import XY, Direction

EMPTY = -1


class WormState(Enum):
    # generation
    UNASSIGNED = "unassigned"
    ASSIGNED = "assigned"
    # play
    PRESENT = "present"
    REMOVED = "removed"


@dataclass
class Worm:
    id: int
    color: int
    cells: List[XY] = field(default_factory=list)  # cells[0] is the HEAD
    direction: Direction = Direction.UP
    state: WormState = WormState.PRESENT

    @property
    def head(self) -> XY:
        return self.cells[0]

    def __len__(self) -> int:
        return len(self.cells)

    def flip(self) -> None:
        """Swap head and tail."""
        self.cells.reverse()


@dataclass
class Grid:
    """
    Occupancy-indexed board. `buf[y*width + x]` holds the owning worm id or
    EMPTY; `worms` holds every live worm by id.
    """
    width: int
    height: int
    buf: List[int] = field(default_factory=list)
    worms: Dict[int, Worm] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("grid dimensions must be positive")
        if not self.buf:
            self.buf = [EMPTY] * (self.width * self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def is_valid(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def id_at(self, x: int, y: int) -> int:
        if not self.is_valid(x, y):
            return EMPTY
        return self.buf[self.idx(x, y)]

    def worm_at(self, x: int, y: int) -> Optional[Worm]:
        wid = self.id_at(x, y)
        return self.worms.get(wid) if wid != EMPTY else None

    def is_empty(self, x: int, y: int) -> bool:
        # Out of bounds is never empty.
        return self.is_valid(x, y) and self.buf[self.idx(x, y)] == EMPTY

    def add_worm(self, worm: Worm) -> None:
        assert worm.id not in self.worms, f"duplicate worm id {worm.id}"
        for x, y in worm.cells:
            assert self.is_empty(x, y), f"cell {(x, y)} unavailable for worm {worm.id}"
        self.worms[worm.id] = worm
        for x, y in worm.cells:
            self.buf[self.idx(x, y)] = worm.id

    def remove_worm(self, wid: int) -> Optional[Worm]:
        worm = self.worms.pop(wid, None)
        if worm is None:
            return None
        for x, y in worm.cells:
            self.buf[self.idx(x, y)] = EMPTY
        # Ray queries only see worms still in `worms`; the detached one keeps this mark.
        worm.state = WormState.REMOVED
        return worm

    def empty_cells(self) -> List[XY]:
        return [(x, y) for y in range(self.height) for x in range(self.width)
                if self.buf[self.idx(x, y)] == EMPTY]

    def occupied_count(self) -> int:
        return sum(1 for v in self.buf if v != EMPTY)

    def density(self) -> float:
        return self.occupied_count() / self.area

    def __iter__(self) -> Iterator[Worm]:
        return iter(self.worms.values())

    def __len__(self) -> int:
        return len(self.worms)

    def as_matrix(self) -> List[List[int]]:
        return [self.buf[y * self.width:(y + 1) * self.width] for y in range(self.height)]
