# src/wormgrid/mapgen/generator.py
# Level generator: fill shapes, then peel directions; on any failure throw the
# whole board away and start over (no partial backtracking).

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import count
from typing import List, Optional

from ..config import DEFAULTS, GeneratorConfig
from ..grid import Grid
from ..rng import PMRandom, seed_from_index
from .fill import fill_grid
from .peel import Assignment, assign_directions, removal_order

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    grid: Grid
    assignments: List[Assignment]
    seed: int           # attempt seed; generate_attempt(w, h, seed, config) rebuilds this level
    attempts: int = 1   # attempts spent by the retry loop, this one included
    removal_order: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.removal_order:
            self.removal_order = removal_order(self.assignments)

    @property
    def worm_count(self) -> int:
        return len(self.grid)

    @property
    def density(self) -> float:
        return self.grid.density()


def generate_attempt(
    width: int,
    height: int,
    seed: int,
    config: GeneratorConfig = DEFAULTS,
) -> Optional[GenerationResult]:
    """One fill+peel pass on a brand new grid. None if it must be discarded."""
    rng = PMRandom(seed)
    grid = Grid(width, height)
    fill_grid(grid, rng, config, ids=count())

    density = grid.density()
    logger.debug("fill seed=%d: %d worms, density %.1f%%", seed, len(grid), density * 100)
    if config.strict_density and density < config.target_density:
        logger.debug("fill seed=%d stalled below target %.2f", seed, config.target_density)
        return None

    if config.min_worm_count and len(grid) < config.min_worm_count:
        logger.debug("seed=%d: %d worms < required %d", seed, len(grid), config.min_worm_count)
        return None
    assignments = assign_directions(grid, rng)
    if assignments is None:
        return None
    return GenerationResult(grid=grid, assignments=assignments, seed=seed)


def generate_level(
    width: int,
    height: int,
    rng: PMRandom,
    config: GeneratorConfig = DEFAULTS,
) -> Optional[GenerationResult]:
    """
    Retry generate_attempt until one succeeds or config.max_retries is spent. Exhaustion returns None; callers
    should offer a retry rather than treat it as fatal.

    One draw from `rng` picks a base; attempt i uses seed_from_index(base, i).
    A min_worm_count that cannot fit the board at min_worm_len returns None at once.
    """
    if width <= 0 or height <= 0:
        raise ValueError("grid dimensions must be positive")
    if config.min_worm_count * config.min_worm_len > width * height:
        # No fill can hold that many worms.
        logger.warning(
            "%d worms of length >= %d cannot fit a %dx%d board",
            config.min_worm_count, config.min_worm_len, width, height,
        )
        return None
    base = rng.next32()
    for attempt in range(1, config.max_retries + 1):
        seed = seed_from_index(base, attempt - 1)
        result = generate_attempt(width, height, seed, config)
        if result is not None:
            result.attempts = attempt
            logger.info(
                "generated %dx%d level: %d worms, density %.1f%%, attempt %d (seed %d)",
                width, height, result.worm_count, result.density * 100, attempt, result.seed,
            )
            return result
    logger.warning("generation failed after %d attempts (%dx%d)", config.max_retries, width, height)
    return None
