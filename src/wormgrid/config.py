from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GeneratorConfig:
    # Fraction of cells Phase 1 tries to cover before it stops placing worms.
    target_density: float = 0.95
    # Reject peelable layouts with fewer worms than this (0 = no floor).
    min_worm_count: int = 0
    # Full fill+peel attempts before giving up.
    max_retries: int = 10000
    # Worm placement attempts per fill.
    max_fill_attempts: int = 5000
    min_worm_len: int = 5
    max_worm_len: int = 8
    # Also discard attempts whose fill stalled under target_density.
    strict_density: bool = False

    def __post_init__(self) -> None:
        if not (0.0 <= self.target_density <= 1.0):
            raise ValueError("target_density must be within 0..1")
        if self.min_worm_count < 0:
            raise ValueError("min_worm_count must be non-negative")
        if self.max_retries < 1 or self.max_fill_attempts < 1:
            raise ValueError("retry and fill caps must be positive")
        if not (1 <= self.min_worm_len <= self.max_worm_len):
            raise ValueError("worm length range must satisfy 1 <= min <= max")

    def with_overrides(self, **overrides) -> "GeneratorConfig":
        """Copy with the non-None overrides applied (validated again)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


# Defaults (can be swapped by launcher)
DEFAULTS = GeneratorConfig()
