from dataclasses import dataclass
from typing import List, Sequence, TypeVar

T = TypeVar("T")

A = 16807
M = 0x7FFFFFFF  # 2^31-1


def pm_next(state: int) -> int:
    return (state * A) % M


def normalize_seed(seed: int) -> int:
    # 0 (and any multiple of M) is a fixed point of the recurrence.
    s = seed % M
    return s if s else 1


@dataclass
class PMRandom:
    """
    Park–Miller minimal standard generator.

    Every generation attempt owns one of these; nothing in the package
    touches the global `random` state, so a seed reproduces a level exactly.
    """
    state: int

    def __post_init__(self) -> None:
        self.state = normalize_seed(self.state)

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def below(self, n: int) -> int:
        """Uniform-ish int in 0..n-1."""
        assert n > 0
        return self.next32() % n

    def bounded(self, n: int) -> int:
        """Int in 1..n inclusive."""
        return self.below(n) + 1

    def randint(self, lo: int, hi: int) -> int:
        assert lo <= hi
        return lo + self.below(hi - lo + 1)

    def choice(self, items: Sequence[T]) -> T:
        return items[self.below(len(items))]

    def shuffle(self, items: Sequence[T]) -> List[T]:
        # Fisher–Yates on a copy
        out = list(items)
        for i in range(len(out) - 1, 0, -1):
            j = self.below(i + 1)
            out[i], out[j] = out[j], out[i]
        return out


PACK_OFFSET = 0x0FCDD36


def seed_from_index(base_seed: int, index: int) -> int:
    """
    Seed number `index` derived from a base (pack levels, retry attempts).

    Closed form K = base + index, seed = (A*K + PACK_OFFSET) mod M, so
    neighbouring indices do not share a shifted copy of one stream.
    """
    k = base_seed + index
    return normalize_seed((A * k + PACK_OFFSET) % M)
