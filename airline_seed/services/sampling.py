"""
Random sampling and batching helpers shared by the seeding stages.
"""

import random
from typing import Iterator, List, Sequence, Tuple, TypeVar

from ..errors import SeedingError

T = TypeVar("T")


def sample(items: Sequence[T], rng: random.Random) -> T:
    """Pick one element uniformly at random."""
    if not items:
        raise SeedingError("cannot sample from an empty pool")
    return items[rng.randrange(len(items))]


def sample_other(items: Sequence[T], exclude: T, rng: random.Random, max_attempts: int = 100) -> T:
    """
    Pick an element different from ``exclude`` by rejection sampling.

    Raises:
        SeedingError: If no distinct element was drawn within max_attempts
    """
    for _ in range(max_attempts):
        candidate = sample(items, rng)
        if candidate != exclude:
            return candidate
    raise SeedingError(
        f"no element distinct from {exclude!r} after {max_attempts} attempts "
        f"(pool size {len(items)})"
    )


def sample_unique(items: Sequence[T], count: int, rng: random.Random) -> List[T]:
    """Pick up to ``count`` distinct elements, capped at the pool size."""
    return rng.sample(list(items), min(count, len(items)))


def batch_ranges(total: int, size: int) -> Iterator[Tuple[int, int]]:
    """
    Yield half-open (start, end) offsets covering ``total`` items in batches.

    >>> list(batch_ranges(5, 2))
    [(0, 2), (2, 4), (4, 5)]
    """
    if size < 1:
        raise ValueError("batch size must be at least 1")
    for start in range(0, total, size):
        yield start, min(total, start + size)
