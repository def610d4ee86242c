"""
Random Source - The only source of non-determinism in the engine.

Shuffles and exchange draws go through a RandomSource so tests can
seed it and replay exact sequences. random.Random satisfies it.
"""

from __future__ import annotations
import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Minimal interface the engine needs from a random generator."""

    def shuffle(self, x: list) -> None:
        """Permute the list in place, uniformly."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element uniformly."""
        ...


def make_rng(seed: int | None = None) -> random.Random:
    """Create a random source, seeded for determinism when seed is given."""
    return random.Random(seed)


def shuffled(items: Sequence[T], rng: RandomSource) -> list[T]:
    """Return a shuffled copy; the input is left untouched."""
    result = list(items)
    rng.shuffle(result)
    return result
