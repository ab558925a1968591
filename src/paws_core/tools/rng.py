"""
Randomness port for paws-core.

Every roll, draw and variance goes through an injected Rng. ``random.Random``
satisfies the protocol; tests pass a seeded instance or a scripted stand-in.
"""

import random
from typing import Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Rng(Protocol):
    """Minimal random source used by the systems."""

    def random(self) -> float:
        """Float in [0.0, 1.0)."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence."""
        ...


def make_rng(seed: int | None = None) -> random.Random:
    """Build a PRNG. Pass a seed for reproducible runs."""
    return random.Random(seed)


def roll(rng: Rng, probability: float) -> bool:
    """True with the given probability."""
    return rng.random() < probability


def uniform(rng: Rng, low: float, high: float) -> float:
    """Float in [low, high) drawn through the port's ``random()``."""
    return low + rng.random() * (high - low)


def weighted_choice(rng: Rng, items: Sequence[T], weights: Sequence[float]) -> T | None:
    """
    Draw one item with probability proportional to its weight.

    Returns None when there is nothing to draw from.
    """
    total = sum(weights)
    if not items or total <= 0:
        return None

    draw = rng.random() * total
    for item, weight in zip(items, weights):
        draw -= weight
        if draw <= 0:
            return item

    # Float residue on the last bucket
    return items[-1]
