"""Randomness Sources — injectable observation generators for the collapse engine.

Invariants:
    - next() always returns a float in [0, 1)
    - A seeded source replays the same sequence for the same seed

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass any object with next()
    - LinearCongruentialSource keeps the legacy seeded sequence so recorded
      decisions from earlier clients replay identically
"""

import random
from typing import Protocol


class RandomSource(Protocol):
    """Single-method randomness contract."""
    def next(self) -> float: ...


class UniformRandomSource:
    """Statistically uniform default backed by random.Random."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()


class LinearCongruentialSource:
    """Legacy seeded generator: seed = (seed * 9301 + 49297) % 233280."""

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed: int):
        self._state = seed

    def next(self) -> float:
        self._state = (self._state * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self._state / self.MODULUS
