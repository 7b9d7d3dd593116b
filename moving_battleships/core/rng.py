"""Seeded deterministic random source used by the AI and test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

_T = TypeVar("_T")

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 0x100000000


class SeededRng:
    """32-bit linear congruential generator.

    Mirrors the subset of the ``random.Random`` API the game code uses, so
    identical seeds replay identical AI decisions on every platform.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed % _MODULUS

    @property
    def state(self) -> int:
        return self._state

    def random(self) -> float:
        """Return the next float in ``[0, 1)``."""
        self._state = (_MULTIPLIER * self._state + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def randrange(self, stop: int) -> int:
        """Return an integer in ``[0, stop)``."""
        if stop <= 0:
            raise ValueError("stop must be positive")
        return int(self.random() * stop)

    def choice(self, items: Sequence[_T]) -> _T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.randrange(len(items))]
