"""Seeded linear congruential float stream."""
from __future__ import annotations

_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280


class LinearCongruentialRandom:
    """Tiny LCG whose draw order defines the whole layout.

    The recurrence is fixed for the lifetime of a run; callers must draw in a
    documented order to keep layouts reproducible from the seed.
    """

    def __init__(self, seed: int) -> None:
        self._state = abs(int(seed))

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS
