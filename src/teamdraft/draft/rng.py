"""Deterministic random source used for draft tie-breaking."""

from __future__ import annotations

import random
from typing import Optional

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2 ** 32


class SeededRandom:
    """Linear congruential generator producing floats in ``[0, 1)``.

    One instance belongs to one run. Without a seed the starting state comes from
    system entropy and results are not reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        if seed is None:
            self.state = random.SystemRandom().randrange(_MODULUS)
        else:
            self.state = seed % _MODULUS
        self.draws = 0

    @property
    def seeded(self) -> bool:
        return self.seed is not None

    def next(self) -> float:
        self.state = (self.state * _MULTIPLIER + _INCREMENT) % _MODULUS
        self.draws += 1
        return self.state / _MODULUS

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r}, draws={self.draws})"
