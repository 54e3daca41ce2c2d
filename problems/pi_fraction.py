from __future__ import annotations

import math

import numpy as np

from detevo import Solution

TARGET = math.pi
MAX_TERM = 100_000_000


class PiFraction(Solution):
    """Integer fraction ``numerator / denominator`` approximating pi."""

    def __init__(self, numerator: int, denominator: int):
        self.numerator = int(numerator)
        self.denominator = int(denominator)
        self._normalize()

    def _normalize(self) -> None:
        g = math.gcd(self.numerator, self.denominator)
        if g > 1:
            self.numerator //= g
            self.denominator //= g

    def value(self) -> float:
        return self.numerator / self.denominator

    @classmethod
    def generate(cls, rng: np.random.Generator) -> PiFraction:
        return cls(rng.integers(1, MAX_TERM), rng.integers(1, MAX_TERM))

    def evaluate(self) -> float:
        return -abs(self.value() - TARGET)

    @classmethod
    def crossover(cls, a: PiFraction, b: PiFraction, rng: np.random.Generator) -> None:
        num_lo, num_hi = sorted((a.numerator, b.numerator))
        den_lo, den_hi = sorted((a.denominator, b.denominator))
        for child in (a, b):
            child.numerator = int(rng.integers(num_lo, num_hi, endpoint=True))
            child.denominator = int(rng.integers(den_lo, den_hi, endpoint=True))
            child._normalize()

    def mutate(self, rng: np.random.Generator) -> None:
        multiplier = int(rng.integers(1, 3, endpoint=True))
        self.numerator = self.numerator * multiplier + multiplier
        self.denominator = self.denominator * multiplier + multiplier
        self._normalize()

    def clone(self) -> PiFraction:
        return PiFraction(self.numerator, self.denominator)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PiFraction):
            return NotImplemented
        return (self.numerator, self.denominator) == (other.numerator, other.denominator)

    __hash__ = None

    def __repr__(self) -> str:
        return f"PiFraction({self.numerator}/{self.denominator})"
