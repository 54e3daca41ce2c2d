from __future__ import annotations

import numpy as np

from detevo import Solution
from detevo.operators import crossover, mutation

# 100 points on [0, pi/2) where the cubic is compared with sin(x)
TEST_POINTS = np.arange(0.0, np.pi / 2, np.pi / 200)


class SineApprox(Solution):
    """Cubic ``a + bx + cx^2 + dx^3`` fitted to sine on ``[0, pi/2)``.

    Fitness is the negated mean absolute error over ``TEST_POINTS``.
    """

    def __init__(self, coefficients: np.ndarray):
        self.coefficients = np.asarray(coefficients, dtype=np.float64)

    def apply(self, x: np.ndarray) -> np.ndarray:
        return np.polynomial.polynomial.polyval(x, self.coefficients)

    @classmethod
    def generate(cls, rng: np.random.Generator) -> SineApprox:
        return cls(rng.uniform(0.0, 1.0, size=4))

    def evaluate(self) -> float:
        return -float(np.mean(np.abs(self.apply(TEST_POINTS) - np.sin(TEST_POINTS))))

    @classmethod
    def crossover(cls, a: SineApprox, b: SineApprox, rng: np.random.Generator) -> None:
        crossover.one_point(a.coefficients, b.coefficients, rng)

    def mutate(self, rng: np.random.Generator) -> None:
        mutation.gaussian(self.coefficients, 0.5, 0.1, rng)

    def clone(self) -> SineApprox:
        return SineApprox(self.coefficients.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SineApprox):
            return NotImplemented
        return bool(np.array_equal(self.coefficients, other.coefficients))

    __hash__ = None

    def __repr__(self) -> str:
        a, b, c, d = self.coefficients
        return f"SineApprox({a:.3f} + {b:.3f}x + {c:.3f}x² + {d:.3f}x³)"
