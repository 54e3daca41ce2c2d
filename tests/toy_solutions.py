"""Small Solution implementations used across the tests."""

from __future__ import annotations

import numpy as np

from detevo import Individual, Population, Solution


class Scalar(Solution):
    """Genome is one float; fitness is the float itself."""

    def __init__(self, value: float):
        self.value = float(value)
        self.calls = 0

    @classmethod
    def generate(cls, rng: np.random.Generator) -> Scalar:
        return cls(rng.uniform(0.0, 1.0))

    def evaluate(self) -> float:
        self.calls += 1
        return self.value

    @classmethod
    def crossover(cls, a: Scalar, b: Scalar, rng: np.random.Generator) -> None:
        w = rng.random()
        a.value, b.value = w * a.value + (1 - w) * b.value, w * b.value + (1 - w) * a.value

    def mutate(self, rng: np.random.Generator) -> None:
        self.value += rng.normal(0.0, 0.1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return self.value == other.value

    __hash__ = None

    def __repr__(self) -> str:
        return f"Scalar({self.value!r})"


class Tracked(Scalar):
    """Scalar that records which operators touched it."""

    def __init__(self, value: float):
        super().__init__(value)
        self.ops: list[str] = []

    @classmethod
    def crossover(cls, a: Tracked, b: Tracked, rng: np.random.Generator) -> None:
        super().crossover(a, b, rng)
        a.ops.append("crossover")
        b.ops.append("crossover")

    def mutate(self, rng: np.random.Generator) -> None:
        super().mutate(rng)
        self.ops.append("mutation")


class NaNScalar(Scalar):
    def evaluate(self) -> float:
        return float("nan")


class Exploding(Scalar):
    def evaluate(self) -> float:
        raise RuntimeError("evaluation failed")


def evaluated_population(values) -> Population:
    population = Population(Individual(Scalar(v)) for v in values)
    population.par_evaluate_all()
    return population
