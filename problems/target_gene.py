from __future__ import annotations

import numpy as np

from detevo import Solution

TARGET = 0.7
MUTATION_STDEV = 0.1


class TargetGene(Solution):
    """A single real gene in [0, 1] that should approach ``TARGET``."""

    def __init__(self, gene: float):
        self.gene = float(gene)

    @classmethod
    def generate(cls, rng: np.random.Generator) -> TargetGene:
        return cls(rng.uniform(0.0, 1.0))

    def evaluate(self) -> float:
        return -abs(self.gene - TARGET)

    @classmethod
    def crossover(cls, a: TargetGene, b: TargetGene, rng: np.random.Generator) -> None:
        # both children land somewhere between the parents
        lo, hi = sorted((a.gene, b.gene))
        a.gene = float(rng.uniform(lo, hi))
        b.gene = float(rng.uniform(lo, hi))

    def mutate(self, rng: np.random.Generator) -> None:
        self.gene = float(np.clip(self.gene + rng.normal(0.0, MUTATION_STDEV), 0.0, 1.0))

    def clone(self) -> TargetGene:
        return TargetGene(self.gene)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TargetGene):
            return NotImplemented
        return self.gene == other.gene

    __hash__ = None

    def __repr__(self) -> str:
        return f"TargetGene({self.gene!r})"
