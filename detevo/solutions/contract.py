from __future__ import annotations

from abc import ABC, abstractmethod
import copy
from typing import Any, TypeVar

import numpy as np

S = TypeVar("S", bound="Solution")


class Solution(ABC):
    """
    Capability every candidate representation implements.

    The engine never looks inside a solution; it only calls these operators.
    All randomness arrives through the ``rng`` argument, which is a stream
    derived from the run seed, so implementations must not touch global
    random state.

    Rules:
        - ``evaluate`` is pure and reentrant: the same genome always yields
          the same fitness and distinct solutions may be evaluated concurrently.
        - ``crossover`` and ``mutate`` change genomes in place.
        - Fitness values are totally ordered; higher is better.
    """

    @classmethod
    @abstractmethod
    def generate(cls: type[S], rng: np.random.Generator) -> S:
        """Create one random solution."""

    @abstractmethod
    def evaluate(self) -> Any:
        """Return the fitness of this solution."""

    @classmethod
    @abstractmethod
    def crossover(cls: type[S], a: S, b: S, rng: np.random.Generator) -> None:
        """Exchange genetic material between *a* and *b* in place."""

    @abstractmethod
    def mutate(self, rng: np.random.Generator) -> None:
        """Randomly perturb this solution in place."""

    def clone(self: S) -> S:
        """Independent copy; override when a cheaper copy exists."""
        return copy.deepcopy(self)
