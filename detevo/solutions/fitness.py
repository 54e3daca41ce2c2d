from __future__ import annotations

import math
import numbers
import sys
from typing import Any, Callable, Iterator, Sequence


class MultiObjective:
    """Weighted objective vector.

    Objectives are stored already multiplied by their weights. Every
    comparison, ``hash`` and ``float()`` go through the sum of the weighted
    objectives, so two vectors with the same sum compare equal and algorithms
    can treat it like any other scalar fitness. Use :meth:`approx_eq` to
    compare objective by objective.
    """

    __slots__ = ("_weighted",)

    def __init__(self, weighted: Sequence[float]):
        self._weighted = tuple(float(v) for v in weighted)

    @classmethod
    def unweighted(cls, values: Sequence[float]) -> "MultiObjective":
        return cls(values)

    @staticmethod
    def weighted_builder(
        weights: Sequence[float],
    ) -> Callable[[Sequence[float]], "MultiObjective"]:
        """Return a constructor that applies *weights* to raw objective values."""
        weights = tuple(float(w) for w in weights)

        def build(values: Sequence[float]) -> MultiObjective:
            if len(values) != len(weights):
                raise ValueError(
                    f"expected {len(weights)} objectives, got {len(values)}"
                )
            return MultiObjective([w * v for w, v in zip(weights, values)])

        return build

    @property
    def values(self) -> tuple[float, ...]:
        return self._weighted

    def collapse(self) -> float:
        return math.fsum(self._weighted)

    def approx_eq(self, other: MultiObjective) -> bool:
        """Objective-wise equality within float epsilon."""
        if len(self) != len(other):
            return False
        return all(
            abs(a - b) <= sys.float_info.epsilon
            for a, b in zip(self._weighted, other._weighted)
        )

    def __float__(self) -> float:
        return self.collapse()

    def __len__(self) -> int:
        return len(self._weighted)

    def __getitem__(self, index: int) -> float:
        return self._weighted[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._weighted)

    @staticmethod
    def _key(value: object) -> float | None:
        if isinstance(value, MultiObjective):
            return value.collapse()
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            return float(value)
        return None

    def __eq__(self, other: object) -> bool:
        key = self._key(other)
        if key is None:
            return NotImplemented
        return self.collapse() == key

    def __lt__(self, other: object) -> bool:
        key = self._key(other)
        if key is None:
            return NotImplemented
        return self.collapse() < key

    def __le__(self, other: object) -> bool:
        key = self._key(other)
        if key is None:
            return NotImplemented
        return self.collapse() <= key

    def __gt__(self, other: object) -> bool:
        key = self._key(other)
        if key is None:
            return NotImplemented
        return self.collapse() > key

    def __ge__(self, other: object) -> bool:
        key = self._key(other)
        if key is None:
            return NotImplemented
        return self.collapse() >= key

    def __hash__(self) -> int:
        # consistent with __eq__, including against plain floats
        return hash(self.collapse())

    def __repr__(self) -> str:
        return f"MultiObjective({list(self._weighted)})"


def fitness_to_float(fitness: Any) -> float | None:
    """Best-effort scalar view of a fitness value, None if it has none."""
    try:
        return float(fitness)
    except (TypeError, ValueError):
        return None


def is_nan_fitness(fitness: Any) -> bool:
    if isinstance(fitness, numbers.Real):
        return math.isnan(fitness)
    if isinstance(fitness, MultiObjective):
        return any(math.isnan(v) for v in fitness)
    if isinstance(fitness, tuple):
        return any(is_nan_fitness(v) for v in fitness)
    return False
