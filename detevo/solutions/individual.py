from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar
import uuid

import numpy as np

from detevo.exceptions import EvolutionError, FitnessError
from detevo.solutions.contract import Solution
from detevo.solutions.fitness import is_nan_fitness

S = TypeVar("S", bound=Solution)


class _Unevaluated:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNEVALUATED"


UNEVALUATED = _Unevaluated()


@dataclass(frozen=True)
class Evaluated:
    fitness: Any


FitnessState = _Unevaluated | Evaluated


def _new_uid() -> str:
    return uuid.uuid4().hex


class Individual(Generic[S]):
    """A solution paired with its fitness state.

    The state moves to ``Evaluated`` only through :meth:`evaluate` and back to
    ``UNEVALUATED`` on every crossover or mutation. ``uid`` identifies the
    current genome: clones share it, any genome change replaces it.
    """

    __slots__ = ("solution", "_state", "_uid")

    def __init__(self, solution: S, *, state: FitnessState = UNEVALUATED, uid: str | None = None):
        self.solution = solution
        self._state: FitnessState = state
        self._uid = uid or _new_uid()

    @classmethod
    def generate(cls, solution_type: type[S], rng: np.random.Generator) -> Individual[S]:
        return cls(solution_type.generate(rng))

    @property
    def uid(self) -> str:
        return self._uid

    @property
    def state(self) -> FitnessState:
        return self._state

    @property
    def is_evaluated(self) -> bool:
        return isinstance(self._state, Evaluated)

    @property
    def fitness(self) -> Any:
        if not isinstance(self._state, Evaluated):
            raise EvolutionError(f"Individual {self._uid} has not been evaluated")
        return self._state.fitness

    def evaluate(self) -> Any:
        """Evaluate the solution unless a valid cached fitness exists."""
        if isinstance(self._state, Evaluated):
            return self._state.fitness
        fitness = self.solution.evaluate()
        if is_nan_fitness(fitness):
            raise FitnessError(
                f"{type(self.solution).__name__}.evaluate() returned NaN fitness"
            )
        self._state = Evaluated(fitness)
        return fitness

    def invalidate(self) -> None:
        self._state = UNEVALUATED
        self._uid = _new_uid()

    def mutate(self, rng: np.random.Generator) -> None:
        self.solution.mutate(rng)
        self.invalidate()

    @staticmethod
    def crossover(a: Individual[S], b: Individual[S], rng: np.random.Generator) -> None:
        type(a.solution).crossover(a.solution, b.solution, rng)
        a.invalidate()
        b.invalidate()

    def clone(self) -> Individual[S]:
        return Individual(self.solution.clone(), state=self._state, uid=self._uid)

    def __repr__(self) -> str:
        return f"Individual({self.solution!r}, {self._state!r})"
