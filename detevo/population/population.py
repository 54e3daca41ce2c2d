from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, TypeVar, overload

from loguru import logger

from detevo.exceptions import EvolutionError
from detevo.solutions.contract import Solution
from detevo.solutions.individual import Individual
from detevo.utils.worker_pool import WorkerPool

S = TypeVar("S", bound=Solution)


def _evaluate(individual: Individual) -> None:
    individual.evaluate()


class Population(Generic[S]):
    """Ordered collection of individuals.

    Order only matters where an algorithm gives it meaning (e.g. survivors are
    kept best-first). Selection and hall-of-fame operations require every
    member to be evaluated, see :meth:`par_evaluate_all`.
    """

    __slots__ = ("_individuals",)

    def __init__(self, individuals: Iterable[Individual[S]] = ()):
        self._individuals: list[Individual[S]] = list(individuals)

    # -------------------------- Sequence API --------------------------

    def __len__(self) -> int:
        return len(self._individuals)

    @overload
    def __getitem__(self, index: int) -> Individual[S]: ...

    @overload
    def __getitem__(self, index: slice) -> list[Individual[S]]: ...

    def __getitem__(self, index):
        return self._individuals[index]

    def __iter__(self) -> Iterator[Individual[S]]:
        return iter(self._individuals)

    @property
    def individuals(self) -> tuple[Individual[S], ...]:
        return tuple(self._individuals)

    def replace(self, index: int, individual: Individual[S]) -> None:
        self._individuals[index] = individual

    # -------------------------- Fitness ------------------------------

    def par_evaluate_all(self, pool: WorkerPool | None = None) -> int:
        """Evaluate every member lacking a cached fitness.

        Returns:
            Number of individuals that were evaluated.
        """
        pending = [ind for ind in self._individuals if not ind.is_evaluated]
        if not pending:
            return 0
        if pool is None:
            for ind in pending:
                ind.evaluate()
        else:
            pool.map(_evaluate, pending)
        logger.debug("[Population] Evaluated {} / {} individuals", len(pending), len(self))
        return len(pending)

    def require_evaluated(self) -> None:
        missing = sum(1 for ind in self._individuals if not ind.is_evaluated)
        if missing:
            raise EvolutionError(
                f"{missing} of {len(self)} individuals have no fitness; call par_evaluate_all() first"
            )

    def fitnesses(self) -> list[Any]:
        self.require_evaluated()
        return [ind.fitness for ind in self._individuals]

    def sort_by_fitness(self) -> None:
        """Sort best-first; equal fitness keeps the current relative order."""
        self.require_evaluated()
        self._individuals.sort(key=lambda ind: ind.fitness, reverse=True)

    def best(self) -> Individual[S] | None:
        """Fittest member, the earliest one among equals."""
        self.require_evaluated()
        best: Individual[S] | None = None
        for ind in self._individuals:
            if best is None or ind.fitness > best.fitness:
                best = ind
        return best

    def __repr__(self) -> str:
        return f"Population(size={len(self)})"
