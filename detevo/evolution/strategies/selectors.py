from abc import ABC, abstractmethod
from typing import ClassVar

from loguru import logger

from detevo.exceptions import ConfigurationError, EvolutionError
from detevo.population.population import Population
from detevo.rng.streams import StreamScope


class SelectionOperator(ABC):
    """Base class for strategies that pick individuals out of a population.

    Selectors return population indices, possibly repeated. ``stochastic`` marks
    selectors whose outcome depends on the random streams; algorithms that
    select N out of N need one, or the population never changes.
    """

    stochastic: ClassVar[bool] = True

    @abstractmethod
    def select(self, population: Population, count: int, scope: StreamScope) -> list[int]:
        """Return ``count`` indices into ``population``."""

    @staticmethod
    def _check(population: Population, count: int) -> bool:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if count == 0:
            return False
        if len(population) == 0:
            raise EvolutionError(f"cannot select {count} individuals from an empty population")
        population.require_evaluated()
        return True


class TournamentSelector(SelectionOperator):
    """Best of ``tournament_size`` uniform draws (with replacement), ``count`` times.

    Tournament ``i`` draws from ``scope.stream(i)``. Among contenders with equal
    fitness the first one drawn wins.
    """

    def __init__(self, tournament_size: int = 3):
        if tournament_size < 1:
            raise ConfigurationError(
                f"Tournament needs at least one participant per round, got {tournament_size}"
            )
        self.tournament_size = tournament_size

    def select(self, population: Population, count: int, scope: StreamScope) -> list[int]:
        if not self._check(population, count):
            return []

        n = len(population)
        winners: list[int] = []
        for round_idx in range(count):
            draws = scope.stream(round_idx).integers(0, n, size=self.tournament_size)
            winner = int(draws[0])
            for idx in draws[1:]:
                idx = int(idx)
                if population[idx].fitness > population[winner].fitness:
                    winner = idx
            winners.append(winner)

        logger.debug(
            "[TournamentSelector] {} rounds of size {} over {} individuals",
            count,
            self.tournament_size,
            n,
        )
        return winners

    def __repr__(self) -> str:
        return f"TournamentSelector(tournament_size={self.tournament_size})"


class RandomSelector(SelectionOperator):
    """Uniform selection with replacement, ignoring fitness."""

    def select(self, population: Population, count: int, scope: StreamScope) -> list[int]:
        if not self._check(population, count):
            return []
        draws = scope.stream(0).integers(0, len(population), size=count)
        return [int(i) for i in draws]

    def __repr__(self) -> str:
        return "RandomSelector()"


class BestSelector(SelectionOperator):
    """Truncation selection: the ``count`` fittest, best-first.

    Ties keep population order. When ``count`` exceeds the population size the
    ranking wraps around, so every index is used before any repeats.
    """

    stochastic: ClassVar[bool] = False

    def select(self, population: Population, count: int, scope: StreamScope) -> list[int]:
        if not self._check(population, count):
            return []
        ranked = sorted(range(len(population)), key=lambda i: population[i].fitness, reverse=True)
        return [ranked[i % len(ranked)] for i in range(count)]

    def __repr__(self) -> str:
        return "BestSelector()"
