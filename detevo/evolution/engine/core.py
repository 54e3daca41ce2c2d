from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from loguru import logger

from detevo.evolution.algorithms.base import Algorithm, StepContext
from detevo.evolution.engine.config import EngineConfig
from detevo.evolution.engine.log import GenerationLog, GenerationRecord
from detevo.evolution.engine.metrics import EngineMetrics
from detevo.evolution.hall_of_fame import HallOfFame
from detevo.evolution.stats import FitnessStats
from detevo.exceptions import ConfigurationError, EvolutionError
from detevo.population.population import Population
from detevo.rng.seed import SeedResolution, SeedSource, resolve_seed
from detevo.rng.streams import DeterministicRng, StreamPurpose
from detevo.solutions.contract import Solution
from detevo.solutions.individual import Individual
from detevo.utils.worker_pool import WorkerPool

__all__ = ["Evolution", "GenerationView"]

S = TypeVar("S", bound=Solution)

Predicate = Callable[[GenerationRecord], bool]


@dataclass(frozen=True)
class GenerationView(Generic[S]):
    """Read-only look at the run handed to per-generation callbacks.

    ``population`` is the live population; callbacks must not modify it.
    """

    generation: int
    population: Population[S]
    hall_of_fame: HallOfFame
    record: GenerationRecord


Callback = Callable[[GenerationView], None]


class Evolution(Generic[S]):
    """
    Generation loop driver:
    - generation 0 is a freshly generated, evaluated and observed population;
    - every later generation is one ``Algorithm.step`` followed by a
      hall-of-fame observation and a log record;
    - the caller's predicate decides when to stop, there is no implicit cap;
    - with ``reset_period`` R the live population is regenerated after every
      generation that is a multiple of R. The hall of fame and the generation
      counter carry on across resets.

    A driver runs once; build a new one (with its own seed) for another run.
    """

    def __init__(
        self,
        solution_type: type[S],
        algorithm: Algorithm,
        hall_of_fame: HallOfFame,
        config: EngineConfig | None = None,
        *,
        rng: DeterministicRng | None = None,
    ):
        if not (isinstance(solution_type, type) and issubclass(solution_type, Solution)):
            raise ConfigurationError(
                f"solution_type must be a Solution subclass, got {solution_type!r}"
            )
        self.solution_type = solution_type
        self.algorithm = algorithm
        self.hall_of_fame = hall_of_fame
        self.config = config or EngineConfig()

        if rng is None:
            self.seed_resolution = resolve_seed(
                self.config.seed, env_var=self.config.seed_env_var
            )
            rng = DeterministicRng(self.seed_resolution.seed)
        else:
            self.seed_resolution = SeedResolution(seed=rng.seed, source=SeedSource.EXPLICIT)
        self.rng = rng

        self.metrics = EngineMetrics()
        self.log = GenerationLog()
        self._population: Population[S] | None = None
        self._generation = 0
        self._started = False

        logger.info(
            "[Evolution] Init | solution={}, algorithm={}, hall_of_fame={}, seed={} ({}), reset_period={}",
            solution_type.__name__,
            type(algorithm).__name__,
            type(hall_of_fame).__name__,
            self.rng.seed,
            self.seed_resolution.source.value,
            self.config.reset_period,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def seed(self) -> int:
        return self.rng.seed

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> Population[S] | None:
        return self._population

    def run_until(self, predicate: Predicate) -> GenerationLog:
        """Run until *predicate* returns True for a generation record."""
        return self._run(predicate, None)

    def run_until_with(self, predicate: Predicate, callback: Callback) -> GenerationLog:
        """Like :meth:`run_until`, calling *callback* once per generation."""
        return self._run(predicate, callback)

    def run_for(self, n_generations: int) -> GenerationLog:
        """Advance exactly *n_generations* past generation 0.

        The returned log holds ``n_generations + 1`` records, generation 0 included.
        """
        return self._run(self._stop_after(n_generations), None)

    def run_for_with(self, n_generations: int, callback: Callback) -> GenerationLog:
        """Like :meth:`run_for`; *callback* sees all ``n_generations + 1`` records."""
        return self._run(self._stop_after(n_generations), callback)

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    @staticmethod
    def _stop_after(n_generations: int) -> Predicate:
        if isinstance(n_generations, bool) or not isinstance(n_generations, int) or n_generations < 0:
            raise ConfigurationError(
                f"n_generations must be a non-negative integer, got {n_generations!r}"
            )
        return lambda record: record.generation >= n_generations

    def _run(self, predicate: Predicate, callback: Callback | None) -> GenerationLog:
        if self._started:
            raise EvolutionError("Evolution instance has already run; create a new one")
        self._started = True
        logger.info("[Evolution] Start | pop_size={}", self.algorithm.pop_size)

        with WorkerPool(self.config.max_workers) as pool:
            self._population = self._fresh_population(0, pool)
            evaluations = self._population.par_evaluate_all(pool)
            self.metrics.record_initial_metrics(evaluations)
            record = self._observe(evaluations=evaluations)

            while True:
                stop = predicate(record)
                if not stop and self._reset_due():
                    record = record.model_copy(update={"reset": True})
                self.log.append(record)
                if callback is not None:
                    callback(GenerationView(self._generation, self._population, self.hall_of_fame, record))
                if stop:
                    logger.info("[Evolution] Stop: predicate satisfied at generation {}", self._generation)
                    break
                if record.reset:
                    self._reset(pool)

                self._generation += 1
                ctx = StepContext(generation=self._generation, rng=self.rng, pool=pool)
                self._population = self._advance(ctx)
                self.metrics.record_step_metrics(ctx.evaluations, ctx.crossovers, ctx.mutations)
                record = self._observe(
                    evaluations=ctx.evaluations,
                    crossovers=ctx.crossovers,
                    mutations=ctx.mutations,
                )

        self.log.freeze()
        self._log_metrics()
        return self.log

    def _advance(self, ctx: StepContext) -> Population[S]:
        population = self.algorithm.step(self._population, ctx)
        if len(population) != self.algorithm.pop_size:
            raise EvolutionError(
                f"{type(self.algorithm).__name__}.step returned {len(population)} individuals, "
                f"expected {self.algorithm.pop_size}"
            )
        population.require_evaluated()
        return population

    def _observe(self, evaluations: int = 0, crossovers: int = 0, mutations: int = 0) -> GenerationRecord:
        self.hall_of_fame.observe(self._population, self._generation)
        record = GenerationRecord(
            generation=self._generation,
            evaluations=evaluations,
            crossovers=crossovers,
            mutations=mutations,
            stats=FitnessStats.analyze(self._population),
            hall_of_fame=self.hall_of_fame.entries,
        )
        best = record.best
        logger.debug(
            "[Evolution] gen {} | evals={}, mean={}, best_ever={}",
            record.generation,
            evaluations,
            record.stats.mean,
            best.fitness if best is not None else None,
        )
        return record

    # ------------------------------------------------------------------
    # Population (re)generation
    # ------------------------------------------------------------------

    def _fresh_population(self, generation: int, pool: WorkerPool) -> Population[S]:
        scope = self.rng.scope(generation, StreamPurpose.GENERATE)

        def _generate(slot: int) -> Individual[S]:
            return Individual.generate(self.solution_type, scope.stream(slot))

        return Population(pool.map(_generate, range(self.algorithm.pop_size)))

    def _reset_due(self) -> bool:
        period = self.config.reset_period
        return period is not None and self._generation > 0 and self._generation % period == 0

    def _reset(self, pool: WorkerPool) -> None:
        logger.info("[Evolution] Reset: regenerating population after generation {}", self._generation)
        self._population = self._fresh_population(self._generation, pool)
        evaluations = self._population.par_evaluate_all(pool)
        self.hall_of_fame.observe(self._population, self._generation)
        self.metrics.record_reset_metrics(evaluations)

    def _log_metrics(self) -> None:
        m = self.metrics
        best = self.hall_of_fame.best()
        logger.info(
            "[Evolution] Done | generations={}, evaluations={}, crossovers={}, mutations={}, resets={}, best={}",
            m.total_generations,
            m.evaluations,
            m.crossovers,
            m.mutations,
            m.resets,
            best.fitness if best is not None else None,
        )
