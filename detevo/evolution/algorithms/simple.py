from __future__ import annotations

from loguru import logger
from pydantic import Field

from detevo.config.helpers import build_config
from detevo.evolution.algorithms.base import Algorithm, StepContext, VariationConfig
from detevo.evolution.algorithms.variation import vary
from detevo.evolution.strategies.selectors import SelectionOperator
from detevo.exceptions import ConfigurationError
from detevo.population.population import Population
from detevo.rng.streams import StreamPurpose


class SimpleConfig(VariationConfig):
    pop_size: int = Field(ge=1, description="Population size")


class Simple(Algorithm):
    """Generational algorithm without parent/offspring competition.

    Pseudocode::

        select N individuals out of the population of N (duplicates expected)
        vary the selection (see ``variation``)
        write the offspring back over the population, slot by slot
        evaluate

    The selector must be stochastic; a deterministic one would keep returning
    the same population.
    """

    def __init__(
        self,
        pop_size: int,
        cxpb: float,
        mutpb: float,
        selector: SelectionOperator,
        variation: str = "and",
    ):
        self.config = build_config(
            SimpleConfig, pop_size=pop_size, cxpb=cxpb, mutpb=mutpb, variation=variation
        )
        if not selector.stochastic:
            raise ConfigurationError(
                f"Simple requires a stochastic selector, got {type(selector).__name__}"
            )
        self.selector = selector

    @property
    def pop_size(self) -> int:
        return self.config.pop_size

    def step(self, population: Population, ctx: StepContext) -> Population:
        cfg = self.config
        chosen = self.selector.select(population, cfg.pop_size, ctx.scope(StreamPurpose.SELECT))
        offspring, counts = vary(
            [population[i] for i in chosen], cfg.pop_size, cfg, ctx.scope(StreamPurpose.VARY), ctx.pool
        )
        ctx.crossovers += counts.crossovers
        ctx.mutations += counts.mutations

        for slot, child in enumerate(offspring):
            population.replace(slot, child)
        ctx.evaluations += population.par_evaluate_all(ctx.pool)

        logger.debug(
            "[Simple] gen {}: {} crossovers, {} mutations",
            ctx.generation,
            counts.crossovers,
            counts.mutations,
        )
        return population
