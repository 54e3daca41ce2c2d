from __future__ import annotations

from loguru import logger
from pydantic import Field

from detevo.config.helpers import build_config
from detevo.evolution.algorithms.base import Algorithm, StepContext, VariationConfig
from detevo.evolution.algorithms.variation import vary
from detevo.evolution.strategies.selectors import BestSelector, SelectionOperator
from detevo.population.population import Population
from detevo.rng.streams import StreamPurpose


class MuPlusLambdaConfig(VariationConfig):
    mu: int = Field(ge=1, description="Population size (μ)")
    lambda_: int = Field(ge=1, description="Offspring per generation (λ)")


class MuPlusLambda(Algorithm):
    """(μ + λ) evolutionary algorithm.

    Pseudocode::

        select λ parents from the population (with replacement)
        vary them into λ offspring (see ``variation``)
        evaluate the offspring
        keep the μ best of parents + offspring

    With the default truncation survivor selector the parents precede the
    offspring, so on equal fitness an existing individual is kept first.

    ``variation="and"`` pairs the parents for crossover, then rolls mutation
    per child. ``variation="or"`` gives each child exactly one of crossover,
    mutation or plain cloning, drawing its parents from the selected λ.
    """

    def __init__(
        self,
        mu: int,
        lambda_: int,
        cxpb: float,
        mutpb: float,
        selector: SelectionOperator,
        survivor_selector: SelectionOperator | None = None,
        variation: str = "and",
    ):
        self.config = build_config(
            MuPlusLambdaConfig, mu=mu, lambda_=lambda_, cxpb=cxpb, mutpb=mutpb, variation=variation
        )
        self.selector = selector
        self.survivor_selector = survivor_selector or BestSelector()

    @property
    def pop_size(self) -> int:
        return self.config.mu

    def step(self, population: Population, ctx: StepContext) -> Population:
        cfg = self.config
        parent_idx = self.selector.select(population, cfg.lambda_, ctx.scope(StreamPurpose.SELECT))
        parents = [population[i] for i in parent_idx]

        offspring, counts = vary(parents, cfg.lambda_, cfg, ctx.scope(StreamPurpose.VARY), ctx.pool)
        ctx.crossovers += counts.crossovers
        ctx.mutations += counts.mutations
        ctx.evaluations += Population(offspring).par_evaluate_all(ctx.pool)

        union = Population([*population, *offspring])
        survivor_idx = self.survivor_selector.select(union, cfg.mu, ctx.scope(StreamPurpose.SURVIVE))
        logger.debug(
            "[MuPlusLambda] gen {}: {} parents, {} crossovers, {} mutations, {} survivors",
            ctx.generation,
            len(parents),
            counts.crossovers,
            counts.mutations,
            len(survivor_idx),
        )
        return Population(union[i] for i in survivor_idx)

    def __repr__(self) -> str:
        cfg = self.config
        return (
            f"MuPlusLambda(mu={cfg.mu}, lambda_={cfg.lambda_}, cxpb={cfg.cxpb}, "
            f"mutpb={cfg.mutpb}, variation={cfg.variation!r}, selector={self.selector!r})"
        )
