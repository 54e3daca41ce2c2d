from __future__ import annotations

from loguru import logger
from pydantic import Field, model_validator

from detevo.config.helpers import build_config
from detevo.evolution.algorithms.base import Algorithm, StepContext, VariationConfig
from detevo.evolution.algorithms.variation import vary
from detevo.evolution.strategies.selectors import BestSelector, SelectionOperator
from detevo.population.population import Population
from detevo.rng.streams import StreamPurpose


class MuCommaLambdaConfig(VariationConfig):
    mu: int = Field(ge=1, description="Population size (μ)")
    lambda_: int = Field(ge=1, description="Offspring per generation (λ)")

    @model_validator(mode="after")
    def _check_lambda(self):
        if self.lambda_ < self.mu:
            raise ValueError(f"(μ, λ) requires λ >= μ, got μ={self.mu}, λ={self.lambda_}")
        return self


class MuCommaLambda(Algorithm):
    """(μ, λ) evolutionary algorithm: parents never survive.

    Pseudocode::

        select λ parents from the population (with replacement)
        vary them into λ offspring (see ``variation``)
        evaluate the offspring
        keep the μ best offspring
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
            MuCommaLambdaConfig, mu=mu, lambda_=lambda_, cxpb=cxpb, mutpb=mutpb, variation=variation
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

        children = Population(offspring)
        ctx.evaluations += children.par_evaluate_all(ctx.pool)

        survivor_idx = self.survivor_selector.select(children, cfg.mu, ctx.scope(StreamPurpose.SURVIVE))
        logger.debug(
            "[MuCommaLambda] gen {}: {} offspring -> {} survivors",
            ctx.generation,
            len(children),
            len(survivor_idx),
        )
        return Population(children[i] for i in survivor_idx)
