from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from detevo.population.population import Population
from detevo.rng.streams import DeterministicRng, StreamPurpose, StreamScope
from detevo.utils.worker_pool import WorkerPool


class VariationConfig(BaseModel):
    """Probabilities shared by every variation-based algorithm."""

    cxpb: float = Field(ge=0.0, le=1.0, description="Crossover probability per pair")
    mutpb: float = Field(ge=0.0, le=1.0, description="Mutation probability per offspring")
    variation: Literal["and", "or"] = Field(
        default="and",
        description="'and': pairwise crossover then mutation; 'or': one operator per child",
    )
    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_or_probabilities(self):
        if self.variation == "or" and self.cxpb + self.mutpb > 1.0:
            raise ValueError(
                f"variation='or' requires cxpb + mutpb <= 1, got {self.cxpb} + {self.mutpb}"
            )
        return self


@dataclass
class StepContext:
    """Everything one generation step may use besides the population.

    The counters are filled in by the algorithm after each join point and read
    by the driver when it writes the generation record.
    """

    generation: int
    rng: DeterministicRng
    pool: WorkerPool
    evaluations: int = 0
    crossovers: int = 0
    mutations: int = 0

    def scope(self, purpose: StreamPurpose) -> StreamScope:
        return self.rng.scope(self.generation, purpose)


class Algorithm(ABC):
    """
    One generation step of an evolutionary algorithm.

    ``step`` receives an evaluated population of ``pop_size`` individuals and
    must return the next generation with every member evaluated. It may reuse
    and modify the population it was handed; the driver owns it exclusively
    for the duration of the call.
    """

    @property
    @abstractmethod
    def pop_size(self) -> int:
        """Population size the driver generates and the step preserves."""

    @abstractmethod
    def step(self, population: Population, ctx: StepContext) -> Population:
        """Advance *population* by one generation."""
