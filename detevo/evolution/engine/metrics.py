from __future__ import annotations

from pydantic import BaseModel, Field


class EngineMetrics(BaseModel):
    """Running totals for one Evolution run."""

    total_generations: int = Field(
        default=0, description="Generations advanced, excluding generation 0"
    )
    evaluations: int = Field(
        default=0, description="Total number of fitness evaluations"
    )
    crossovers: int = Field(default=0, description="Total crossover operations")
    mutations: int = Field(default=0, description="Total mutation operations")
    resets: int = Field(default=0, description="Total population resets")

    def record_step_metrics(
        self, evaluations: int, crossovers: int, mutations: int
    ) -> None:
        """Record metrics from one generation step."""
        self.total_generations += 1
        self.evaluations += evaluations
        self.crossovers += crossovers
        self.mutations += mutations

    def record_reset_metrics(self, evaluations: int) -> None:
        """Record metrics from a population reset."""
        self.resets += 1
        self.evaluations += evaluations

    def record_initial_metrics(self, evaluations: int) -> None:
        self.evaluations += evaluations
