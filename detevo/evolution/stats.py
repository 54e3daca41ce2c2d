from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from detevo.population.population import Population
from detevo.solutions.fitness import MultiObjective, fitness_to_float


def _objective_matrix(fitnesses: Sequence[Any]) -> np.ndarray | None:
    """Rows of weighted objectives, or None unless every fitness is a same-length MultiObjective."""
    if not all(isinstance(f, MultiObjective) for f in fitnesses):
        return None
    if len({len(f) for f in fitnesses}) != 1:
        return None
    return np.asarray([f.values for f in fitnesses], dtype=np.float64)


class FitnessStats(BaseModel):
    """Summary of one evaluated population's fitness values.

    ``best``/``worst`` follow the fitness ordering. Numeric summaries are
    ``None`` when some fitness value has no float conversion.

    For populations scored with :class:`MultiObjective`, ``objective_mean``
    and ``objective_std`` hold one entry per (weighted) objective; the std is
    the population standard deviation.
    """

    size: int = Field(ge=0)
    best: float | None = None
    worst: float | None = None
    mean: float | None = None
    std: float | None = None
    objective_mean: list[float] | None = None
    objective_std: list[float] | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def analyze(cls, population: Population) -> FitnessStats:
        fitnesses = population.fitnesses()
        if not fitnesses:
            return cls(size=0)

        values = [fitness_to_float(f) for f in fitnesses]
        if any(v is None for v in values):
            return cls(size=len(fitnesses))

        best = max(fitnesses)
        worst = min(fitnesses)
        arr = np.asarray(values, dtype=np.float64)

        objectives = _objective_matrix(fitnesses)
        objective_mean = objective_std = None
        if objectives is not None:
            objective_mean = np.mean(objectives, axis=0).tolist()
            objective_std = np.std(objectives, axis=0).tolist()

        return cls(
            size=len(fitnesses),
            best=fitness_to_float(best),
            worst=fitness_to_float(worst),
            mean=float(np.mean(arr)),
            std=float(np.std(arr)),
            objective_mean=objective_mean,
            objective_std=objective_std,
        )
