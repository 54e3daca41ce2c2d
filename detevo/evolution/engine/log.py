"""Per-generation run log.

Each generation the driver appends one :class:`GenerationRecord`. After the
run returns, the log is frozen and only readable.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field

from detevo.evolution.hall_of_fame import HallOfFameEntry
from detevo.evolution.stats import FitnessStats
from detevo.exceptions import EvolutionError
from detevo.solutions.fitness import fitness_to_float


def _fitness_json(fitness: Any) -> float | str:
    value = fitness_to_float(fitness)
    return repr(fitness) if value is None else value


class GenerationRecord(BaseModel):
    """What happened in one generation.

    ``reset`` marks a generation after which the live population was
    discarded and regenerated. ``hall_of_fame`` is the archive as observed at
    the end of this generation, best first.
    """

    generation: int = Field(ge=0)
    reset: bool = False
    evaluations: int = Field(default=0, ge=0)
    crossovers: int = Field(default=0, ge=0)
    mutations: int = Field(default=0, ge=0)
    stats: FitnessStats
    hall_of_fame: tuple[Any, ...] = Field(
        default=(), description="HallOfFameEntry snapshots, best first"
    )

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def best(self) -> HallOfFameEntry | None:
        return self.hall_of_fame[0] if self.hall_of_fame else None

    def summary(self) -> dict[str, Any]:
        """JSON-friendly view without object identities."""
        return {
            "generation": self.generation,
            "reset": self.reset,
            "evaluations": self.evaluations,
            "crossovers": self.crossovers,
            "mutations": self.mutations,
            "stats": self.stats.model_dump(),
            "hall_of_fame": [
                {"generation": e.generation, "fitness": _fitness_json(e.fitness)}
                for e in self.hall_of_fame
            ],
        }


class GenerationLog:
    """Append-only sequence of generation records."""

    def __init__(self):
        self._records: list[GenerationRecord] = []
        self._frozen = False

    def append(self, record: GenerationRecord) -> None:
        if self._frozen:
            raise EvolutionError("GenerationLog is read-only once the run has finished")
        if self._records and record.generation <= self._records[-1].generation:
            raise EvolutionError(
                f"generation {record.generation} does not follow {self._records[-1].generation}"
            )
        self._records.append(record)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def records(self) -> tuple[GenerationRecord, ...]:
        return tuple(self._records)

    @property
    def last(self) -> GenerationRecord | None:
        return self._records[-1] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> GenerationRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[GenerationRecord]:
        return iter(self._records)

    def best_fitness_curve(self) -> list[Any]:
        """Hall-of-fame leader's fitness per generation (None while empty)."""
        return [r.best.fitness if r.best is not None else None for r in self._records]

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the log; identical runs produce identical strings."""
        return json.dumps(
            [r.summary() for r in self._records], indent=indent, sort_keys=True
        )

    def __repr__(self) -> str:
        return f"GenerationLog(records={len(self._records)}, frozen={self._frozen})"
