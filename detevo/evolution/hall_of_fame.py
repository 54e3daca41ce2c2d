"""Archives of the best solutions seen across a run.

A hall of fame observes every generation's evaluated population and keeps its
own snapshots (clones), so later changes to the live population never reach
the archive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from detevo.config.helpers import build_config
from detevo.population.population import Population
from detevo.solutions.contract import Solution
from detevo.solutions.individual import Individual


@dataclass(frozen=True)
class HallOfFameEntry:
    """Immutable record of one archived individual."""

    solution: Solution
    fitness: Any
    generation: int
    uid: str

    @classmethod
    def snapshot(cls, individual: Individual, generation: int) -> HallOfFameEntry:
        return cls(
            solution=individual.solution.clone(),
            fitness=individual.fitness,
            generation=generation,
            uid=individual.uid,
        )


class HallOfFame(ABC):
    """Base class for archives that record successive generations."""

    @abstractmethod
    def observe(self, population: Population, generation: int) -> None:
        """Include an evaluated generation in the record."""

    @property
    @abstractmethod
    def entries(self) -> tuple[HallOfFameEntry, ...]:
        """Current archive, best first."""

    def best(self) -> HallOfFameEntry | None:
        entries = self.entries
        return entries[0] if entries else None

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> HallOfFameEntry:
        return self.entries[index]

    def __iter__(self) -> Iterator[HallOfFameEntry]:
        return iter(self.entries)


class BestNConfig(BaseModel):
    max_size: int = Field(ge=1, description="Maximum number of archived entries")
    dedupe: bool = Field(default=True, description="Skip individuals already archived")
    model_config = ConfigDict(frozen=True)


def _same_genome(a: Solution, b: Solution) -> bool:
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        # element-wise __eq__ (e.g. numpy-backed genomes) has no single truth value
        return False


class BestN(HallOfFame):
    """Keeps the ``max_size`` fittest distinct individuals of the whole run.

    A newcomer enters a full archive only with fitness strictly greater than
    the worst entry, and is placed after any entries of equal fitness. Entry 0
    therefore never gets worse from one generation to the next.

    Two individuals are the same when they share a ``uid`` (an unchanged
    survivor or clone), or when fitness and genome compare equal.
    """

    def __init__(self, max_size: int, dedupe: bool = True):
        self.config = build_config(BestNConfig, max_size=max_size, dedupe=dedupe)
        self._entries: list[HallOfFameEntry] = []

    @property
    def max_size(self) -> int:
        return self.config.max_size

    @property
    def entries(self) -> tuple[HallOfFameEntry, ...]:
        return tuple(self._entries)

    def observe(self, population: Population, generation: int) -> None:
        population.require_evaluated()
        inserted = 0
        for ind in population:
            if self._try_insert(ind, generation):
                inserted += 1
        if inserted:
            logger.debug(
                "[BestN] gen {}: {} new entries, best={}",
                generation,
                inserted,
                self._entries[0].fitness,
            )

    def _try_insert(self, ind: Individual, generation: int) -> bool:
        fitness = ind.fitness
        full = len(self._entries) >= self.config.max_size
        if full and not fitness > self._entries[-1].fitness:
            return False
        if self.config.dedupe and self._is_archived(ind):
            return False

        position = len(self._entries)
        for i, entry in enumerate(self._entries):
            if fitness > entry.fitness:
                position = i
                break

        self._entries.insert(position, HallOfFameEntry.snapshot(ind, generation))
        if len(self._entries) > self.config.max_size:
            self._entries.pop()
        return True

    def _is_archived(self, ind: Individual) -> bool:
        for entry in self._entries:
            if entry.uid == ind.uid:
                return True
            if entry.fitness == ind.fitness and _same_genome(entry.solution, ind.solution):
                return True
        return False

    def __repr__(self) -> str:
        return f"BestN(max_size={self.config.max_size}, entries={len(self._entries)})"
