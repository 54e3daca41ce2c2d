"""Offspring variation shared by the built-in algorithms.

Parents are cloned first, so the individuals passed in are never modified.

``vary_pairs`` may apply both crossover *and* mutation to the same child::

    clone every parent
    pair the clones as (0, 1), (2, 3), ...
    for each pair, using the pair's own random stream:
        with probability cxpb apply crossover to the pair
        for each child in the pair:
            with probability mutpb mutate the child
    an unpaired trailing clone only gets the mutation roll

Pair ``p`` draws from ``scope.stream(p)``, so the result does not depend on
which worker handles which pair.

``vary_or`` applies crossover *or* mutation *or* neither to each child::

    for each offspring slot, using the slot's own random stream:
        roll r in [0, 1)
        r < cxpb:          clone two distinct parents, cross them, keep the first
        r < cxpb + mutpb:  clone one parent and mutate it
        otherwise:         clone one parent unchanged
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from detevo.evolution.algorithms.base import VariationConfig
from detevo.exceptions import ConfigurationError, EvolutionError
from detevo.rng.streams import StreamScope
from detevo.solutions.individual import Individual
from detevo.utils.worker_pool import WorkerPool


@dataclass(frozen=True)
class VariationCounts:
    crossovers: int = 0
    mutations: int = 0


@dataclass(frozen=True)
class _PairTask:
    index: int
    first: Individual
    second: Individual | None


def _vary_pair(task: _PairTask, cxpb: float, mutpb: float, scope: StreamScope) -> tuple[list[Individual], VariationCounts]:
    rng = scope.stream(task.index)
    crossovers = 0
    mutations = 0

    children = [task.first] if task.second is None else [task.first, task.second]
    if task.second is not None and rng.random() < cxpb:
        Individual.crossover(task.first, task.second, rng)
        crossovers += 1

    for child in children:
        if rng.random() < mutpb:
            child.mutate(rng)
            mutations += 1

    return children, VariationCounts(crossovers, mutations)


def vary_pairs(
    parents: Sequence[Individual],
    cxpb: float,
    mutpb: float,
    scope: StreamScope,
    pool: WorkerPool | None = None,
) -> tuple[list[Individual], VariationCounts]:
    """Produce ``len(parents)`` offspring from *parents*."""
    clones = [p.clone() for p in parents]
    tasks = [
        _PairTask(
            index=pair_idx,
            first=clones[i],
            second=clones[i + 1] if i + 1 < len(clones) else None,
        )
        for pair_idx, i in enumerate(range(0, len(clones), 2))
    ]

    def run(task: _PairTask) -> tuple[list[Individual], VariationCounts]:
        return _vary_pair(task, cxpb, mutpb, scope)

    results = pool.map(run, tasks) if pool is not None else [run(t) for t in tasks]

    offspring: list[Individual] = []
    crossovers = 0
    mutations = 0
    for children, counts in results:
        offspring.extend(children)
        crossovers += counts.crossovers
        mutations += counts.mutations
    return offspring, VariationCounts(crossovers, mutations)


def _vary_slot(
    slot: int, parents: Sequence[Individual], cxpb: float, mutpb: float, scope: StreamScope
) -> tuple[Individual, VariationCounts]:
    rng = scope.stream(slot)
    n = len(parents)
    roll = rng.random()

    if roll < cxpb:
        if n > 1:
            i, j = (int(k) for k in rng.choice(n, size=2, replace=False))
        else:
            i = j = 0
        first, second = parents[i].clone(), parents[j].clone()
        Individual.crossover(first, second, rng)
        return first, VariationCounts(crossovers=1)

    child = parents[int(rng.integers(0, n))].clone()
    if roll < cxpb + mutpb:
        child.mutate(rng)
        return child, VariationCounts(mutations=1)
    return child, VariationCounts()


def vary_or(
    parents: Sequence[Individual],
    n_offspring: int,
    cxpb: float,
    mutpb: float,
    scope: StreamScope,
    pool: WorkerPool | None = None,
) -> tuple[list[Individual], VariationCounts]:
    """Produce *n_offspring* children, each by exactly one of crossover, mutation or cloning.

    Parents are drawn uniformly from *parents*; slot ``i`` uses ``scope.stream(i)``.
    """
    if cxpb + mutpb > 1.0:
        raise ConfigurationError(f"cxpb + mutpb must not exceed 1, got {cxpb} + {mutpb}")
    if n_offspring and not parents:
        raise EvolutionError("vary_or needs at least one parent")

    def run(slot: int) -> tuple[Individual, VariationCounts]:
        return _vary_slot(slot, parents, cxpb, mutpb, scope)

    slots = range(n_offspring)
    results = pool.map(run, slots) if pool is not None else [run(s) for s in slots]

    offspring = [child for child, _ in results]
    crossovers = sum(counts.crossovers for _, counts in results)
    mutations = sum(counts.mutations for _, counts in results)
    return offspring, VariationCounts(crossovers, mutations)


def vary(
    parents: Sequence[Individual],
    n_offspring: int,
    config: VariationConfig,
    scope: StreamScope,
    pool: WorkerPool | None = None,
) -> tuple[list[Individual], VariationCounts]:
    """Dispatch on ``config.variation``; ``"and"`` needs ``len(parents) == n_offspring``."""
    if config.variation == "or":
        return vary_or(parents, n_offspring, config.cxpb, config.mutpb, scope, pool)
    return vary_pairs(parents, config.cxpb, config.mutpb, scope, pool)
