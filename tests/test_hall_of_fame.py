import dataclasses

import numpy as np
import pytest

from detevo import BestN, Individual, MultiObjective, Population
from detevo.exceptions import ConfigurationError, EvolutionError
from detevo.solutions import Evaluated
from toy_solutions import Scalar, evaluated_population


def _fitnesses(hof):
    return [entry.fitness for entry in hof]


def test_best_one():
    hof = BestN(1)
    hof.observe(evaluated_population([1.0, 2.0, 3.0]), 0)
    assert _fitnesses(hof) == [3.0]

    hof.observe(evaluated_population([3.5, 0.0]), 1)
    assert _fitnesses(hof) == [3.5]
    assert hof[0].generation == 1


def test_best_three():
    hof = BestN(3)
    hof.observe(evaluated_population([1.0, 2.0, 3.0, 4.0, 5.0]), 0)
    assert _fitnesses(hof) == [5.0, 4.0, 3.0]

    hof.observe(evaluated_population([5.5, 5.0, 4.5]), 1)
    assert _fitnesses(hof) == [5.5, 5.0, 4.5]


def test_keeps_best_across_worse_generations():
    hof = BestN(2)
    hof.observe(evaluated_population([0.9, 0.8]), 0)
    hof.observe(evaluated_population([0.1, 0.2, 0.3]), 1)
    assert _fitnesses(hof) == [0.9, 0.8]
    assert [e.generation for e in hof] == [0, 0]


def test_equal_fitness_does_not_displace():
    hof = BestN(1)
    first = evaluated_population([3.0])
    hof.observe(first, 0)
    hof.observe(evaluated_population([3.0]), 1)
    assert hof[0].uid == first[0].uid
    assert hof[0].generation == 0


def test_ties_insert_after_existing_entries():
    hof = BestN(3)
    hof.observe(evaluated_population([2.0, 1.0]), 0)
    # same fitness as the archived 2.0, different genome
    hof.observe(Population([Individual(Scalar(9.0), state=Evaluated(2.0))]), 1)
    assert _fitnesses(hof) == [2.0, 2.0, 1.0]
    assert [e.generation for e in hof] == [0, 1, 0]


def test_same_individual_is_archived_once():
    hof = BestN(5)
    population = evaluated_population([0.3, 0.6])
    hof.observe(population, 0)
    hof.observe(population, 1)
    assert _fitnesses(hof) == [0.6, 0.3]


def test_equal_genome_and_fitness_is_a_duplicate():
    hof = BestN(5)
    hof.observe(evaluated_population([0.6]), 0)
    hof.observe(evaluated_population([0.6]), 1)
    assert len(hof) == 1


def test_dedupe_can_be_disabled():
    hof = BestN(5, dedupe=False)
    population = evaluated_population([0.6])
    hof.observe(population, 0)
    hof.observe(population, 1)
    assert _fitnesses(hof) == [0.6, 0.6]


def test_entries_are_snapshots():
    hof = BestN(1)
    population = evaluated_population([0.5])
    hof.observe(population, 0)

    population[0].mutate(np.random.default_rng(0))
    population[0].solution.value = 100.0

    assert hof[0].solution.value == 0.5
    assert hof[0].fitness == 0.5
    assert hof[0].solution is not population[0].solution
    with pytest.raises(dataclasses.FrozenInstanceError):
        hof[0].fitness = 1.0


def test_best_and_empty_archive():
    hof = BestN(2)
    assert hof.best() is None
    assert len(hof) == 0
    hof.observe(evaluated_population([0.2, 0.7]), 0)
    assert hof.best().fitness == 0.7


def test_invalid_size():
    with pytest.raises(ConfigurationError):
        BestN(0)


def test_unevaluated_population_is_rejected():
    with pytest.raises(EvolutionError):
        BestN(1).observe(Population([Individual(Scalar(1.0))]), 0)


def test_equal_multi_objective_sum_does_not_displace():
    hof = BestN(1)
    hof.observe(Population([Individual(Scalar(1.0), state=Evaluated(MultiObjective([1.0, 0.0])))]), 0)
    hof.observe(Population([Individual(Scalar(2.0), state=Evaluated(MultiObjective([0.0, 1.0])))]), 1)
    assert hof[0].generation == 0
    assert hof[0].fitness.values == (1.0, 0.0)

    hof.observe(Population([Individual(Scalar(3.0), state=Evaluated(MultiObjective([0.0, 1.5])))]), 2)
    assert hof[0].generation == 2
