import pytest

from detevo import Individual, Population
from detevo.exceptions import ConfigurationError, EvolutionError
from detevo.solutions import Evaluated
from detevo.utils import WorkerPool
from toy_solutions import Exploding, Scalar, evaluated_population


def _tagged(fitnesses):
    # genome value doubles as a tag; fitness is set independently
    return Population(
        Individual(Scalar(tag), state=Evaluated(f)) for tag, f in enumerate(fitnesses)
    )


def test_par_evaluate_all_skips_cached():
    population = Population(Individual(Scalar(v)) for v in (0.1, 0.2, 0.3))
    assert population.par_evaluate_all() == 3
    assert population.par_evaluate_all() == 0
    assert population.fitnesses() == [0.1, 0.2, 0.3]
    assert all(ind.solution.calls == 1 for ind in population)


def test_par_evaluate_all_with_pool():
    population = Population(Individual(Scalar(v / 10)) for v in range(20))
    with WorkerPool(4) as pool:
        assert population.par_evaluate_all(pool) == 20
    assert population.fitnesses() == [v / 10 for v in range(20)]


def test_evaluation_error_propagates_from_pool():
    population = Population([Individual(Scalar(1.0)), Individual(Exploding(0.0))])
    with WorkerPool(2) as pool:
        with pytest.raises(RuntimeError):
            population.par_evaluate_all(pool)


def test_require_evaluated():
    population = Population([Individual(Scalar(1.0))])
    with pytest.raises(EvolutionError):
        population.require_evaluated()
    with pytest.raises(EvolutionError):
        population.best()


def test_sort_by_fitness_is_stable_and_descending():
    population = _tagged([1, 3, 1, 3, 2])
    population.sort_by_fitness()
    assert [ind.solution.value for ind in population] == [1, 3, 4, 0, 2]


def test_best_prefers_earliest_among_equals():
    population = _tagged([1, 3, 2, 3])
    assert population.best().solution.value == 1


def test_sequence_api_and_replace():
    population = evaluated_population([0.1, 0.2, 0.3])
    assert len(population) == 3
    assert [ind.fitness for ind in population[1:]] == [0.2, 0.3]

    newcomer = Individual(Scalar(0.9))
    population.replace(0, newcomer)
    assert population[0] is newcomer
    assert population.individuals[0] is newcomer


def test_worker_pool_preserves_order():
    with WorkerPool(4) as pool:
        assert pool.map(lambda x: x * x, range(50)) == [x * x for x in range(50)]


def test_worker_pool_rejects_zero_workers():
    with pytest.raises(ConfigurationError):
        WorkerPool(0)
