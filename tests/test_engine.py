import pytest

from detevo import BestN, EngineConfig, Evolution, MuPlusLambda, Simple, TournamentSelector
from detevo.config import build_config
from detevo.exceptions import ConfigurationError, EvolutionError, FitnessError
from detevo.rng import DeterministicRng, SeedSource
from problems.target_gene import TargetGene
from toy_solutions import Exploding, NaNScalar, Scalar


def _evolution(seed=42, max_workers=1, reset_period=None, pop_size=10, solution=Scalar):
    return Evolution(
        solution,
        MuPlusLambda(pop_size, pop_size, 0.5, 0.3, TournamentSelector(3)),
        BestN(3),
        EngineConfig(seed=seed, max_workers=max_workers, reset_period=reset_period),
    )


def test_identical_runs_regardless_of_worker_count():
    serial = _evolution(max_workers=1).run_for(15)
    parallel = _evolution(max_workers=4).run_for(15)

    assert serial.to_json() == parallel.to_json()
    assert [e.solution.value for e in serial.last.hall_of_fame] == [
        e.solution.value for e in parallel.last.hall_of_fame
    ]


def test_different_seeds_give_different_runs():
    assert _evolution(seed=1).run_for(5).to_json() != _evolution(seed=2).run_for(5).to_json()


def test_run_for_records_generation_zero_and_each_step():
    evo = _evolution()
    log = evo.run_for(6)

    assert [r.generation for r in log] == list(range(7))
    assert log[0].evaluations == 10
    assert log[0].crossovers == 0 and log[0].mutations == 0
    assert log[0].stats.size == 10
    assert evo.metrics.total_generations == 6
    assert evo.generation == 6


def test_run_for_zero_returns_only_generation_zero():
    log = _evolution().run_for(0)
    assert len(log) == 1
    assert log[0].generation == 0


def test_best_fitness_is_monotonic():
    log = _evolution(pop_size=6, reset_period=4).run_for(20)
    curve = log.best_fitness_curve()
    assert all(later >= earlier for earlier, later in zip(curve, curve[1:]))


def test_predicate_sees_generation_zero():
    seen = []

    def predicate(record):
        seen.append(record.generation)
        return True

    log = _evolution().run_until(predicate)
    assert seen == [0]
    assert len(log) == 1


def test_run_until_target():
    log = _evolution().run_until(lambda r: r.generation >= 3 and r.best.fitness > 0)
    assert log.last.generation >= 3


def test_log_is_read_only_after_run():
    evo = _evolution()
    log = evo.run_for(2)
    assert log.frozen
    with pytest.raises(EvolutionError):
        log.append(log[0])


def test_driver_runs_once():
    evo = _evolution()
    evo.run_for(1)
    with pytest.raises(EvolutionError):
        evo.run_for(1)


def test_callback_sees_every_generation():
    views = []
    _evolution().run_for_with(4, views.append)
    assert [v.generation for v in views] == [0, 1, 2, 3, 4]
    assert all(len(v.population) == 10 for v in views)
    assert all(v.record.generation == v.generation for v in views)


def test_reset_replaces_population_and_keeps_hall_of_fame():
    populations = {}
    uids = {}
    archived = {}

    def capture(view):
        populations[view.generation] = list(view.population)
        uids[view.generation] = {ind.uid for ind in view.population}
        archived[view.generation] = [
            (entry, entry.fitness, entry.solution.value) for entry in view.hall_of_fame
        ]

    evo = _evolution(reset_period=5)
    log = evo.run_for_with(8, capture)

    assert [r.reset for r in log] == [False] * 5 + [True] + [False] * 3
    assert evo.metrics.resets == 1
    assert [r.generation for r in log] == list(range(9))

    # the population after generation 5 is freshly generated
    previous = populations[4] + populations[5]
    assert not any(new is old for new in populations[6] for old in previous)
    assert uids[6].isdisjoint(uids[5] | uids[4])

    # archived entries survive the reset untouched
    for entry, fitness, value in archived[5]:
        assert entry.fitness == fitness
        assert entry.solution.value == value
    assert log[6].best.fitness >= log[5].best.fitness


def test_no_reset_when_run_stops_on_a_reset_generation():
    evo = _evolution(reset_period=5)
    log = evo.run_for(5)
    assert not log.last.reset
    assert evo.metrics.resets == 0


def test_simple_algorithm_runs():
    evo = Evolution(Scalar, Simple(8, 0.5, 0.2, TournamentSelector(2)), BestN(1), EngineConfig(seed=3))
    log = evo.run_for(5)
    assert len(log) == 6


def test_nan_fitness_aborts_run():
    with pytest.raises(FitnessError):
        _evolution(solution=NaNScalar).run_for(3)


def test_user_errors_propagate():
    with pytest.raises(RuntimeError, match="evaluation failed"):
        _evolution(solution=Exploding).run_for(3)


def test_seed_from_environment(monkeypatch):
    monkeypatch.setenv("DETEVO_SEED", "99")
    evo = _evolution(seed=None)
    assert evo.seed == 99
    assert evo.seed_resolution.source is SeedSource.ENVIRONMENT


def test_explicit_rng_overrides_config():
    evo = Evolution(
        Scalar,
        MuPlusLambda(4, 4, 0.5, 0.2, TournamentSelector(2)),
        BestN(1),
        EngineConfig(seed=1),
        rng=DeterministicRng(5),
    )
    assert evo.seed == 5


@pytest.mark.parametrize(
    "values", [{"reset_period": 0}, {"max_workers": 0}, {"seed": -1}, {"seed": 2**64}]
)
def test_invalid_engine_config(values):
    with pytest.raises(ConfigurationError):
        build_config(EngineConfig, **values)


def test_rejects_non_solution_type():
    with pytest.raises(ConfigurationError):
        Evolution(int, MuPlusLambda(4, 4, 0.5, 0.2, TournamentSelector(2)), BestN(1))


def test_invalid_generation_count():
    with pytest.raises(ConfigurationError):
        _evolution().run_for(-1)


def test_single_gene_converges_to_target():
    evo = Evolution(
        TargetGene,
        MuPlusLambda(50, 50, 0.5, 0.2, TournamentSelector(3)),
        BestN(1),
        EngineConfig(seed=42),
    )
    log = evo.run_for(200)

    assert log.last.best.fitness > log[0].best.fitness
    assert abs(log.last.best.solution.gene - 0.7) < 0.05


def test_or_variation_runs_are_reproducible():
    def run(max_workers):
        return Evolution(
            Scalar,
            MuPlusLambda(10, 10, 0.4, 0.4, TournamentSelector(3), variation="or"),
            BestN(3),
            EngineConfig(seed=7, max_workers=max_workers),
        ).run_for(8)

    assert run(1).to_json() == run(4).to_json()
