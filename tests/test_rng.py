import numpy as np
import pytest

from detevo.exceptions import ConfigurationError
from detevo.rng import (
    DeterministicRng,
    SeedSource,
    StreamPurpose,
    parse_seed,
    resolve_seed,
)


def test_same_key_same_sequence():
    a = DeterministicRng(7).stream(1, 2, 3).random(5)
    b = DeterministicRng(7).stream(1, 2, 3).random(5)
    np.testing.assert_array_equal(a, b)


def test_distinct_keys_and_seeds_differ():
    rng = DeterministicRng(7)
    base = rng.stream(1, 2, 3).random(5)
    assert not np.array_equal(base, rng.stream(1, 2, 4).random(5))
    assert not np.array_equal(base, rng.stream(2, 2, 3).random(5))
    assert not np.array_equal(base, DeterministicRng(8).stream(1, 2, 3).random(5))


def test_stream_does_not_depend_on_other_draws():
    rng = DeterministicRng(99)
    expected = rng.stream(4, 0).integers(0, 1000, size=10)
    for key in range(20):
        rng.stream(key).random(100)
    np.testing.assert_array_equal(expected, rng.stream(4, 0).integers(0, 1000, size=10))


def test_scope_prefixes_keys():
    rng = DeterministicRng(3)
    scope = rng.scope(5, StreamPurpose.VARY)
    assert scope.prefix == (5, 2)
    np.testing.assert_array_equal(scope.stream(9).random(3), rng.stream(5, 2, 9).random(3))
    np.testing.assert_array_equal(
        scope.scope(1).stream(0).random(3), rng.stream(5, 2, 1, 0).random(3)
    )


@pytest.mark.parametrize("key", [(-1,), (1, True), (1.5,), ("a",)])
def test_invalid_stream_keys(key):
    with pytest.raises(ValueError):
        DeterministicRng(1).stream(*key)


@pytest.mark.parametrize("seed", [-1, True, 1.0, "3"])
def test_invalid_seed(seed):
    with pytest.raises(ConfigurationError):
        DeterministicRng(seed)


def test_parse_seed():
    assert parse_seed("42") == 42
    assert parse_seed(" 42\n") == 42
    assert parse_seed(str(2**64 - 1)) == 2**64 - 1
    assert parse_seed(str(2**64)) is None
    assert parse_seed("-1") is None
    assert parse_seed("+5") is None
    assert parse_seed("0x10") is None
    assert parse_seed("") is None


def test_explicit_seed_wins_over_environment():
    res = resolve_seed(5, environ={"DETEVO_SEED": "17"})
    assert res.seed == 5
    assert res.source is SeedSource.EXPLICIT
    assert not res.fell_back


def test_explicit_seed_must_be_non_negative_int():
    with pytest.raises(ConfigurationError):
        resolve_seed(-3)
    with pytest.raises(ConfigurationError):
        resolve_seed(False)


def test_seed_from_environment():
    res = resolve_seed(environ={"DETEVO_SEED": "12345"})
    assert res.seed == 12345
    assert res.source is SeedSource.ENVIRONMENT
    assert res.env_value == "12345"
    assert not res.fell_back


def test_custom_environment_variable():
    res = resolve_seed(env_var="MY_SEED", environ={"MY_SEED": "8", "DETEVO_SEED": "9"})
    assert res.seed == 8


def test_unparsable_environment_seed_falls_back(caplog):
    res = resolve_seed(environ={"DETEVO_SEED": "not-a-number"})
    assert res.source is SeedSource.ENTROPY
    assert res.fell_back
    assert res.env_value == "not-a-number"
    assert 0 <= res.seed < 2**64
    assert "Unable to parse" in caplog.text


def test_unset_environment_uses_entropy():
    res = resolve_seed(environ={})
    assert res.source is SeedSource.ENTROPY
    assert not res.fell_back
    assert res.env_value is None


def test_process_environment_is_consulted(monkeypatch):
    monkeypatch.setenv("DETEVO_SEED", "77")
    assert resolve_seed().seed == 77
