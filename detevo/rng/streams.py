from __future__ import annotations

from enum import IntEnum

import numpy as np

from detevo.exceptions import ConfigurationError


class StreamPurpose(IntEnum):
    """Second component of a canonical stream key ``(generation, purpose, slot)``."""

    GENERATE = 0
    SELECT = 1
    VARY = 2
    SURVIVE = 3


def _check_key(key: tuple[int, ...]) -> tuple[int, ...]:
    for part in key:
        if isinstance(part, bool) or not isinstance(part, int) or part < 0:
            raise ValueError(f"stream key parts must be non-negative ints, got {key!r}")
    return tuple(int(p) for p in key)


class DeterministicRng:
    """Factory of independent random streams derived from one global seed.

    ``stream(*key)`` is a pure function of ``(seed, key)``: the same key always
    yields a generator producing the same sequence, and distinct keys yield
    statistically independent sequences. Nothing is shared between streams, so
    tasks running on different workers never contend for a cursor.
    """

    __slots__ = ("_seed",)

    def __init__(self, seed: int):
        if isinstance(seed, bool) or not isinstance(seed, int) or seed < 0:
            raise ConfigurationError(
                f"seed must be a non-negative integer, got {seed!r}"
            )
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def seed_sequence(self, *key: int) -> np.random.SeedSequence:
        return np.random.SeedSequence(entropy=self._seed, spawn_key=_check_key(key))

    def stream(self, *key: int) -> np.random.Generator:
        return np.random.default_rng(self.seed_sequence(*key))

    def scope(self, *prefix: int) -> StreamScope:
        return StreamScope(self, _check_key(prefix))

    def __repr__(self) -> str:
        return f"DeterministicRng(seed={self._seed})"


class StreamScope:
    """A :class:`DeterministicRng` with a fixed key prefix."""

    __slots__ = ("_rng", "_prefix")

    def __init__(self, rng: DeterministicRng, prefix: tuple[int, ...]):
        self._rng = rng
        self._prefix = prefix

    @property
    def prefix(self) -> tuple[int, ...]:
        return self._prefix

    def stream(self, *suffix: int) -> np.random.Generator:
        return self._rng.stream(*self._prefix, *suffix)

    def scope(self, *suffix: int) -> StreamScope:
        return StreamScope(self._rng, self._prefix + _check_key(suffix))

    def __repr__(self) -> str:
        return f"StreamScope(seed={self._rng.seed}, prefix={self._prefix})"
