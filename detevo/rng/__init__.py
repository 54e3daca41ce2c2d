from detevo.rng.seed import (
    SEED_ENV_VAR,
    SeedResolution,
    SeedSource,
    parse_seed,
    resolve_seed,
)
from detevo.rng.streams import DeterministicRng, StreamPurpose, StreamScope

__all__ = [
    "SEED_ENV_VAR",
    "DeterministicRng",
    "SeedResolution",
    "SeedSource",
    "StreamPurpose",
    "StreamScope",
    "parse_seed",
    "resolve_seed",
]
