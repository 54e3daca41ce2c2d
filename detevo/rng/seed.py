"""Resolution of the global run seed.

Order: explicit seed, then the ``DETEVO_SEED`` environment variable, then a
64-bit value drawn from the OS entropy pool. The result is reported back so a
caller can log it and reproduce the run later.
"""

from __future__ import annotations

from enum import Enum
import os
import re
import secrets
from typing import Mapping

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from detevo.exceptions import ConfigurationError

SEED_ENV_VAR = "DETEVO_SEED"
MAX_SEED = 2**64 - 1


class SeedSource(str, Enum):
    EXPLICIT = "explicit"
    ENVIRONMENT = "environment"
    ENTROPY = "entropy"


class SeedResolution(BaseModel):
    """Outcome of :func:`resolve_seed`."""

    seed: int = Field(ge=0, description="Resolved global seed")
    source: SeedSource = Field(description="Where the seed came from")
    fell_back: bool = Field(
        default=False,
        description="True when the environment variable was set but unparsable",
    )
    env_value: str | None = Field(
        default=None, description="Raw environment value that was inspected"
    )

    model_config = ConfigDict(frozen=True)


def parse_seed(raw: str) -> int | None:
    """Parse *raw* as an unsigned 64-bit integer, or return None."""
    text = raw.strip()
    if not re.fullmatch(r"[0-9]+", text):
        return None
    value = int(text)
    if value > MAX_SEED:
        return None
    return value


def resolve_seed(
    seed: int | None = None,
    *,
    env_var: str = SEED_ENV_VAR,
    environ: Mapping[str, str] | None = None,
) -> SeedResolution:
    """Resolve the global seed for one run.

    Args:
        seed: Explicit seed; wins over everything else when given.
        env_var: Name of the environment variable to consult.
        environ: Mapping used instead of ``os.environ`` (handy in tests).

    Returns:
        SeedResolution describing the seed and its source. ``fell_back`` is set
        when the environment held a value that could not be parsed.
    """
    if seed is not None:
        if isinstance(seed, bool) or not isinstance(seed, int) or seed < 0:
            raise ConfigurationError(
                f"seed must be a non-negative integer, got {seed!r}"
            )
        logger.info("[Seed] Using explicit seed {}", seed)
        return SeedResolution(seed=seed, source=SeedSource.EXPLICIT)

    env = os.environ if environ is None else environ
    raw = env.get(env_var)
    if raw is not None:
        parsed = parse_seed(raw)
        if parsed is not None:
            logger.info("[Seed] Using seed {} from ${}", parsed, env_var)
            return SeedResolution(
                seed=parsed, source=SeedSource.ENVIRONMENT, env_value=raw
            )

    entropy_seed = secrets.randbits(64)
    if raw is not None:
        logger.warning(
            "[Seed] Unable to parse ${}={!r} as an unsigned 64-bit integer; "
            "using OS-generated seed {}",
            env_var,
            raw,
            entropy_seed,
        )
    else:
        logger.info(
            "[Seed] ${} not set; using OS-generated seed {}", env_var, entropy_seed
        )
    return SeedResolution(
        seed=entropy_seed,
        source=SeedSource.ENTROPY,
        fell_back=raw is not None,
        env_value=raw,
    )
