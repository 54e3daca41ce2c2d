from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from detevo.rng.seed import MAX_SEED, SEED_ENV_VAR


class EngineConfig(BaseModel):
    """Configuration options controlling Evolution behaviour."""

    seed: int | None = Field(
        default=None,
        ge=0,
        le=MAX_SEED,
        description="Global seed; None consults the environment, then OS entropy",
    )
    seed_env_var: str = Field(
        default=SEED_ENV_VAR, description="Environment variable holding the seed"
    )
    reset_period: int | None = Field(
        default=None,
        ge=1,
        description="Regenerate the population every N generations (None = never)",
    )
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Worker threads for evaluation and variation (None = CPU count)",
    )
    model_config = ConfigDict(frozen=True)
