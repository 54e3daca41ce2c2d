"""Tiny helpers for building validated configuration models."""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from detevo.exceptions import ConfigurationError

M = TypeVar("M", bound=BaseModel)


def build_config(model: type[M], **values: Any) -> M:
    """Instantiate *model*, reporting validation failures as ConfigurationError."""
    try:
        return model(**values)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or model.__name__}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid {model.__name__}: {problems}") from exc
