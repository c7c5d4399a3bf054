"""
oxpecker_client.tier1_runtime.validate
────────────────────────────────────────
Call-parameter validation via Pydantic v2. Raises InvalidParameters (not raw
Pydantic errors) so callers see one error kind for bad input, and nothing
invalid is ever sent over the wire.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from oxpecker_client.tier0_core.errors import InvalidParameters

T = TypeVar("T", bound="CallParameters")


class CallParameters(BaseModel):
    """
    Base for per-endpoint parameter records. Strict: no coercion of "true"
    to True or "5" to 5; unknown parameter names are rejected.
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")


class NoParameters(CallParameters):
    """Parameter record for endpoints that take none."""


def validate_params(model: type[T], data: Mapping[str, Any] | T | None) -> T:
    """
    Validate raw call parameters against an endpoint's parameter model.
    Raises InvalidParameters on missing required fields or wrong kinds.

    Usage:
        class GreetingParams(CallParameters):
            name: str

        params = validate_params(GreetingParams, {"name": "World"})
    """
    if isinstance(data, model):
        return data
    if data is not None and not isinstance(data, Mapping):
        raise InvalidParameters(
            f"Expected a mapping or {model.__name__}, got {type(data).__name__}.",
        )
    try:
        return model.model_validate(dict(data or {}))
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]) or "__root__": err["msg"]
            for err in exc.errors()
        }
        raise InvalidParameters(
            f"Invalid parameters for {model.__name__}.",
            fields=fields,
        ) from exc


__all__ = ["CallParameters", "NoParameters", "validate_params"]
