"""Validation primitives for plugin APIs."""

from __future__ import annotations

import math
from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when validation fails."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for request/response validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


TModel = TypeVar("TModel", bound=SchemaModel)


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:  # pragma: no cover - exercised in tests
        raise ValidationError(
            "Invalid request payload",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc


def parse_query(model: type[TModel], args: Mapping[str, Any] | None) -> TModel:
    """Validate query-string arguments, dropping empty values first."""

    cleaned = {key: value for key, value in (args or {}).items() if value not in ("", None)}
    return parse_model(model, cleaned)


def ensure_finite(value: Any, *, field: str = "value") -> float:
    """Coerce ``value`` to a finite float or raise :class:`ValidationError`."""

    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"{field} must be a finite number")
    return number


__all__ = [
    "ValidationError",
    "SchemaModel",
    "parse_model",
    "parse_query",
    "ensure_finite",
]
