"""Unit converter API with standardized responses.

Success bodies are ``{"success": true, "data": ...}``; failures are
``{"success": false, "error": {"code", "message", "details"}}`` with a
``unit.*`` code and status 400 or 422.
"""

from __future__ import annotations

from flask import Blueprint, Response, request

from common.errors import UnprocessableAppError, ValidationAppError
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    DomainError,
    InvalidUnitError,
    convert_detailed,
    convert_query,
    list_categories,
    list_units,
)

# The catalog is compiled in, so listings may be cached by any intermediary.
CATALOG_CACHE_CONTROL = "public, max-age=86400"


class ConvertPayload(SchemaModel):
    value: float | int | str
    from_unit: str
    to_unit: str
    category: str


class QueryPayload(SchemaModel):
    query: str


api_bp = Blueprint("unit_converter_api", __name__, url_prefix="/api/unit_converter")


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="unit.invalid_request",
            details={"errors": exc.details} if exc.details else None,
        )
    )


@api_bp.get("/categories")
def categories() -> Response:
    return ok({"categories": list_categories()}, cache_control=CATALOG_CACHE_CONTROL)


@api_bp.get("/units/<category>")
def units_endpoint(category: str) -> Response:
    try:
        units = list_units(category)
    except InvalidUnitError as exc:
        return fail(ValidationAppError(message=str(exc), code="unit.invalid_category"))
    return ok({"category": category, "units": units}, cache_control=CATALOG_CACHE_CONTROL)


@api_bp.post("/convert")
def convert_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ConvertPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        result = convert_detailed(
            payload.value, payload.from_unit, payload.to_unit, payload.category
        )
    except InvalidUnitError as exc:
        return fail(ValidationAppError(message=str(exc), code="unit.invalid_unit"))
    except ValidationError as exc:
        return fail(ValidationAppError(message=str(exc), code="unit.invalid_value"))
    except DomainError as exc:
        return fail(UnprocessableAppError(message=str(exc), code="unit.undefined"))
    return ok(result.to_dict())


@api_bp.post("/queries")
def query_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(QueryPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        result = convert_query(payload.query)
    except ValidationError as exc:
        return fail(ValidationAppError(message=str(exc), code="unit.invalid_query"))
    except DomainError as exc:
        return fail(UnprocessableAppError(message=str(exc), code="unit.undefined"))
    return ok(result)


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "categories",
    "units_endpoint",
    "convert_endpoint",
    "query_endpoint",
]
