"""Exchange-rate API blueprint with standardized responses.

Every endpoint answers with the shared envelope: ``{"success": true, "data":
...}`` on success and ``{"success": false, "error": {"code", "message",
"details"}}`` on failure. Error codes are ``fx.invalid_request`` (400),
``fx.missing_rate`` (422, ``details.missing``) and ``fx.upstream_error``
(502, ``details.upstream_status``).
"""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request
from pydantic import Field

from common.errors import (
    AppError,
    UnprocessableAppError,
    UpstreamAppError,
    ValidationAppError,
)
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_query

from ..core import (
    SUPPORTED_CODES,
    FxSettings,
    MissingRateError,
    RateClient,
    UpstreamError,
    build_history_series,
    convert_currency,
    convert_with_table,
    history_range_from_days,
    load_settings,
    parse_currency,
    parse_rate_date,
    today_utc,
)

LOGGER = get_logger("fx_rates.api")


class RatesQuery(SchemaModel):
    base: str | None = None
    symbols: str | None = None


class HistoricalQuery(RatesQuery):
    date: str = Field(min_length=1)


class HistoryQuery(SchemaModel):
    from_: str = Field(default="EUR", alias="from")
    to: str = "USD"
    days: str | None = None


class ConvertQuery(SchemaModel):
    amount: float
    from_: str = Field(alias="from")
    to: str
    date: str | None = None


api_bp = Blueprint("fx_rates_api", __name__, url_prefix="/api/fx")


def _settings() -> FxSettings:
    settings = current_app.config.get("PLUGIN_SETTINGS", {}).get("fx_rates", {})
    return load_settings(settings)


def _rate_client(settings: FxSettings) -> RateClient:
    return RateClient(settings)


def _error_response(exc: Exception) -> Response:
    error: AppError
    if isinstance(exc, ValidationError):
        details = exc.details if isinstance(exc.details, dict) else None
        if isinstance(exc.details, list):
            details = {"errors": exc.details}
        error = ValidationAppError(message=str(exc), code="fx.invalid_request", details=details)
    elif isinstance(exc, MissingRateError):
        error = UnprocessableAppError(
            message=str(exc), code="fx.missing_rate", details={"missing": list(exc.missing)}
        )
    elif isinstance(exc, UpstreamError):
        LOGGER.warning("rate provider failure on %s: %s", request.path, exc)
        error = UpstreamAppError(
            message=str(exc),
            code="fx.upstream_error",
            details={"upstream_status": exc.status_code},
        )
    else:  # pragma: no cover - guarded by the callers' except clauses
        raise exc
    return fail(error)


@api_bp.get("/currencies")
def currencies() -> Response:
    settings = _settings()
    return ok(
        {"currencies": list(SUPPORTED_CODES), "default_base": settings.default_base.value},
        cache_control="public, max-age=86400",
    )


@api_bp.get("/latest")
def latest() -> Response:
    settings = _settings()
    try:
        query = parse_query(RatesQuery, request.args)
        with _rate_client(settings) as client:
            table = client.fetch_latest_rates(query.base, query.symbols)
    except (ValidationError, UpstreamError) as exc:
        return _error_response(exc)
    return ok(table.to_dict(), cache_control=settings.latest_cache_control)


@api_bp.get("/historical")
def historical() -> Response:
    settings = _settings()
    try:
        query = parse_query(HistoricalQuery, request.args)
        day = parse_rate_date(query.date)
        with _rate_client(settings) as client:
            table = client.fetch_historical_rates(day, query.base, query.symbols)
    except (ValidationError, UpstreamError) as exc:
        return _error_response(exc)
    return ok(table.to_dict(), cache_control=settings.historical_cache_control(day))


@api_bp.get("/history")
def history() -> Response:
    settings = _settings()
    try:
        query = parse_query(HistoryQuery, request.args)
        with _rate_client(settings) as client:
            series = build_history_series(
                client,
                query.from_,
                query.to,
                history_range_from_days(query.days),
            )
    except (ValidationError, UpstreamError) as exc:
        return _error_response(exc)
    return ok(series.to_dict(), cache_control=settings.history_cache_control)


@api_bp.get("/convert")
def convert() -> Response:
    """Convert ``amount`` between two currencies through the configured base.

    Success: ``{"success": true, "data": {"amount", "from", "to", "value",
    "base", "date"}}``. Failure: ``{"success": false, "error": {"code",
    "message", "details"}}`` with 400, 422 (missing rate) or 502 (provider).
    Same-currency requests are answered without contacting the provider.
    """

    settings = _settings()
    base = settings.default_base
    try:
        query = parse_query(ConvertQuery, request.args)
        source = parse_currency(query.from_, field="from")
        target = parse_currency(query.to, field="to")
        day = parse_rate_date(query.date) if query.date else None
        if source is target:
            value = convert_currency(query.amount, source, target, base, {})
            rate_date = (day or today_utc()).isoformat()
        else:
            symbols = [code for code in (source, target) if code is not base]
            with _rate_client(settings) as client:
                if day is not None:
                    table = client.fetch_historical_rates(day, base, symbols)
                else:
                    table = client.fetch_latest_rates(base, symbols)
            value = convert_with_table(query.amount, source, target, table)
            rate_date = table.date
    except (ValidationError, MissingRateError, UpstreamError) as exc:
        return _error_response(exc)
    if day is not None:
        cache_control = settings.historical_cache_control(day)
    else:
        cache_control = settings.latest_cache_control
    return ok(
        {
            "amount": query.amount,
            "from": source.value,
            "to": target.value,
            "value": value,
            "base": base.value,
            "date": rate_date,
        },
        cache_control=cache_control,
    )


blueprints = [api_bp]


__all__ = ["blueprints", "currencies", "latest", "historical", "history", "convert"]
