"""Facade for the exchange-rate engine."""

from __future__ import annotations

from .client import RateClient
from .currencies import (
    DEFAULT_BASE,
    SUPPORTED_CODES,
    CurrencyCode,
    parse_currency,
    parse_symbols,
)
from .dates import PROVIDER_FLOOR, parse_rate_date, today_utc
from .errors import (
    FxError,
    InvalidCurrencyError,
    InvalidDateError,
    MissingRateError,
    UpstreamError,
)
from .history import (
    AllAvailable,
    HistoryRange,
    Trailing,
    build_history_series,
    history_range_from_days,
    history_start,
    trim_series,
)
from .models import HistoryPoint, HistorySeries, RateTable, TimeSeries
from .settings import FxSettings, load_settings
from .triangulation import convert_currency, convert_with_table

__all__ = [
    "AllAvailable",
    "CurrencyCode",
    "DEFAULT_BASE",
    "FxError",
    "FxSettings",
    "HistoryPoint",
    "HistoryRange",
    "HistorySeries",
    "InvalidCurrencyError",
    "InvalidDateError",
    "MissingRateError",
    "PROVIDER_FLOOR",
    "RateClient",
    "RateTable",
    "SUPPORTED_CODES",
    "TimeSeries",
    "Trailing",
    "UpstreamError",
    "build_history_series",
    "convert_currency",
    "convert_with_table",
    "history_range_from_days",
    "history_start",
    "load_settings",
    "parse_currency",
    "parse_rate_date",
    "parse_symbols",
    "today_utc",
    "trim_series",
]
