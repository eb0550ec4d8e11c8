"""Trailing-window and full-history rate series for charting."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, List, Mapping, Optional, Union

from .currencies import parse_currency
from .dates import PROVIDER_FLOOR, today_utc
from .errors import InvalidCurrencyError
from .models import HistoryPoint, HistorySeries

MAX_TRAILING_DAYS = 365 * 5
# Calendar days added to the query window so that weekends and holidays
# still leave enough published points to fill the trailing count.
BUFFER_DAYS = 10
DEFAULT_TRAILING_DAYS = 7


@dataclass(frozen=True)
class Trailing:
    """The last ``days`` published points, capped at five years."""

    days: int

    def __post_init__(self) -> None:
        if isinstance(self.days, bool) or not isinstance(self.days, int) or self.days <= 0:
            raise ValueError("Trailing window needs a positive whole number of days")

    @property
    def effective_days(self) -> int:
        return min(self.days, MAX_TRAILING_DAYS)


@dataclass(frozen=True)
class AllAvailable:
    """Everything the provider has published since its first day."""


HistoryRange = Union[Trailing, AllAvailable]


def history_range_from_days(raw: object) -> HistoryRange:
    """Map a client-supplied day count onto a :data:`HistoryRange`.

    Counts above five years select the full history. Missing, non-numeric
    or non-positive counts fall back to a week.
    """

    try:
        days = float(raw)
    except (TypeError, ValueError):
        return Trailing(DEFAULT_TRAILING_DAYS)
    if not math.isfinite(days) or days <= 0:
        return Trailing(DEFAULT_TRAILING_DAYS)
    if days > MAX_TRAILING_DAYS:
        return AllAvailable()
    return Trailing(max(1, int(days)))


def history_start(history_range: HistoryRange, today: date) -> date:
    if isinstance(history_range, AllAvailable):
        return PROVIDER_FLOOR
    if isinstance(history_range, Trailing):
        start = today - timedelta(days=history_range.effective_days + BUFFER_DAYS)
        return max(start, PROVIDER_FLOOR)
    raise TypeError(f"Unhandled history range {history_range!r}")


def trim_series(
    rates: Mapping[str, Mapping[str, Any]],
    quote: str,
    history_range: HistoryRange,
) -> List[HistoryPoint]:
    """Keep positive numeric ``quote`` values, oldest first, cut to the window."""

    points: List[HistoryPoint] = []
    for day, row in rates.items():
        if not isinstance(row, Mapping):
            continue
        value = row.get(quote)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if not math.isfinite(value) or value <= 0:
            continue
        points.append(HistoryPoint(date=str(day), value=float(value)))
    points.sort(key=lambda point: point.date)
    if isinstance(history_range, AllAvailable):
        return points
    if isinstance(history_range, Trailing):
        return points[-history_range.effective_days :]
    raise TypeError(f"Unhandled history range {history_range!r}")


def build_history_series(
    client,
    from_: object,
    to: object,
    history_range: HistoryRange,
    *,
    today: Optional[date] = None,
) -> HistorySeries:
    """Fetch and window the ``from_``/``to`` series through ``client``."""

    base = parse_currency(from_, field="from")
    quote = parse_currency(to, field="to")
    if base is quote:
        raise InvalidCurrencyError("from and to must be different currencies")
    start = history_start(history_range, today or today_utc())
    series = client.fetch_time_series(start, base=base, symbols=[quote])
    points = trim_series(series.rates, quote.value, history_range)
    return HistorySeries(
        base=base,
        quote=quote,
        start_date=series.start_date,
        end_date=series.end_date,
        points=tuple(points),
    )


__all__ = [
    "AllAvailable",
    "BUFFER_DAYS",
    "DEFAULT_TRAILING_DAYS",
    "HistoryRange",
    "MAX_TRAILING_DAYS",
    "Trailing",
    "build_history_series",
    "history_range_from_days",
    "history_start",
    "trim_series",
]
