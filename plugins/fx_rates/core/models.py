"""Immutable value objects produced by the rate client."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .currencies import CurrencyCode
from .errors import UpstreamError


def _positive_rate(code: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UpstreamError(f"Provider returned a non-numeric rate for {code}")
    rate = float(value)
    if not math.isfinite(rate) or rate <= 0:
        raise UpstreamError(f"Provider returned an invalid rate for {code}: {value!r}")
    return rate


def _provider_base(payload: Mapping[str, Any]) -> CurrencyCode:
    raw = payload.get("base")
    try:
        return CurrencyCode(str(raw).upper())
    except ValueError as exc:
        raise UpstreamError(f"Provider returned unsupported base {raw!r}") from exc


@dataclass(frozen=True)
class RateTable:
    """Rates for one day: 1 ``base`` buys ``rates[code]`` units of ``code``."""

    base: CurrencyCode
    date: str
    rates: Mapping[CurrencyCode, float]

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        expected_base: Optional[CurrencyCode] = None,
        symbols: Optional[Sequence[CurrencyCode]] = None,
    ) -> "RateTable":
        """Normalise a provider ``{base, date, rates}`` body.

        Codes outside the supported set are dropped, as is any self-entry
        for the base currency.
        """

        base = _provider_base(payload)
        if expected_base is not None and base is not expected_base:
            raise UpstreamError(
                f"Provider answered with base {base.value}, expected {expected_base.value}"
            )
        day = payload.get("date")
        if not isinstance(day, str) or not day:
            raise UpstreamError("Provider response is missing the rate date")
        raw_rates = payload.get("rates")
        if not isinstance(raw_rates, Mapping):
            raise UpstreamError("Provider response is missing the rates table")

        wanted = set(symbols) if symbols else None
        rates: Dict[CurrencyCode, float] = {}
        for key, value in raw_rates.items():
            try:
                code = CurrencyCode(str(key).upper())
            except ValueError:
                continue
            if code is base or (wanted is not None and code not in wanted):
                continue
            rates[code] = _positive_rate(code.value, value)
        return cls(base=base, date=day, rates=MappingProxyType(rates))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base": self.base.value,
            "date": self.date,
            "rates": {code.value: rate for code, rate in self.rates.items()},
        }


@dataclass(frozen=True)
class TimeSeries:
    """Raw ``{date: {code: rate}}`` range response from the provider."""

    base: CurrencyCode
    start_date: str
    end_date: str
    rates: Mapping[str, Mapping[str, Any]]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, requested_start: str) -> "TimeSeries":
        base = _provider_base(payload)
        raw_rates = payload.get("rates")
        if not isinstance(raw_rates, Mapping):
            raise UpstreamError("Provider response is missing the rates table")
        start = payload.get("start_date") or requested_start
        end = payload.get("end_date") or start
        return cls(
            base=base,
            start_date=str(start),
            end_date=str(end),
            rates=MappingProxyType(dict(raw_rates)),
        )


@dataclass(frozen=True)
class HistoryPoint:
    date: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "value": self.value}


@dataclass(frozen=True)
class HistorySeries:
    base: CurrencyCode
    quote: CurrencyCode
    start_date: str
    end_date: str
    points: Tuple[HistoryPoint, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base": self.base.value,
            "quote": self.quote.value,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "points": [point.to_dict() for point in self.points],
        }


__all__ = ["HistoryPoint", "HistorySeries", "RateTable", "TimeSeries"]
