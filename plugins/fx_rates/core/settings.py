"""Configuration helpers for the exchange-rate plugin."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from .currencies import DEFAULT_BASE, CurrencyCode
from .dates import today_utc

DEFAULT_PROVIDER_URL = "https://api.frankfurter.dev/v1"
PROVIDER_URL_ENV = "FRANKFURTER_BASE_URL"


@dataclass(frozen=True)
class FxSettings:
    provider_url: str = DEFAULT_PROVIDER_URL
    default_base: CurrencyCode = DEFAULT_BASE
    timeout: float = 10.0
    latest_max_age: int = 60
    history_max_age: int = 300
    historical_max_age: int = 365 * 24 * 3600

    @property
    def latest_cache_control(self) -> str:
        age = self.latest_max_age
        return f"public, max-age={age}, s-maxage={age}"

    @property
    def history_cache_control(self) -> str:
        age = self.history_max_age
        return f"public, max-age={age}, s-maxage={age}"

    def historical_cache_control(self, day: date, today: Optional[date] = None) -> str:
        # the current day's rates may still be revised
        if day >= (today or today_utc()):
            return self.latest_cache_control
        age = self.historical_max_age
        return f"public, max-age={age}, s-maxage={age}, immutable"


def _as_int(raw: object, default: int) -> int:
    try:
        return max(0, int(float(raw)))
    except (TypeError, ValueError):
        return default


def _as_float(raw: object, default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def load_settings(
    raw: Mapping[str, object] | None, *, environ: Mapping[str, str] | None = None
) -> FxSettings:
    raw = raw or {}
    environ = os.environ if environ is None else environ
    defaults = FxSettings()

    provider_url = (
        (environ.get(PROVIDER_URL_ENV) or "").strip()
        or str(raw.get("provider_url") or "").strip()
        or DEFAULT_PROVIDER_URL
    )
    try:
        default_base = CurrencyCode(str(raw.get("default_base", DEFAULT_BASE.value)).upper())
    except ValueError:
        default_base = DEFAULT_BASE

    cache = raw.get("cache")
    cache = cache if isinstance(cache, Mapping) else {}

    return FxSettings(
        provider_url=provider_url.rstrip("/"),
        default_base=default_base,
        timeout=_as_float(raw.get("timeout_seconds"), defaults.timeout),
        latest_max_age=_as_int(cache.get("latest_max_age"), defaults.latest_max_age),
        history_max_age=_as_int(cache.get("history_max_age"), defaults.history_max_age),
        historical_max_age=_as_int(
            cache.get("historical_max_age"), defaults.historical_max_age
        ),
    )


__all__ = ["DEFAULT_PROVIDER_URL", "FxSettings", "PROVIDER_URL_ENV", "load_settings"]
