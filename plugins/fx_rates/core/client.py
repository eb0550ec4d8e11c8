"""HTTP client for a Frankfurter-compatible reference rate provider."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Mapping, Optional

import requests

from common.logging import get_logger

from .currencies import CurrencyCode, parse_currency, parse_symbols
from .dates import parse_rate_date
from .errors import UpstreamError
from .models import RateTable, TimeSeries
from .settings import FxSettings

LOGGER = get_logger("fx_rates.client")

Symbols = Optional[Iterable[object] | str]


class RateClient:
    """Fetches rate tables; one GET per call, no retries.

    Every failure talking to the provider surfaces as :class:`UpstreamError`
    carrying the provider status code when one was received.
    """

    def __init__(
        self,
        settings: Optional[FxSettings] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or FxSettings()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def close(self) -> None:
        """Release the connection pool of a session this client created."""

        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "RateClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ---- Public API --------------------------------------------------------
    def fetch_latest_rates(self, base: object = None, symbols: Symbols = None) -> RateTable:
        base_code = self._base(base)
        codes = parse_symbols(symbols)
        payload = self._get("latest", self._params(base_code, codes))
        return RateTable.from_payload(payload, expected_base=base_code, symbols=codes)

    def fetch_historical_rates(
        self, day: object, base: object = None, symbols: Symbols = None
    ) -> RateTable:
        rate_date = parse_rate_date(day)
        base_code = self._base(base)
        codes = parse_symbols(symbols)
        payload = self._get(rate_date.isoformat(), self._params(base_code, codes))
        return RateTable.from_payload(payload, expected_base=base_code, symbols=codes)

    def fetch_time_series(
        self,
        start: date,
        end: Optional[date] = None,
        *,
        base: object = None,
        symbols: Symbols = None,
    ) -> TimeSeries:
        """Request ``start..end``; an open end means "up to the latest day"."""

        base_code = self._base(base)
        codes = parse_symbols(symbols)
        span = f"{start.isoformat()}..{end.isoformat() if end else ''}"
        payload = self._get(span, self._params(base_code, codes))
        return TimeSeries.from_payload(payload, requested_start=start.isoformat())

    # ---- Internal utilities -------------------------------------------------
    def _base(self, base: object) -> CurrencyCode:
        if base is None or (isinstance(base, str) and not base.strip()):
            return self.settings.default_base
        return parse_currency(base, field="base")

    @staticmethod
    def _params(base: CurrencyCode, codes: Optional[tuple]) -> Dict[str, str]:
        params = {"base": base.value}
        if codes:
            params["symbols"] = ",".join(code.value for code in codes)
        return params

    def _get(self, path: str, params: Mapping[str, str]) -> Mapping[str, Any]:
        url = f"{self.settings.provider_url.rstrip('/')}/{path}"
        LOGGER.debug("GET %s params=%s", url, dict(params))
        try:
            response = self.session.get(url, params=params, timeout=self.settings.timeout)
        except requests.RequestException as exc:
            raise UpstreamError(f"FX provider unreachable: {exc}") from exc
        if not response.ok:
            raise UpstreamError(
                f"FX API error: {response.status_code} {response.reason or ''}".rstrip(),
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                "FX provider returned a non-JSON body", status_code=response.status_code
            ) from exc
        if not isinstance(payload, Mapping):
            raise UpstreamError(
                "FX provider returned an unexpected body", status_code=response.status_code
            )
        return payload


__all__ = ["RateClient"]
