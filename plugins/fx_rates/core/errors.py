"""Typed failures raised by the exchange-rate engine."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from common.validation import ValidationError


class FxError(Exception):
    """Base exception for exchange-rate failures."""


class InvalidCurrencyError(FxError, ValidationError):
    """Raised for a currency code outside the supported set."""


class InvalidDateError(FxError, ValidationError):
    """Raised for malformed or out-of-range rate dates."""


class MissingRateError(FxError):
    """A currency needed for a conversion is absent from the rate table."""

    def __init__(self, missing: Iterable[str]):
        self.missing: Tuple[str, ...] = tuple(str(code) for code in missing)
        noun = "rate" if len(self.missing) == 1 else "rates"
        super().__init__(f"Missing FX {noun} for {', '.join(self.missing)}")


class UpstreamError(FxError):
    """The rate provider could not be reached or answered with an error."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "FxError",
    "InvalidCurrencyError",
    "InvalidDateError",
    "MissingRateError",
    "UpstreamError",
]
