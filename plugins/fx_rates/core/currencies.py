"""Supported currency codes and input parsing."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Tuple

from .errors import InvalidCurrencyError


class CurrencyCode(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"
    CHF = "CHF"
    JPY = "JPY"
    PLN = "PLN"
    CAD = "CAD"
    AUD = "AUD"
    NZD = "NZD"
    SEK = "SEK"
    NOK = "NOK"
    DKK = "DKK"


SUPPORTED_CODES: Tuple[str, ...] = tuple(code.value for code in CurrencyCode)
DEFAULT_BASE = CurrencyCode.EUR


def parse_currency(value: object, *, field: str = "currency") -> CurrencyCode:
    """Return the :class:`CurrencyCode` for ``value`` (case-insensitive)."""

    if isinstance(value, CurrencyCode):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidCurrencyError(f"{field} must be one of {', '.join(SUPPORTED_CODES)}")
    try:
        return CurrencyCode(value.strip().upper())
    except ValueError as exc:
        raise InvalidCurrencyError(
            f"Unsupported currency '{value}' for {field}",
            details={"supported": list(SUPPORTED_CODES)},
        ) from exc


def parse_symbols(value: Optional[Iterable[object] | str]) -> Optional[Tuple[CurrencyCode, ...]]:
    """Parse a comma separated string or an iterable of codes.

    Returns ``None`` when no restriction was requested. Duplicates are
    dropped while keeping the first occurrence's position.
    """

    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else list(value)
    codes: list[CurrencyCode] = []
    for item in items:
        if isinstance(item, str) and not item.strip():
            continue
        code = parse_currency(item, field="symbols")
        if code not in codes:
            codes.append(code)
    return tuple(codes) or None


__all__ = [
    "CurrencyCode",
    "DEFAULT_BASE",
    "SUPPORTED_CODES",
    "parse_currency",
    "parse_symbols",
]
