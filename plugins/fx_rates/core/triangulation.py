"""Cross-currency conversion over a single-base rate table."""

from __future__ import annotations

from typing import Mapping, Optional

from common.validation import ensure_finite

from .currencies import CurrencyCode, parse_currency
from .errors import MissingRateError
from .models import RateTable


def _lookup(rates: Mapping[object, float], code: CurrencyCode) -> Optional[float]:
    value = rates.get(code)
    if value is None:
        value = rates.get(code.value)
    if value is None or isinstance(value, bool) or not value > 0:
        return None
    return float(value)


def convert_currency(
    amount: float,
    from_: object,
    to: object,
    base: object,
    rates: Mapping[object, float],
) -> float:
    """Convert ``amount`` of ``from_`` into ``to``.

    ``rates`` hold "1 ``base`` = rate units of key". Conversions that do not
    touch the base go through it: ``amount / rates[from_] * rates[to]``.
    Raises :class:`MissingRateError` naming every absent currency.
    """

    value = ensure_finite(amount, field="amount")
    source = parse_currency(from_, field="from")
    target = parse_currency(to, field="to")
    anchor = parse_currency(base, field="base")

    if source is target:
        return value

    if source is anchor:
        rate_to = _lookup(rates, target)
        if rate_to is None:
            raise MissingRateError([target.value])
        return value * rate_to

    if target is anchor:
        rate_from = _lookup(rates, source)
        if rate_from is None:
            raise MissingRateError([source.value])
        return value / rate_from

    rate_from = _lookup(rates, source)
    rate_to = _lookup(rates, target)
    missing = [
        code.value
        for code, rate in ((source, rate_from), (target, rate_to))
        if rate is None
    ]
    if missing:
        raise MissingRateError(missing)
    return value / rate_from * rate_to


def convert_with_table(amount: float, from_: object, to: object, table: RateTable) -> float:
    return convert_currency(amount, from_, to, table.base, table.rates)


__all__ = ["convert_currency", "convert_with_table"]
