"""Unit conversion over the static catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Union

from common.validation import ValidationError, ensure_finite

from .catalog import RelationKind, Unit, UnitCategory, find_category


class ConversionError(Exception):
    """Base exception for conversion failures."""


class InvalidUnitError(ConversionError, ValidationError):
    """Raised when a unit or category reference cannot be resolved."""


class BadInputError(ConversionError, ValidationError):
    """Raised when user supplied values cannot be normalised."""


class DomainError(ConversionError):
    """Raised when a conversion is mathematically undefined for the input."""


@dataclass(frozen=True)
class ConversionResult:
    value: float
    unit: str

    def to_dict(self) -> Dict[str, object]:
        return {"value": self.value, "unit": self.unit}


CategoryRef = Union[UnitCategory, str]

_DIRECT_KINDS = frozenset(
    {RelationKind.LINEAR, RelationKind.FREQUENCY, RelationKind.DIRECT_EFFICIENCY}
)


def convert_unit(
    value: float | int | str,
    from_unit: str,
    to_unit: str,
    category: CategoryRef,
) -> float:
    """Convert ``value`` from ``from_unit`` to ``to_unit`` within ``category``.

    Linear units go through the category base (``value * factor + offset``).
    Wavelength units are reciprocal to frequency through the category's wave
    speed and inverse-consumption units are reciprocal to direct efficiency;
    conversions between two units of the same reciprocal kind stay linear.

    Raises :class:`InvalidUnitError` for unknown units or categories,
    :class:`BadInputError` for non-finite values and :class:`DomainError`
    when the conversion would divide by zero or overflow.
    """

    resolved = resolve_category(category)
    source = resolve_unit(resolved, from_unit)
    target = resolve_unit(resolved, to_unit)
    number = _coerce_value(value)

    if source.symbol == target.symbol:
        return number

    if source.kind is target.kind and source.kind.reciprocal:
        result = _scale_reciprocal_kind(number, source, target)
    else:
        base_value = _to_base(number, source, resolved)
        result = _from_base(base_value, target, resolved)

    if not math.isfinite(result):
        raise DomainError(
            f"Converting {number} {source.symbol} to {target.symbol} does not produce a finite value."
        )
    return result


def convert_detailed(
    value: float | int | str,
    from_unit: str,
    to_unit: str,
    category: CategoryRef,
) -> ConversionResult:
    return ConversionResult(
        value=convert_unit(value, from_unit, to_unit, category), unit=to_unit
    )


def resolve_category(category: CategoryRef) -> UnitCategory:
    if isinstance(category, UnitCategory):
        return category
    found = find_category(category) if isinstance(category, str) else None
    if found is None:
        raise InvalidUnitError(f"Unknown unit category '{category}'.")
    return found


def resolve_unit(category: UnitCategory, symbol: str) -> Unit:
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidUnitError("Unit symbol must be a non-empty string.")
    unit = category.get(symbol.strip())
    if unit is None:
        raise InvalidUnitError(
            f"Unit '{symbol}' does not belong to category '{category.name}'."
        )
    return unit


def _coerce_value(value: float | int | str) -> float:
    if isinstance(value, str):
        text = value.strip()
        if not text or len(text) > 64:
            raise BadInputError("Value string must be between 1 and 64 characters.")
        value = text
    try:
        return ensure_finite(value)
    except ValidationError as exc:
        raise BadInputError(str(exc)) from exc


def _reciprocal(numerator: float, denominator: float, unit: Unit) -> float:
    if denominator == 0:
        raise DomainError(
            f"Reciprocal conversion involving '{unit.symbol}' is undefined for zero."
        )
    return numerator / denominator


def _to_base(value: float, unit: Unit, category: UnitCategory) -> float:
    kind = unit.kind
    if kind in _DIRECT_KINDS:
        return value * unit.factor + unit.offset
    if kind is RelationKind.WAVELENGTH:
        return _reciprocal(category.wave_speed, value * unit.factor, unit)
    if kind is RelationKind.INVERSE_CONSUMPTION:
        return _reciprocal(unit.factor, value, unit)
    raise TypeError(f"Unhandled relation kind {kind!r}")


def _from_base(base_value: float, unit: Unit, category: UnitCategory) -> float:
    kind = unit.kind
    if kind in _DIRECT_KINDS:
        return (base_value - unit.offset) / unit.factor
    if kind is RelationKind.WAVELENGTH:
        return _reciprocal(category.wave_speed, base_value, unit) / unit.factor
    if kind is RelationKind.INVERSE_CONSUMPTION:
        return _reciprocal(unit.factor, base_value, unit)
    raise TypeError(f"Unhandled relation kind {kind!r}")


def _scale_reciprocal_kind(value: float, source: Unit, target: Unit) -> float:
    # wavelength factors scale to metres; inverse-consumption factors divide out
    if source.kind is RelationKind.WAVELENGTH:
        return value * source.factor / target.factor
    if source.kind is RelationKind.INVERSE_CONSUMPTION:
        return value / source.factor * target.factor
    raise TypeError(f"Unhandled relation kind {source.kind!r}")


__all__ = [
    "BadInputError",
    "CategoryRef",
    "ConversionError",
    "ConversionResult",
    "DomainError",
    "InvalidUnitError",
    "convert_detailed",
    "convert_unit",
    "resolve_category",
    "resolve_unit",
]
