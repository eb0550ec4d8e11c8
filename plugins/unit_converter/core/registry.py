"""Shared Pint registry helpers for the unit converter core."""

from __future__ import annotations

from functools import lru_cache

from pint import UnitRegistry


@lru_cache(maxsize=1)
def get_registry() -> UnitRegistry:
    """Return a singleton :class:`~pint.UnitRegistry` instance."""

    return UnitRegistry()


def constant(name: str, unit: str) -> float:
    """Return the magnitude of the physical constant ``name`` expressed in ``unit``."""

    registry = get_registry()
    return float(registry.Quantity(1, name).to(unit).magnitude)


def speed_of_light() -> float:
    """Propagation speed of electromagnetic waves in vacuum, in m/s."""

    return constant("speed_of_light", "meter / second")


def factor_to(symbol: str, unit: str) -> float:
    """Return how many ``unit`` make one ``symbol`` according to Pint."""

    registry = get_registry()
    return float(registry.Quantity(1, symbol).to(unit).magnitude)


__all__ = ["get_registry", "constant", "speed_of_light", "factor_to"]
