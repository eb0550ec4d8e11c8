"""Facade for the unit converter core utilities."""

from __future__ import annotations

from typing import Dict, List

from .catalog import CATEGORIES, RelationKind, Unit, UnitCategory
from .converter import (
    BadInputError,
    ConversionError,
    ConversionResult,
    DomainError,
    InvalidUnitError,
    convert_detailed,
    convert_unit,
    resolve_category,
)
from .query import ParsedQuery, parse_query


def list_categories() -> List[Dict[str, object]]:
    """Return the supported categories with their base unit."""

    return [
        {"name": category.name, "slug": category.slug, "base": category.base}
        for category in CATEGORIES.values()
    ]


def list_units(category: str) -> List[Dict[str, object]]:
    """Return metadata for the units belonging to ``category``."""

    resolved = resolve_category(category)
    return [unit.to_dict() for unit in resolved.units]


def convert_query(query: str) -> Dict[str, object]:
    """Parse a free-text request and convert it."""

    parsed = parse_query(query)
    result = convert_detailed(parsed.value, parsed.from_unit, parsed.to_unit, parsed.category)
    return {
        **result.to_dict(),
        "input": {"value": parsed.value, "unit": parsed.from_unit},
        "category": parsed.category,
    }


__all__ = [
    "BadInputError",
    "CATEGORIES",
    "ConversionError",
    "ConversionResult",
    "DomainError",
    "InvalidUnitError",
    "ParsedQuery",
    "RelationKind",
    "Unit",
    "UnitCategory",
    "convert_detailed",
    "convert_query",
    "convert_unit",
    "list_categories",
    "list_units",
    "parse_query",
]
