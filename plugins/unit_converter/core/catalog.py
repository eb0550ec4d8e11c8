"""Static unit catalog grouped by category.

Each category has one base unit. Every other unit converts to that base
through ``factor`` (and ``offset`` for affine scales such as temperature) or,
for the reciprocal relation kinds, through an inversion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .registry import speed_of_light


class RelationKind(str, Enum):
    """How a unit relates to the base unit of its category."""

    LINEAR = "linear"
    FREQUENCY = "frequency"
    WAVELENGTH = "wavelength"
    DIRECT_EFFICIENCY = "direct_efficiency"
    INVERSE_CONSUMPTION = "inverse_consumption"

    @property
    def reciprocal(self) -> bool:
        """True when the unit is inversely proportional to the base unit."""

        return self in _RECIPROCAL_KINDS


_RECIPROCAL_KINDS = frozenset({RelationKind.WAVELENGTH, RelationKind.INVERSE_CONSUMPTION})


@dataclass(frozen=True)
class Unit:
    """A single catalog entry."""

    name: str
    symbol: str
    factor: float
    kind: RelationKind = RelationKind.LINEAR
    offset: float = 0.0
    aliases: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "factor": self.factor,
            "kind": self.kind.value,
            "aliases": list(self.aliases),
        }


@dataclass(frozen=True)
class UnitCategory:
    """Units sharing one base unit."""

    name: str
    base: str
    units: Tuple[Unit, ...]
    wave_speed: Optional[float] = None
    _by_symbol: Mapping[str, Unit] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {unit.symbol: unit for unit in self.units}
        if len(index) != len(self.units):
            raise ValueError(f"Duplicate unit symbol in category '{self.name}'.")
        object.__setattr__(self, "_by_symbol", MappingProxyType(index))
        base = index.get(self.base)
        if base is None:
            raise ValueError(f"Base unit '{self.base}' missing from '{self.name}'.")
        if base.factor != 1 or base.offset != 0 or base.kind.reciprocal:
            raise ValueError(f"Base unit '{self.base}' of '{self.name}' must be an identity unit.")
        for unit in self.units:
            if not unit.factor > 0:
                raise ValueError(f"Unit '{unit.symbol}' must have a positive factor.")
            if unit.kind in {RelationKind.FREQUENCY, RelationKind.WAVELENGTH} and not self.wave_speed:
                raise ValueError(f"Category '{self.name}' needs a wave speed for '{unit.symbol}'.")

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def base_unit(self) -> Unit:
        return self._by_symbol[self.base]

    def get(self, symbol: str) -> Optional[Unit]:
        return self._by_symbol.get(symbol)

    def symbols(self) -> Tuple[str, ...]:
        return tuple(unit.symbol for unit in self.units)


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _category(
    name: str, base: str, units: Iterable[Unit], *, wave_speed: Optional[float] = None
) -> UnitCategory:
    return UnitCategory(name=name, base=base, units=tuple(units), wave_speed=wave_speed)


U = Unit
K = RelationKind

# Base units: m, kg, °C, s, Pa, m², m³, J, m/s, km/L, B, bps, BTC, Hz.
_CATEGORIES: Tuple[UnitCategory, ...] = (
    _category(
        "Length",
        "m",
        [
            U("Meter", "m", 1, aliases=("meter", "meters", "metre", "metres")),
            U("Kilometer", "km", 1000, aliases=("kilometer", "kilometers", "kilometre", "kilometres")),
            U("Centimeter", "cm", 0.01, aliases=("centimeter", "centimeters", "centimetre", "centimetres")),
            U("Millimeter", "mm", 0.001, aliases=("millimeter", "millimeters", "millimetre", "millimetres")),
            U("Mile", "mi", 1609.34, aliases=("mile", "miles")),
            U("Yard", "yd", 0.9144, aliases=("yard", "yards")),
            U("Foot", "ft", 0.3048, aliases=("foot", "feet")),
            U("Inch", "in", 0.0254, aliases=("inch", "inches")),
        ],
    ),
    _category(
        "Mass",
        "kg",
        [
            U("Kilogram", "kg", 1, aliases=("kilogram", "kilograms", "kilo", "kilos")),
            U("Gram", "g", 0.001, aliases=("gram", "grams")),
            U("Milligram", "mg", 1e-6, aliases=("milligram", "milligrams")),
            U("Metric Ton", "t", 1000, aliases=("tonne", "tonnes", "metric ton", "metric tons")),
            U("Pound", "lb", 0.453592, aliases=("pound", "pounds", "lbs")),
            U("Ounce", "oz", 0.0283495, aliases=("ounce", "ounces")),
        ],
    ),
    _category(
        "Temperature",
        "°C",
        [
            U("Celsius", "°C", 1, aliases=("celsius", "centigrade", "c", "degc")),
            U("Fahrenheit", "°F", 5 / 9, offset=-32 * 5 / 9, aliases=("fahrenheit", "f", "degf")),
            U("Kelvin", "K", 1, offset=-273.15, aliases=("kelvin",)),
        ],
    ),
    _category(
        "Time",
        "s",
        [
            U("Second", "s", 1, aliases=("second", "seconds", "sec")),
            U("Millisecond", "ms", 0.001, aliases=("millisecond", "milliseconds")),
            U("Microsecond", "µs", 1e-6, aliases=("microsecond", "microseconds", "us")),
            U("Nanosecond", "ns", 1e-9, aliases=("nanosecond", "nanoseconds")),
            U("Picosecond", "ps", 1e-12, aliases=("picosecond", "picoseconds")),
            U("Femtosecond", "fs", 1e-15, aliases=("femtosecond", "femtoseconds")),
            U("Minute", "min", 60, aliases=("minute", "minutes", "mins")),
            U("Hour", "hr", 3600, aliases=("hour", "hours", "h")),
            U("Day", "day", 86400, aliases=("days",)),
        ],
    ),
    _category(
        "Pressure",
        "Pa",
        [
            U("Pascal", "Pa", 1, aliases=("pascal", "pascals")),
            U("Kilopascal", "kPa", 1000, aliases=("kilopascal", "kilopascals")),
            U("Bar", "bar", 100000, aliases=("bars",)),
            U("Atmosphere", "atm", 101325, aliases=("atmosphere", "atmospheres")),
            U("Pound per square inch", "psi", 6894.76),
        ],
    ),
    _category(
        "Area",
        "m²",
        [
            U("Square Meter", "m²", 1, aliases=("m2", "sqm", "square meter", "square meters")),
            U("Square Kilometer", "km²", 1e6, aliases=("km2", "square kilometer", "square kilometers")),
            U("Square Centimeter", "cm²", 1e-4, aliases=("cm2", "square centimeter", "square centimeters")),
            U("Square Millimeter", "mm²", 1e-6, aliases=("mm2", "square millimeter", "square millimeters")),
            U("Square Mile", "mi²", 2589988.11, aliases=("mi2", "square mile", "square miles")),
            U("Square Yard", "yd²", 0.836127, aliases=("yd2", "square yard", "square yards")),
            U("Square Foot", "ft²", 0.092903, aliases=("ft2", "sq ft", "square foot", "square feet")),
            U("Square Inch", "in²", 0.00064516, aliases=("in2", "sq in", "square inch", "square inches")),
            U("Hectare", "ha", 10000, aliases=("hectare", "hectares")),
            U("Acre", "acre", 4046.86, aliases=("acres",)),
        ],
    ),
    _category(
        "Volume",
        "m³",
        [
            U("Cubic Meter", "m³", 1, aliases=("m3", "cubic meter", "cubic meters")),
            U("Cubic Kilometer", "km³", 1e9, aliases=("km3",)),
            U("Cubic Centimeter", "cm³", 1e-6, aliases=("cm3", "cc", "cubic centimeter", "cubic centimeters")),
            U("Cubic Millimeter", "mm³", 1e-9, aliases=("mm3",)),
            U("Liter", "L", 0.001, aliases=("liter", "liters", "litre", "litres")),
            U("Milliliter", "mL", 1e-6, aliases=("milliliter", "milliliters", "millilitre", "millilitres")),
            U("Gallon (US)", "gal", 0.00378541, aliases=("gallon", "gallons")),
            U("Quart (US)", "qt", 0.000946353, aliases=("quart", "quarts")),
            U("Pint (US)", "pt", 0.000473176, aliases=("pint", "pints")),
            U("Cup (US)", "cup", 0.000236588, aliases=("cups",)),
            U("Fluid Ounce (US)", "fl oz", 2.95735e-5, aliases=("fluid ounce", "fluid ounces")),
            U("Tablespoon (US)", "tbsp", 1.47868e-5, aliases=("tablespoon", "tablespoons")),
            U("Teaspoon (US)", "tsp", 4.92892e-6, aliases=("teaspoon", "teaspoons")),
            U("Cubic Foot", "ft³", 0.0283168, aliases=("ft3", "cu ft", "cubic foot", "cubic feet")),
            U("Cubic Inch", "in³", 1.63871e-5, aliases=("in3", "cubic inch", "cubic inches")),
        ],
    ),
    _category(
        "Energy",
        "J",
        [
            U("Joule", "J", 1, aliases=("joule", "joules")),
            U("Kilojoule", "kJ", 1000, aliases=("kilojoule", "kilojoules")),
            U("Calorie", "cal", 4.184, aliases=("calorie", "calories")),
            U("Kilocalorie (food)", "kcal", 4184, aliases=("kilocalorie", "kilocalories")),
            U("Watt Hour", "Wh", 3600),
            U("Kilowatt Hour", "kWh", 3.6e6),
            U("Electronvolt", "eV", 1.60218e-19, aliases=("electronvolt", "electronvolts")),
            U("British Thermal Unit", "BTU", 1055.06, aliases=("british thermal unit", "british thermal units")),
            U("Foot-pound", "ft⋅lb", 1.35582, aliases=("ft-lb", "foot-pound", "foot-pounds")),
        ],
    ),
    _category(
        "Speed",
        "m/s",
        [
            U("Meter per second", "m/s", 1, aliases=("meter per second", "meters per second")),
            U("Kilometer per hour", "km/h", 1 / 3.6, aliases=("kph", "kmh", "kilometers per hour")),
            U("Mile per hour", "mph", 0.44704, aliases=("mile per hour", "miles per hour")),
            U("Foot per second", "ft/s", 0.3048, aliases=("fps",)),
            U("Knot", "kn", 0.514444, aliases=("knot", "knots")),
        ],
    ),
    _category(
        "Fuel Economy",
        "km/L",
        [
            U("Kilometer per Liter", "km/L", 1, K.DIRECT_EFFICIENCY, aliases=("kmpl",)),
            U("Liter per 100 kilometers", "L/100km", 100, K.INVERSE_CONSUMPTION, aliases=("l/100 km",)),
            U("Mile per Gallon (US)", "MPG (US)", 0.425144, K.DIRECT_EFFICIENCY, aliases=("mpg", "mpg us")),
            U("Mile per Gallon (UK)", "MPG (UK)", 0.354006, K.DIRECT_EFFICIENCY, aliases=("mpg uk",)),
        ],
    ),
    _category(
        "Data Storage",
        "B",
        [
            U("Bit", "bit", 1 / 8, aliases=("bits",)),
            U("Byte", "B", 1, aliases=("byte", "bytes")),
            U("Kilobyte", "KB", 1024, aliases=("kilobyte", "kilobytes")),
            U("Megabyte", "MB", 1024**2, aliases=("megabyte", "megabytes")),
            U("Gigabyte", "GB", 1024**3, aliases=("gigabyte", "gigabytes")),
            U("Terabyte", "TB", 1024**4, aliases=("terabyte", "terabytes")),
            U("Petabyte", "PB", 1024**5, aliases=("petabyte", "petabytes")),
        ],
    ),
    _category(
        "Data Transfer Rate",
        "bps",
        [
            U("Bits per second", "bps", 1),
            U("Kilobits per second", "Kbps", 1e3),
            U("Megabits per second", "Mbps", 1e6),
            U("Gigabits per second", "Gbps", 1e9),
            U("Terabits per second", "Tbps", 1e12),
            U("Bytes per second", "B/s", 8),
            U("Kilobytes per second", "KB/s", 8e3),
            U("Megabytes per second", "MB/s", 8e6),
            U("Gigabytes per second", "GB/s", 8e9),
            U("Terabytes per second", "TB/s", 8e12),
        ],
    ),
    _category(
        "Bitcoin",
        "BTC",
        [
            U("Bitcoin", "BTC", 1, aliases=("bitcoin", "bitcoins")),
            U("Satoshi", "sat", 1e-8, aliases=("satoshi", "satoshis", "sats")),
        ],
    ),
    _category(
        "Electromagnetic Wave",
        "Hz",
        [
            U("Hertz", "Hz", 1, K.FREQUENCY, aliases=("hertz",)),
            U("Kilohertz", "kHz", 1e3, K.FREQUENCY, aliases=("kilohertz",)),
            U("Megahertz", "MHz", 1e6, K.FREQUENCY, aliases=("megahertz",)),
            U("Gigahertz", "GHz", 1e9, K.FREQUENCY, aliases=("gigahertz",)),
            U("Terahertz", "THz", 1e12, K.FREQUENCY, aliases=("terahertz",)),
            U("Wavelength (meter)", "λ m", 1, K.WAVELENGTH),
            U("Wavelength (centimeter)", "λ cm", 1e-2, K.WAVELENGTH),
            U("Wavelength (millimeter)", "λ mm", 1e-3, K.WAVELENGTH),
            U("Wavelength (micrometer)", "λ µm", 1e-6, K.WAVELENGTH),
            U("Wavelength (nanometer)", "λ nm", 1e-9, K.WAVELENGTH),
        ],
        wave_speed=speed_of_light(),
    ),
)

CATEGORIES: Mapping[str, UnitCategory] = MappingProxyType(
    {category.name: category for category in _CATEGORIES}
)
_BY_SLUG: Mapping[str, UnitCategory] = MappingProxyType(
    {category.slug: category for category in _CATEGORIES}
)


def find_category(name: str) -> Optional[UnitCategory]:
    """Look a category up by display name (case-insensitive) or slug."""

    if not isinstance(name, str):
        return None
    text = name.strip()
    return CATEGORIES.get(text) or _BY_SLUG.get(slugify(text))


__all__ = [
    "CATEGORIES",
    "RelationKind",
    "Unit",
    "UnitCategory",
    "find_category",
    "slugify",
]
