"""Unit converter plugin."""

manifest = {
    "title": "Unit Converter",
    "summary": "Catalog-driven conversions for length, mass, temperature, fuel economy, wavelength and more.",
    "blueprint": "unit_converter",
    "category": "Converters",
    "api": "/api/unit_converter",
}


__all__ = ["manifest"]
