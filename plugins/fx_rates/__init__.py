"""Exchange-rate plugin."""

manifest = {
    "title": "Currency Converter",
    "summary": "Daily reference rates for 12 currencies with cross-rate conversion and history charts.",
    "blueprint": "fx_rates",
    "category": "Converters",
    "api": "/api/fx",
}


__all__ = ["manifest"]
