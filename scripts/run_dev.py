"""Development entry point for the conversion API."""

import os

from app import create_app


def _resolve_port() -> int:
    value = os.getenv("UNITFX_PORT") or os.getenv("PORT") or "5001"
    try:
        return int(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid port '{value}'. Set UNITFX_PORT to a number.") from exc


if __name__ == "__main__":
    app = create_app(os.getenv("UNITFX_CONFIG") or None)
    app.run(host=os.getenv("UNITFX_HOST", "127.0.0.1"), port=_resolve_port(), debug=False)
