"""Application factory for the unitfx conversion service."""

from __future__ import annotations

from pathlib import Path

import yaml
from flask import Flask
from werkzeug.exceptions import HTTPException

from common.errors import AppError, InternalAppError, NotFoundAppError
from common.logging import get_logger, install_request_logging
from common.responses import fail, ok

from . import config as config_module
from .blueprints import register_plugins

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"

LOGGER = get_logger("app")


def _load_yaml_config(path: Path = CONFIG_PATH) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_module.BaseConfig)

    yaml_config = _load_yaml_config()
    app.config["SITE_SETTINGS"] = yaml_config.get("site", {}) or {}
    app.config["PLUGIN_SETTINGS"] = yaml_config.get("plugins", {}) or {}

    if config_name:
        config_obj = getattr(config_module, config_name, None)
        if config_obj is None:
            raise ValueError(f"Unknown configuration '{config_name}'")
        app.config.from_object(config_obj)

    install_request_logging(app)
    app.config["PLUGIN_MANIFESTS"] = register_plugins(app, app.config["PLUGIN_SETTINGS"])

    @app.after_request
    def apply_response_headers(response):
        """Attach strict security headers to every outgoing response."""

        configured = app.config.get("RESPONSE_HEADERS", {})
        for header, value in configured.items():
            if header not in response.headers:
                response.headers[header] = value
        return response

    @app.route("/")
    def home():
        site_config = app.config.get("SITE_SETTINGS", {})
        return ok(
            {
                "name": site_config.get("name", "unitfx"),
                "plugins": app.config.get("PLUGIN_MANIFESTS", []),
            }
        )

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError):
        return fail(error)

    @app.errorhandler(404)
    def not_found(error):
        return fail(NotFoundAppError(message="Resource not found."))

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return fail(
            AppError(
                message=error.description or error.name,
                code=error.name.lower().replace(" ", "_"),
                status_code=error.code or 500,
            )
        )

    @app.errorhandler(Exception)
    def server_error(error: Exception):
        LOGGER.exception("unhandled error")
        return fail(InternalAppError(message="Internal server error."))

    return app


__all__ = ["create_app"]
