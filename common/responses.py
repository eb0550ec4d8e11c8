"""Standardized JSON response helpers."""

from __future__ import annotations

from typing import Any, Mapping

from flask import Response, jsonify

from .errors import AppError


def ok(data: Any, *, status: int = 200, cache_control: str | None = None) -> Response:
    """Return a success envelope.

    ``cache_control`` is copied verbatim into the ``Cache-Control`` header so
    that a CDN or browser in front of the app can reuse the payload.
    """

    payload = {"success": True, "data": data}
    response = jsonify(payload)
    response.status_code = status
    if cache_control:
        response.headers["Cache-Control"] = cache_control
    return response


def fail(error: AppError | Mapping[str, Any], *, status: int | None = None) -> Response:
    """Return a standardized failure envelope.

    The body is ``{"success": false, "error": {"code", "message", "details"}}``
    and failures are never cacheable.
    """

    if isinstance(error, AppError):
        payload = {"success": False, "error": error.to_dict()}
        response = jsonify(payload)
        response.status_code = status or error.status_code
    else:
        payload = {"success": False, "error": dict(error)}
        response = jsonify(payload)
        response.status_code = status or 400
    response.headers["Cache-Control"] = "no-store"
    return response


__all__ = ["ok", "fail"]
