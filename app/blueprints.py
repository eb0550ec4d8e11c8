"""Plugin discovery and blueprint registration."""

from __future__ import annotations

import importlib
import pkgutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from flask import Blueprint, Flask

from common.logging import get_logger

LOGGER = get_logger("app.plugins")


@dataclass(frozen=True)
class Plugin:
    name: str
    manifest: Mapping[str, str] = field(default_factory=dict)
    blueprints: tuple[Blueprint, ...] = ()


def discover_plugins(package: str = "plugins") -> list[Plugin]:
    """Import every plugin package and its ``api`` module, in name order."""

    package_path = Path(__file__).resolve().parent.parent / package
    if not package_path.exists():
        return []
    plugins: list[Plugin] = []
    for module_info in sorted(pkgutil.iter_modules([str(package_path)]), key=lambda m: m.name):
        if not module_info.ispkg:
            continue
        dotted = f"{package}.{module_info.name}"
        module = importlib.import_module(dotted)
        api = importlib.import_module(f"{dotted}.api")
        blueprints = tuple(getattr(api, "blueprints", ()) or ())
        if not blueprints:
            LOGGER.warning("plugin %s exposes no blueprints", module_info.name)
        plugins.append(
            Plugin(
                name=module_info.name,
                manifest=dict(getattr(module, "manifest", None) or {}),
                blueprints=blueprints,
            )
        )
    return plugins


def register_plugins(app: Flask, plugin_settings: Mapping[str, object]) -> list[dict[str, str]]:
    """Register plugin blueprints and return their manifests for the index.

    A ``summary`` under the plugin's key in ``config.yml`` replaces the
    manifest's own.
    """

    manifests: list[dict[str, str]] = []
    for plugin in discover_plugins():
        for bp in plugin.blueprints:
            app.register_blueprint(bp)
            LOGGER.debug("registered blueprint %s at %s", bp.name, bp.url_prefix)
        if not plugin.manifest:
            continue
        entry = dict(plugin.manifest)
        overrides = plugin_settings.get(plugin.name) or {}
        if isinstance(overrides, Mapping) and overrides.get("summary"):
            entry["summary"] = str(overrides["summary"])
        manifests.append(entry)
    manifests.sort(key=lambda item: item.get("title", "").lower())
    return manifests


__all__ = ["Plugin", "discover_plugins", "register_plugins"]
