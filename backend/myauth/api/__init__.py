"""HTTP surface: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def mount(app: Flask, prefix: str, entries: Iterable[tuple[Blueprint, str]]) -> None:
    """Register each ``(blueprint, subpath)`` below ``prefix``.

    Empty subpaths mount the blueprint at ``prefix`` itself; duplicate or
    missing slashes are normalised.
    """

    root = "/" + prefix.strip("/")
    for bp, subpath in entries:
        tail = subpath.strip("/")
        app.register_blueprint(bp, url_prefix=f"{root}/{tail}" if tail else root)


def init_app(app: Flask) -> None:
    """Mount API v1 at ``<API_BASE_PREFIX>/v1``."""

    from myauth.api.v1 import API_VERSION, REGISTRY

    base = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    mount(app, f"{base}/{API_VERSION}", REGISTRY)


__all__ = ["init_app", "mount"]
