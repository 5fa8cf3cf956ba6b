"""Cross-origin policy for the API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from myauth.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Apply ``CORS_ORIGINS`` to ``/api/*``.

    Auth cookies need ``supports_credentials``, which browsers refuse with a
    wildcard origin. With no explicit origins only bearer-token clients work
    cross-origin.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    explicit = bool(origins) and origins != ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": origins if explicit else "*"}},
        supports_credentials=explicit,
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
