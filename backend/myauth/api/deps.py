"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from myauth.core.container import get_container
from myauth.core.errors import Unauthorized

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def cookie_max_age(ttl: timedelta) -> int:
    """Convert a token lifetime into a cookie ``Max-Age`` in seconds."""

    return max(0, int(ttl.total_seconds()))


def access_token_from_request() -> str | None:
    """Return the access token from ``Authorization: Bearer`` or the access cookie."""

    header = request.headers.get("Authorization", "")
    if header.startswith(BEARER_PREFIX):
        token = header[len(BEARER_PREFIX) :].strip()
        if token:
            return token
    cookie_name = current_app.config.get("JWT_ACCESS_COOKIE_NAME", "accessToken")
    return request.cookies.get(cookie_name) or None


def refresh_token_from_request(body: dict[str, Any] | None = None) -> str | None:
    """Return the refresh token from its cookie, falling back to the JSON body."""

    cookie_name = current_app.config.get("JWT_REFRESH_COOKIE_NAME", "refreshToken")
    token = request.cookies.get(cookie_name)
    if token:
        return token
    return (body or {}).get("refresh_token") or None


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token.

    The authenticated subject id is stored on ``flask.g.user_id``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = access_token_from_request()
        if token is None:
            raise Unauthorized("Missing access token")
        g.user_id = get_container().sessions.authenticate_access(token)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
