"""Liveness and dependency probe."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from myauth.api.deps import json_response, timing
from myauth.core.extensions import REDIS_EXTENSION_KEY, db

bp = Blueprint("health", __name__)


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        return "fail"
    return "ok"


def _registry_status() -> str:
    client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        return "memory"
    try:
        client.ping()
    except RedisError:
        current_app.logger.exception("healthcheck.redis_error")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Report the database and session-registry status.

    ``status`` is ``degraded`` when either dependency fails. The registry
    reads ``memory`` when sessions are process-local.
    """

    checks = {"db": _database_status(), "sessions": _registry_status()}
    degraded = "fail" in checks.values()
    payload = {
        "status": "degraded" if degraded else "ok",
        **checks,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=503 if degraded else 200)
