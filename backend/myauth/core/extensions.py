"""Extension singletons and their binding to an application."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

REDIS_EXTENSION_KEY = "redis_client"

# Deterministic constraint names so migrations diff cleanly
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
# Only used for its cookie helpers; tokens are issued and checked by the codec.
jwt = JWTManager()


def connect_redis(url: str) -> redis.Redis:
    """Open a client for ``url`` and fail fast when the server is unreachable.

    :raises RuntimeError: If the initial ``PING`` fails.
    """
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {url!r}") from exc
    return client


def init_app(app: Flask) -> None:
    """Bind SQLAlchemy, Flask-Migrate and JWTManager; connect Redis if configured.

    The Redis client, when any, is stored as
    ``app.extensions["redis_client"]`` for the session registry.
    """
    db.init_app(app)

    # Register mappers before Alembic inspects the metadata
    from myauth import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        app.extensions[REDIS_EXTENSION_KEY] = connect_redis(redis_url)
    else:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        log.warning("REDIS_URL not set; refresh-token revocation is process-local.")
