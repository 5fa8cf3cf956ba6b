"""Per-application wiring of services and their adapters."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import Flask, current_app

from myauth.core.extensions import REDIS_EXTENSION_KEY
from myauth.infra.jwt import JWTTokenCodec
from myauth.infra.mail import SMTPNotifier
from myauth.infra.redis import RedisSessionRegistry
from myauth.infra.security import WerkzeugCredentialVerifier
from myauth.repositories.user import UNIQUENESS_ORDER
from myauth.services._shared.ports import (
    InMemoryNotifier,
    InMemorySessionRegistry,
    Notifier,
    SessionRegistry,
    TokenCodec,
)
from myauth.services.auth import AuthTokenConfig, SessionManager
from myauth.services.verification import VerificationConfig, VerificationService

log = logging.getLogger(__name__)

EXTENSION_KEY = "myauth"


@dataclass(slots=True)
class Container:
    """Long-lived collaborators shared by every request of one app."""

    codec: TokenCodec
    registry: SessionRegistry
    notifier: Notifier
    sessions: SessionManager
    verification: VerificationService


def _build_registry(app: Flask) -> SessionRegistry:
    client = app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        return InMemorySessionRegistry()
    return RedisSessionRegistry(r=client, ttl=app.config["REFRESH_TOKEN_TTL"])


def _build_notifier(app: Flask) -> Notifier:
    backend = str(app.config.get("MAIL_BACKEND", "smtp")).lower()
    if backend == "memory":
        return InMemoryNotifier()
    if backend != "smtp":
        raise RuntimeError(f"Unknown MAIL_BACKEND {backend!r} (expected 'smtp' or 'memory').")
    return SMTPNotifier(
        host=app.config["MAIL_SERVER"],
        port=int(app.config["MAIL_PORT"]),
        sender=app.config["MAIL_DEFAULT_SENDER"],
        username=app.config.get("MAIL_USERNAME"),
        password=app.config.get("MAIL_PASSWORD"),
        use_tls=bool(app.config.get("MAIL_USE_TLS", True)),
        timeout=float(app.config.get("MAIL_TIMEOUT", 10)),
    )


def _unique_fields(app: Flask) -> tuple[str, ...]:
    fields = tuple(app.config.get("REGISTRATION_UNIQUE_FIELDS") or ("email",))
    unknown = set(fields) - set(UNIQUENESS_ORDER)
    if unknown:
        raise RuntimeError(f"Unsupported REGISTRATION_UNIQUE_FIELDS: {sorted(unknown)}")
    if "email" not in fields:
        fields = ("email", *fields)
    return fields


def verification_link_base(app: Flask) -> str:
    """Absolute URL of the verify-email route, without the token."""
    base_url = str(app.config["APP_BASE_URL"]).rstrip("/")
    api_base = str(app.config.get("API_BASE_PREFIX", "/api")).rstrip("/")
    return f"{base_url}{api_base}/v1/auth/verify-email"


def build_container(app: Flask) -> Container:
    """Assemble services from ``app.config`` and store them on the app.

    Must run after :func:`myauth.core.extensions.init_app` so the Redis client
    (when configured) is available.
    """
    codec = JWTTokenCodec(
        secret=app.config["JWT_SECRET_KEY"],
        algorithm=app.config.get("JWT_ALGORITHM", "HS256"),
    )
    registry = _build_registry(app)
    notifier = _build_notifier(app)

    sessions = SessionManager(
        token_codec=codec,
        registry=registry,
        verifier=WerkzeugCredentialVerifier(),
        token_cfg=AuthTokenConfig(
            access_ttl=app.config["ACCESS_TOKEN_TTL"],
            refresh_ttl=app.config["REFRESH_TOKEN_TTL"],
        ),
    )
    verification = VerificationService(
        token_codec=codec,
        notifier=notifier,
        cfg=VerificationConfig(
            link_base=verification_link_base(app),
            token_ttl=app.config["VERIFICATION_TOKEN_TTL"],
            unique_fields=_unique_fields(app),
            app_name=app.config.get("APP_NAME", "MyAuth"),
        ),
    )

    container = Container(
        codec=codec,
        registry=registry,
        notifier=notifier,
        sessions=sessions,
        verification=verification,
    )
    app.extensions[EXTENSION_KEY] = container
    log.info(
        "Auth services ready",
        extra={"kind": f"{type(registry).__name__}/{type(notifier).__name__}"},
    )
    return container


def get_container() -> Container:
    """Return the container of the current app."""
    container = current_app.extensions.get(EXTENSION_KEY)
    if container is None:
        raise RuntimeError("Auth services are not initialized. Call build_container() first.")
    return container
