"""Settings classes, one per environment, populated from the process env."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

#: Selects the settings class: ``development`` | ``testing`` | ``production``.
ENV_VAR: Final[str] = "APP_ENV"

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

#: Shipped defaults that must be replaced wherever ``REQUIRE_SECRETS`` is set.
PLACEHOLDER_SECRETS: Final[frozenset[str]] = frozenset({"CHANGE_ME", "CHANGE_ME_JWT"})

# Pick up a local .env (silently skipped when absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) mean ``True``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_seconds(name: str, default: timedelta) -> timedelta:
    """Read a lifetime given in whole seconds.

    Parameters
    ----------
    name: str
        Environment variable, e.g. ``ACCESS_TOKEN_TTL_SECONDS``.
    default: datetime.timedelta
        Used when the variable is unset or blank.

    Raises
    ------
    ValueError
        If the value is not a positive integer.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    seconds = int(raw)
    if seconds <= 0:
        raise ValueError(f"{name} must be a positive number of seconds.")
    return timedelta(seconds=seconds)


def env_csv(name: str, default: str) -> tuple[str, ...]:
    """Split a comma-separated variable into trimmed, lowercase tokens."""
    raw = os.getenv(name, default)
    return tuple(token.strip().lower() for token in raw.split(",") if token.strip())


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    JWT_SECRET_KEY: str
        One process-wide HMAC key for all token kinds (access, refresh,
        verify). The token ``type`` claim keeps them apart.
    ACCESS_TOKEN_TTL / REFRESH_TOKEN_TTL / VERIFICATION_TOKEN_TTL: timedelta
        15 minutes, 7 days and 24 hours unless overridden through the
        matching ``*_TTL_SECONDS`` variable.
    JWT_ACCESS_COOKIE_NAME / JWT_REFRESH_COOKIE_NAME: str
        Cookie names written on login and cleared on logout.
    REGISTRATION_UNIQUE_FIELDS: tuple[str, ...]
        ``email`` alone, or ``email,phone,id_number`` to also refuse
        repeated phone numbers and id numbers.
    APP_BASE_URL: str
        Public origin that verification links point at.
    MAIL_BACKEND: str
        ``smtp`` delivers; ``memory`` keeps an in-process outbox.
    REDIS_URL: str | None
        Shared session registry. Unset means a per-process registry, which
        is only correct with a single worker.
    """

    APP_NAME = os.getenv("APP_NAME", "MyAuth")
    API_BASE_PREFIX = "/api"

    # Keys
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    REQUIRE_SECRETS = False

    # Lifetimes
    ACCESS_TOKEN_TTL = env_seconds("ACCESS_TOKEN_TTL_SECONDS", timedelta(minutes=15))
    REFRESH_TOKEN_TTL = env_seconds("REFRESH_TOKEN_TTL_SECONDS", timedelta(days=7))
    VERIFICATION_TOKEN_TTL = env_seconds("VERIFICATION_TOKEN_TTL_SECONDS", timedelta(hours=24))

    # Cookies (written through flask-jwt-extended)
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_COOKIE_NAME = "accessToken"
    JWT_REFRESH_COOKIE_NAME = "refreshToken"
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", False)
    JWT_COOKIE_SAMESITE = "Lax"
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_SESSION_COOKIE = False

    # Registration
    REGISTRATION_UNIQUE_FIELDS = env_csv("REGISTRATION_UNIQUE_FIELDS", "email")
    APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000")

    # Mail
    MAIL_BACKEND = os.getenv("MAIL_BACKEND", "smtp")
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_USE_TLS = env_bool("MAIL_USE_TLS", True)
    MAIL_TIMEOUT = float(os.getenv("MAIL_TIMEOUT", "10"))
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "MyAuth System <no-reply@localhost>")

    # Sessions
    REDIS_URL = os.getenv("REDIS_URL")

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False

    # Logging / CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on, verification mails kept in memory by default."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    MAIL_BACKEND = os.getenv("MAIL_BACKEND", "memory")
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """Test runs.

    In-memory SQLite unless ``TEST_DATABASE_URL`` is set; never touches SMTP
    or Redis.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    MAIL_BACKEND = "memory"
    REDIS_URL = None
    JWT_SECRET_KEY = "testing-secret-key-with-enough-bytes-for-hs256"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Deployed runs: cookies always ``Secure``; set ``REDIS_URL``."""

    REQUIRE_SECRETS = True
    JWT_COOKIE_SECURE = True
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Settings class named by ``APP_ENV``; development when unset or unknown."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def check_secrets(config: Mapping[str, object]) -> None:
    """Refuse placeholder signing keys when ``REQUIRE_SECRETS`` is on.

    Raises
    ------
    RuntimeError
        If ``SECRET_KEY`` or ``JWT_SECRET_KEY`` is unset, blank or still a
        shipped default.
    """
    if not config.get("REQUIRE_SECRETS"):
        return
    for key in ("SECRET_KEY", "JWT_SECRET_KEY"):
        value = config.get(key)
        if not isinstance(value, str) or not value.strip() or value in PLACEHOLDER_SECRETS:
            raise RuntimeError(f"{key} must be set to a real secret in this environment.")
