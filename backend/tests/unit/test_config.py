"""Tests for environment-driven settings helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from myauth.core import config as config_module
from myauth.factory import create_app
from myauth.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    check_secrets,
    env_bool,
    env_csv,
    env_seconds,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("yes", True), ("ON", True), ("0", False), ("nope", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SOME_FLAG", raw)
    assert env_bool("SOME_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("SOME_FLAG", raising=False)
    assert env_bool("SOME_FLAG", default=True) is True


def test_env_seconds(monkeypatch):
    monkeypatch.setenv("SOME_TTL", "90")
    assert env_seconds("SOME_TTL", timedelta(minutes=1)) == timedelta(seconds=90)

    monkeypatch.setenv("SOME_TTL", " ")
    assert env_seconds("SOME_TTL", timedelta(minutes=1)) == timedelta(minutes=1)


@pytest.mark.parametrize("raw", ["0", "-5", "abc"])
def test_env_seconds_rejects_bad_values(monkeypatch, raw):
    monkeypatch.setenv("SOME_TTL", raw)
    with pytest.raises(ValueError):
        env_seconds("SOME_TTL", timedelta(minutes=1))


def test_env_csv(monkeypatch):
    monkeypatch.setenv("FIELDS", " Email, phone ,,ID_NUMBER ")
    assert env_csv("FIELDS", "email") == ("email", "phone", "id_number")


def test_default_token_lifetimes():
    assert TestingConfig.ACCESS_TOKEN_TTL == timedelta(minutes=15)
    assert TestingConfig.REFRESH_TOKEN_TTL == timedelta(days=7)
    assert TestingConfig.VERIFICATION_TOKEN_TTL == timedelta(hours=24)


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ("production", ProductionConfig),
        ("Testing", TestingConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config(monkeypatch, env, expected):
    monkeypatch.setenv(config_module.ENV_VAR, env)
    assert config_module.get_config() is expected


def test_production_cookies_are_secure():
    assert ProductionConfig.JWT_COOKIE_SECURE is True


@pytest.mark.parametrize("jwt_key", ["CHANGE_ME_JWT", "", None])
def test_production_refuses_placeholder_signing_key(jwt_key):
    settings = {"REQUIRE_SECRETS": True, "SECRET_KEY": "s3cret-flask-key", "JWT_SECRET_KEY": jwt_key}
    with pytest.raises(RuntimeError, match="JWT_SECRET_KEY"):
        check_secrets(settings)


def test_real_secrets_pass_and_other_envs_are_not_checked():
    check_secrets(
        {"REQUIRE_SECRETS": True, "SECRET_KEY": "s3cret-flask-key", "JWT_SECRET_KEY": "jwt-key"}
    )
    check_secrets({"REQUIRE_SECRETS": False, "JWT_SECRET_KEY": "CHANGE_ME_JWT"})


def test_create_app_refuses_production_defaults():
    class DefaultedProduction(ProductionConfig):
        SECRET_KEY = "s3cret-flask-key"
        JWT_SECRET_KEY = "CHANGE_ME_JWT"

    with pytest.raises(RuntimeError, match="JWT_SECRET_KEY"):
        create_app(DefaultedProduction)
