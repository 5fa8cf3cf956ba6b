"""Tests for per-app service wiring."""

from __future__ import annotations

import fakeredis
import pytest

from myauth.core.container import build_container, get_container, verification_link_base
from myauth.infra.mail import SMTPNotifier
from myauth.infra.redis import RedisSessionRegistry
from myauth.services._shared.ports import InMemoryNotifier, InMemorySessionRegistry


def test_testing_app_uses_in_process_adapters(container):
    assert isinstance(container.registry, InMemorySessionRegistry)
    assert isinstance(container.notifier, InMemoryNotifier)
    assert container.sessions.registry is container.registry
    assert container.verification.notifier is container.notifier
    assert container.sessions.tokens is container.verification.tokens


def test_redis_client_selects_shared_registry(app):
    app.extensions["redis_client"] = fakeredis.FakeRedis()

    container = build_container(app)

    assert isinstance(container.registry, RedisSessionRegistry)
    assert get_container() is container


def test_smtp_backend(app):
    app.config.update(MAIL_BACKEND="SMTP", MAIL_SERVER="smtp.example.org", MAIL_PORT="2525")

    notifier = build_container(app).notifier

    assert isinstance(notifier, SMTPNotifier)
    assert notifier.host == "smtp.example.org"
    assert notifier.port == 2525


def test_unknown_mail_backend(app):
    app.config["MAIL_BACKEND"] = "pigeon"
    with pytest.raises(RuntimeError, match="MAIL_BACKEND"):
        build_container(app)


def test_unique_fields_always_include_email(app):
    app.config["REGISTRATION_UNIQUE_FIELDS"] = ("phone",)
    assert build_container(app).verification.cfg.unique_fields == ("email", "phone")


def test_unknown_unique_field(app):
    app.config["REGISTRATION_UNIQUE_FIELDS"] = ("email", "nickname")
    with pytest.raises(RuntimeError, match="nickname"):
        build_container(app)


def test_verification_link_base(app):
    app.config.update(APP_BASE_URL="https://auth.example.org/", API_BASE_PREFIX="/api/")
    assert verification_link_base(app) == "https://auth.example.org/api/v1/auth/verify-email"
