"""Tests for the ``flask auth`` command group."""

from __future__ import annotations

from myauth.services._shared.errors import NotificationFailedError
from tests.factories.user import UserFactory


def test_create_db(app):
    result = app.test_cli_runner().invoke(args=["auth", "create-db"])
    assert result.exit_code == 0
    assert "Database schema ready." in result.output


def test_resend_verification_sends_mail(app, outbox, session):
    UserFactory(email="pending@example.com")

    result = app.test_cli_runner().invoke(args=["auth", "resend-verification", "pending@example.com"])

    assert result.exit_code == 0, result.output
    assert "resent" in result.output
    assert len(outbox.messages_to("pending@example.com")) == 1


def test_resend_verification_reports_service_errors(app, session):
    UserFactory(email="done@example.com", verified=True)

    result = app.test_cli_runner().invoke(args=["auth", "resend-verification", "done@example.com"])

    assert result.exit_code != 0
    assert "Email already verified" in result.output


def test_resend_verification_reports_delivery_failure(app, outbox, session, monkeypatch):
    UserFactory(email="pending@example.com")

    def _fail(to_address, subject, html_body):
        raise NotificationFailedError()

    monkeypatch.setattr(outbox, "send", _fail)
    result = app.test_cli_runner().invoke(args=["auth", "resend-verification", "pending@example.com"])

    assert result.exit_code != 0
    assert "could not be delivered" in result.output
