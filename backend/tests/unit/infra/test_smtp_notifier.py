"""Unit tests for SMTPNotifier with a patched ``smtplib.SMTP``."""

from __future__ import annotations

import smtplib

import pytest

from myauth.infra.mail import SMTPNotifier
from myauth.infra.mail import smtp_notifier as smtp_module
from myauth.services._shared.errors import NotificationFailedError


class FakeSMTP:
    """Minimal stand-in recording the calls SMTPNotifier makes."""

    instances: list[FakeSMTP] = []
    fail_on: str | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[str] = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.calls.append("quit")
        return False

    def _maybe_fail(self, name):
        self.calls.append(name)
        if FakeSMTP.fail_on == name:
            raise smtplib.SMTPException(f"{name} failed")

    def starttls(self):
        self._maybe_fail("starttls")

    def login(self, user, password):
        self._maybe_fail("login")

    def send_message(self, msg):
        self._maybe_fail("send_message")
        self.sent.append(msg)


@pytest.fixture(autouse=True)
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_on = None
    monkeypatch.setattr(smtp_module.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def _notifier(**kwargs) -> SMTPNotifier:
    defaults = {
        "host": "smtp.example.org",
        "port": 587,
        "sender": "MyAuth System <no-reply@example.org>",
    }
    defaults.update(kwargs)
    return SMTPNotifier(**defaults)


def test_sends_html_message_with_tls_and_login():
    _notifier(username="mailer", password="pw").send(
        "user@example.com", "Verify your MyAuth account", "<p>link</p>"
    )

    [server] = FakeSMTP.instances
    assert (server.host, server.port) == ("smtp.example.org", 587)
    assert server.calls == ["starttls", "login", "send_message", "quit"]
    [msg] = server.sent
    assert msg["To"] == "user@example.com"
    assert msg["Subject"] == "Verify your MyAuth account"
    html = msg.get_body(preferencelist=("html",))
    assert "<p>link</p>" in html.get_content()


def test_skips_tls_and_login_when_not_configured():
    _notifier(use_tls=False).send("user@example.com", "s", "<p>b</p>")
    [server] = FakeSMTP.instances
    assert server.calls == ["send_message", "quit"]


@pytest.mark.parametrize("stage", ["starttls", "login", "send_message"])
def test_transport_errors_become_notification_failed(stage):
    FakeSMTP.fail_on = stage
    with pytest.raises(NotificationFailedError):
        _notifier(username="mailer", password="pw").send("user@example.com", "s", "<p>b</p>")


def test_connection_errors_become_notification_failed(monkeypatch):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("no server")

    monkeypatch.setattr(smtp_module.smtplib, "SMTP", refuse)
    with pytest.raises(NotificationFailedError):
        _notifier().send("user@example.com", "s", "<p>b</p>")
