"""Tests for the in-memory port implementations used in development and tests."""

from __future__ import annotations

from datetime import timedelta

import pytest

from myauth.services._shared.errors import (
    MalformedTokenError,
    SignatureInvalidError,
    TokenExpiredError,
)
from myauth.services._shared.ports import TokenKind


class TestInMemorySessionRegistry:
    def test_insert_then_contains(self, registry):
        registry.insert("rt-1")
        assert registry.contains("rt-1") is True
        assert registry.contains("rt-2") is False

    def test_insert_is_idempotent(self, registry):
        registry.insert("rt-1")
        registry.insert("rt-1")
        assert len(registry) == 1

    def test_remove_is_noop_when_absent(self, registry):
        registry.remove("never-inserted")
        registry.insert("rt-1")
        registry.remove("rt-1")
        registry.remove("rt-1")
        assert registry.contains("rt-1") is False


class TestInMemoryNotifier:
    def test_send_appends_to_outbox(self, notifier):
        notifier.send("a@example.com", "Hello", "<p>hi</p>")
        notifier.send("b@example.com", "Hello", "<p>hi</p>")

        assert len(notifier.outbox) == 2
        [msg] = notifier.messages_to("a@example.com")
        assert msg.subject == "Hello"
        assert msg.html_body == "<p>hi</p>"


class TestStubTokenCodec:
    def test_issue_and_verify(self, codec):
        token = codec.issue(7, TokenKind.REFRESH, timedelta(minutes=5))
        claims = codec.verify(token)
        assert claims.subject_id == "7"
        assert claims.kind is TokenKind.REFRESH
        assert claims.expires_at > claims.issued_at

    def test_tokens_for_same_subject_differ(self, codec):
        a = codec.issue(1, TokenKind.ACCESS, timedelta(minutes=5))
        b = codec.issue(1, TokenKind.ACCESS, timedelta(minutes=5))
        assert a != b
        assert codec.verify(a).jti != codec.verify(b).jti

    def test_failure_modes(self, codec):
        token = codec.issue(1, TokenKind.ACCESS, timedelta(minutes=5))

        with pytest.raises(MalformedTokenError):
            codec.verify("garbage")
        with pytest.raises(SignatureInvalidError):
            codec.verify(codec.forge(token))

        codec.expire(token)
        with pytest.raises(TokenExpiredError):
            codec.verify(token)
