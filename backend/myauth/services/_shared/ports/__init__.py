"""
myauth.services._shared.ports
=============================

Collection of *ports* (hexagonal interfaces) that define the contracts the
session and verification services depend on.

Modules
-------
- :mod:`token_codec`:
    :class:`~.TokenCodec` signs and verifies tokens; :class:`~.StubTokenCodec`
    is its deterministic test double.

- :mod:`session_registry`:
    :class:`~.SessionRegistry` tracks which refresh tokens are still active;
    :class:`~.InMemorySessionRegistry` is the single-process reference.

- :mod:`notifier`:
    :class:`~.Notifier` delivers outbound email; :class:`~.InMemoryNotifier`
    keeps an outbox instead.

- :mod:`credential_verifier` / :mod:`user_repository`:
    Password checking and user persistence capabilities.

Concrete adapters (Redis, SMTP, PyJWT, Werkzeug) live under ``myauth.infra``.
"""

from __future__ import annotations

from .credential_verifier import CredentialVerifier
from .notifier import InMemoryNotifier, Notifier, OutboundMessage
from .session_registry import InMemorySessionRegistry, SessionRegistry
from .token_codec import StubTokenCodec, TokenClaims, TokenCodec, TokenKind
from .user_repository import UserRepositoryPort

__all__ = [
    "CredentialVerifier",
    "Notifier",
    "InMemoryNotifier",
    "OutboundMessage",
    "SessionRegistry",
    "InMemorySessionRegistry",
    "TokenCodec",
    "TokenClaims",
    "TokenKind",
    "StubTokenCodec",
    "UserRepositoryPort",
]
