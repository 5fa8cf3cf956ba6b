from __future__ import annotations

import threading
from typing import Protocol


class SessionRegistry(Protocol):
    """
    Authoritative set of currently-valid refresh tokens.

    A refresh token that verifies cryptographically but is absent from the
    registry MUST be rejected. All operations MUST be atomic and visible to
    every process serving requests.
    """

    def insert(self, token: str) -> None:
        """Add ``token`` to the active set. Idempotent."""

    def contains(self, token: str) -> bool:
        """Return ``True`` while ``token`` is active."""

    def remove(self, token: str) -> None:
        """Drop ``token`` if present; no-op otherwise."""


class InMemorySessionRegistry(SessionRegistry):
    """
    Process-local registry.

    .. note::
       Only correct for a single process. Two workers holding separate
       instances disagree on which tokens are revoked; use
       :class:`myauth.infra.redis.redis_session_registry.RedisSessionRegistry`
       for real deployments.
    """

    def __init__(self) -> None:
        self._active: set[str] = set()
        self._lock = threading.Lock()

    def insert(self, token: str) -> None:
        with self._lock:
            self._active.add(token)

    def contains(self, token: str) -> bool:
        with self._lock:
            return token in self._active

    def remove(self, token: str) -> None:
        with self._lock:
            self._active.discard(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)
