# comments in English; reST docstrings
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import timedelta

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from myauth.services._shared.errors import StorageUnavailableError
from myauth.services._shared.ports import SessionRegistry


@dataclass(slots=True)
class RedisSessionRegistry(SessionRegistry):
    """
    Redis-backed session registry shared by every worker.

    Each active refresh token is one key, ``rt:<sha256(token)>``, expiring
    together with the token. Raw tokens never reach Redis. ``SET``,
    ``EXISTS`` and ``DEL`` are single commands, so a completed ``remove`` is
    visible to every later ``contains``.

    :param r: A Redis client (already connected).
    :param ttl: Entry lifetime; the refresh token lifetime.
    """

    r: redis.Redis
    ttl: timedelta = timedelta(days=7)

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token: str) -> str:
        return f"rt:{hashlib.sha256(token.encode('utf-8')).hexdigest()}"

    # -------------------- API ------------------------

    def insert(self, token: str) -> None:
        try:
            self.r.set(self._k(token), "1", ex=max(1, int(self.ttl.total_seconds())))
        except RedisError as exc:
            raise StorageUnavailableError() from exc

    def contains(self, token: str) -> bool:
        try:
            return bool(self.r.exists(self._k(token)))
        except RedisError as exc:
            raise StorageUnavailableError() from exc

    def remove(self, token: str) -> None:
        try:
            self.r.delete(self._k(token))
        except RedisError as exc:
            raise StorageUnavailableError() from exc
