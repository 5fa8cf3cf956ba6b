from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Protocol

from myauth.services._shared.errors import (
    MalformedTokenError,
    SignatureInvalidError,
    TokenExpiredError,
)


class TokenKind(str, Enum):
    """Discriminator carried by every token (``type`` claim)."""

    ACCESS = "access"
    REFRESH = "refresh"
    VERIFY = "verify"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified content of a token.

    :ivar subject_id: Account id the token speaks for.
    :ivar kind: Token kind.
    :ivar issued_at: Issuance time (UTC).
    :ivar expires_at: Absolute expiry (UTC).
    :ivar jti: Unique token identifier.
    """

    subject_id: str
    kind: TokenKind
    issued_at: datetime
    expires_at: datetime
    jti: str


class TokenCodec(Protocol):
    """Port for signing and verifying compact, tamper-evident tokens.

    Implementations are pure: no I/O, no registry lookups.
    """

    def issue(self, subject_id: int | str, kind: TokenKind, ttl: timedelta) -> str:
        """Sign a token for ``subject_id`` valid for ``ttl`` from now."""
        ...

    def verify(self, token: str) -> TokenClaims:
        """
        Check signature and expiry and return the claims.

        :raises MalformedTokenError: Token cannot be parsed.
        :raises SignatureInvalidError: Signature does not match.
        :raises TokenExpiredError: Current time is past the encoded expiry.
        """
        ...


class StubTokenCodec(TokenCodec):
    """Deterministic token codec used in unit tests.

    Tokens look like ``<kind>.<subject>.<seq>`` and are only valid for the
    instance that issued them. ``forge`` and ``expire`` let tests produce the
    signature and expiry failure modes.
    """

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, TokenClaims] = {}
        self._forged: set[str] = set()

    def issue(self, subject_id: int | str, kind: TokenKind, ttl: timedelta) -> str:
        self._seq += 1
        now = datetime.now(UTC)
        token = f"{kind.value}.{subject_id}.{self._seq}"
        self._issued[token] = TokenClaims(
            subject_id=str(subject_id),
            kind=kind,
            issued_at=now,
            expires_at=now + ttl,
            jti=f"jti-{self._seq}",
        )
        return token

    def verify(self, token: str) -> TokenClaims:
        if token in self._forged:
            raise SignatureInvalidError()
        claims = self._issued.get(token)
        if claims is None:
            raise MalformedTokenError()
        if datetime.now(UTC) > claims.expires_at:
            raise TokenExpiredError()
        return claims

    # -------------------------- test helpers --------------------------

    def forge(self, token: str) -> str:
        """Return a copy of ``token`` that fails the signature check."""
        forged = f"{token}.forged"
        self._forged.add(forged)
        return forged

    def expire(self, token: str) -> None:
        """Move ``token``'s expiry into the past."""
        claims = self._issued[token]
        past = datetime.now(UTC) - timedelta(seconds=1)
        self._issued[token] = TokenClaims(
            subject_id=claims.subject_id,
            kind=claims.kind,
            issued_at=claims.issued_at,
            expires_at=past,
            jti=claims.jti,
        )
