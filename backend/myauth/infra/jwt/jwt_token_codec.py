# myauth/infra/jwt/jwt_token_codec.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from myauth.services._shared.errors import (
    MalformedTokenError,
    SignatureInvalidError,
    TokenExpiredError,
)
from myauth.services._shared.ports import TokenClaims, TokenCodec, TokenKind

REQUIRED_CLAIMS = ["sub", "type", "iat", "exp", "jti"]


@dataclass(slots=True)
class JWTTokenCodec(TokenCodec):
    """
    HMAC-signed JWT codec built on PyJWT.

    The claim layout (``sub`` as string, ``type``, ``jti``) matches what
    ``flask-jwt-extended`` expects, so access tokens issued here are also
    accepted by its decorators.

    :param secret: Process-wide signing key.
    :param algorithm: HMAC algorithm (``HS256`` by default).
    :param leeway: Clock skew tolerated on ``exp``/``iat``.
    """

    secret: str
    algorithm: str = "HS256"
    leeway: timedelta = timedelta(0)

    def issue(self, subject_id: int | str, kind: TokenKind, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "type": kind.value,
            "iat": now,
            "exp": now + ttl,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": REQUIRED_CLAIMS},
            )
        # PyJWT checks the signature before any time-based claim.
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidSignatureError as exc:
            raise SignatureInvalidError() from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError() from exc

        try:
            kind = TokenKind(payload["type"])
        except ValueError as exc:
            raise MalformedTokenError("Unknown token kind") from exc

        return TokenClaims(
            subject_id=str(payload["sub"]),
            kind=kind,
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
            jti=str(payload["jti"]),
        )
