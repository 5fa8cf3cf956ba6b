# myauth/services/auth/service.py
from __future__ import annotations

import logging

from myauth.repositories.user import UserRepository
from myauth.services._shared.base import BaseService
from myauth.services._shared.dto import UserPublicOut
from myauth.services._shared.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    NotVerifiedError,
    TokenError,
    UnauthorizedError,
)
from myauth.services._shared.ports import (
    CredentialVerifier,
    SessionRegistry,
    TokenCodec,
    TokenKind,
)
from myauth.services.auth.dto import (
    AccessTokenOut,
    AuthTokenConfig,
    LoginIn,
    LoginOut,
    LogoutIn,
    RefreshIn,
)

logger = logging.getLogger(__name__)


class SessionManager(BaseService):
    """
    Session lifecycle service (login / refresh / logout).

    Tokens are signed by a pluggable :class:`TokenCodec`; refresh tokens are
    only honoured while present in the :class:`SessionRegistry`. Refresh does
    not rotate: the refresh token issued at login stays the session handle
    until logout or expiry.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        registry: SessionRegistry,
        verifier: CredentialVerifier,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_codec: Signs and verifies tokens.
        :param registry: Set of currently-valid refresh tokens.
        :param verifier: Password hash checker.
        :param token_cfg: Access/Refresh lifetime configuration.
        """
        super().__init__()
        self.tokens = token_codec
        self.registry = registry
        self.verifier = verifier
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and open a session.

        Verification status is checked before the password, so an unverified
        account is refused whether or not the password is right.

        :param dto: Login input.
        :returns: Access/refresh tokens plus the email and display name.
        :raises InvalidCredentialsError: Unknown email or wrong password.
        :raises NotVerifiedError: Email not confirmed yet.
        :raises StorageUnavailableError: Session registry unreachable.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_email(dto.email)
            if user is None:
                logger.info("Login refused", extra={"reason": "unknown_email"})
                raise InvalidCredentialsError()

            if not user.is_verified:
                logger.info("Login refused", extra={"reason": "not_verified", "user_id": user.id})
                raise NotVerifiedError()

            if not self.verifier.verify(dto.password, user.password_hash):
                logger.info("Login refused", extra={"reason": "bad_password", "user_id": user.id})
                raise InvalidCredentialsError()

            summary = UserPublicOut.from_model(user)

        access = self.tokens.issue(summary.id, TokenKind.ACCESS, self.cfg.access_ttl)
        refresh = self.tokens.issue(summary.id, TokenKind.REFRESH, self.cfg.refresh_ttl)
        # No tokens leave the service unless the session is recorded.
        self.registry.insert(refresh)

        logger.info("Login succeeded", extra={"user_id": summary.id})
        return LoginOut(
            access_token=access,
            refresh_token=refresh,
            email=summary.email,
            display_name=summary.display_name,
        )

    # ------------------------------------------------------------------ #
    # Refresh (no rotation)
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AccessTokenOut:
        """
        Exchange an active refresh token for a new access token.

        Registry membership is checked first, so a token revoked by logout
        is refused even while its signature and expiry are still good.

        :param dto: Refresh input.
        :returns: New access token only.
        :raises UnauthorizedError: Token not in the session registry.
        :raises InvalidTokenError: Token fails verification or is not a
            refresh token.
        """
        token = dto.refresh_token
        if not token or not self.registry.contains(token):
            logger.info("Refresh refused", extra={"reason": "not_registered"})
            raise UnauthorizedError()

        try:
            claims = self.tokens.verify(token)
        except TokenError as exc:
            logger.info("Refresh refused", extra={"reason": exc.code})
            raise InvalidTokenError() from exc

        if claims.kind is not TokenKind.REFRESH:
            logger.info("Refresh refused", extra={"reason": "wrong_kind", "kind": claims.kind.value})
            raise InvalidTokenError()

        access = self.tokens.issue(claims.subject_id, TokenKind.ACCESS, self.cfg.access_ttl)
        logger.debug("Access token refreshed", extra={"user_id": claims.subject_id})
        return AccessTokenOut(access_token=access)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke the given refresh token. Always succeeds.

        Unknown, already revoked or missing tokens are a no-op.
        """
        if dto.refresh_token:
            self.registry.remove(dto.refresh_token)
        logger.info("Session closed")

    # ------------------------------------------------------------------ #
    # Access tokens
    # ------------------------------------------------------------------ #

    def authenticate_access(self, token: str) -> str:
        """
        Validate an access token statelessly and return its subject id.

        :raises TokenError: Malformed, forged or expired token.
        :raises UnauthorizedError: Token is not an access token.
        """
        claims = self.tokens.verify(token)
        if claims.kind is not TokenKind.ACCESS:
            raise UnauthorizedError("Access token required")
        return claims.subject_id

    def get_account(self, subject_id: str) -> UserPublicOut:
        """Load the public summary of an authenticated subject."""
        try:
            user_id = int(subject_id)
        except ValueError as exc:
            raise UnauthorizedError() from exc

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)
