"""
VerificationService
===================

Process-level service that gates account access behind email ownership:

- ``register`` creates an unverified account and mails a verification link.
- ``verify_email`` flips the account to verified (idempotent).
- ``resend_verification`` mails a fresh link to an unverified account.

Mail delivery is best-effort. A failed send is logged and reported through
``notification_sent``; the account state it accompanies is never rolled back.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from myauth.repositories.user import UserRepository
from myauth.services._shared.base import BaseService
from myauth.services._shared.dto import UserPublicOut
from myauth.services._shared.errors import (
    AlreadyVerifiedError,
    DuplicateAccountError,
    InvalidVerificationTokenError,
    NotFoundError,
    TokenError,
)
from myauth.services._shared.ports import Notifier, TokenCodec, TokenKind
from myauth.services.verification import templates
from myauth.services.verification.dto import (
    RegistrationIn,
    RegistrationOut,
    ResendOut,
    VerificationConfig,
    VerificationOut,
)

logger = logging.getLogger(__name__)

MSG_REGISTERED = "Registration successful! Check your email to verify your account."
MSG_VERIFIED = "Email verified successfully. You can now log in."
MSG_ALREADY_VERIFIED = "Email already verified"
MSG_RESENT = "Verification email resent successfully"


class VerificationService(BaseService):
    """
    Orchestrates registration and email verification.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        notifier: Notifier,
        cfg: VerificationConfig,
    ) -> None:
        """
        :param token_codec: Signs and verifies verification tokens.
        :param notifier: Outbound mail capability.
        :param cfg: Link base, token lifetime and uniqueness policy.
        """
        super().__init__()
        self.tokens = token_codec
        self.notifier = notifier
        self.cfg = cfg

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegistrationIn) -> RegistrationOut:
        """
        Create an unverified account and send the verification link.

        :param dto: Registration input.
        :type dto: :class:`RegistrationIn`
        :returns: Confirmation message and public user summary. The token
            itself is only ever sent by mail.
        :rtype: :class:`RegistrationOut`
        :raises DuplicateAccountError: When a configured uniqueness field is
            already taken (also when a concurrent insert wins the race).
        """
        profile = dto.profile()
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users

                clash = repo.find_conflicting_field(profile, self.cfg.unique_fields)
                if clash is not None:
                    logger.info("Registration refused", extra={"reason": f"duplicate_{clash}"})
                    raise DuplicateAccountError(clash)

                user = repo.model(**profile, password=dto.password)  # model setter hashes
                repo.save(user)
                summary = UserPublicOut.from_model(user)
        except IntegrityError as exc:
            # Lost a race against a concurrent registration for the same email.
            logger.info("Registration refused", extra={"reason": "duplicate_email"})
            raise DuplicateAccountError("email") from exc

        logger.info("User registered", extra={"user_id": summary.id})
        sent = self._send_link(summary, resend=False)
        return RegistrationOut(message=MSG_REGISTERED, user=summary, notification_sent=sent)

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def verify_email(self, token: str) -> VerificationOut:
        """
        Mark the token's subject as verified.

        Verifying an already-verified account succeeds without changes.

        :param token: Verification token taken from the mailed link.
        :returns: Outcome message and whether the account was already verified.
        :raises InvalidVerificationTokenError: Bad or expired token, wrong
            token kind, or unknown subject.
        """
        try:
            claims = self.tokens.verify(token)
        except TokenError as exc:
            logger.info("Verification refused", extra={"reason": exc.code})
            raise InvalidVerificationTokenError() from exc

        if claims.kind is not TokenKind.VERIFY:
            logger.info("Verification refused", extra={"reason": "wrong_kind", "kind": claims.kind.value})
            raise InvalidVerificationTokenError()

        try:
            user_id = int(claims.subject_id)
        except ValueError as exc:
            raise InvalidVerificationTokenError() from exc

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_id(user_id)
            if user is None:
                logger.info("Verification refused", extra={"reason": "unknown_subject"})
                raise InvalidVerificationTokenError()

            if user.is_verified:
                return VerificationOut(message=MSG_ALREADY_VERIFIED, already_verified=True)

            user.is_verified = True
            repo.save(user)

        logger.info("Email verified", extra={"user_id": user_id})
        return VerificationOut(message=MSG_VERIFIED)

    # ------------------------------------------------------------------ #
    # Resend
    # ------------------------------------------------------------------ #

    def resend_verification(self, email: str) -> ResendOut:
        """
        Send a fresh verification link to an unverified account.

        Earlier links stay valid until their own expiry.

        :param email: Account email.
        :raises NotFoundError: No account with this email.
        :raises AlreadyVerifiedError: Account is already verified.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_email(email)
            if user is None:
                raise NotFoundError("User", email, by="email")
            if user.is_verified:
                raise AlreadyVerifiedError()
            summary = UserPublicOut.from_model(user)

        sent = self._send_link(summary, resend=True)
        logger.info("Verification resent", extra={"user_id": summary.id})
        return ResendOut(message=MSG_RESENT, notification_sent=sent)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _send_link(self, user: UserPublicOut, *, resend: bool) -> bool:
        """
        Issue a verification token and mail it.

        Any failure while building or sending the mail is logged and reported
        as ``False``; the account change that preceded it stays committed.
        """
        try:
            token = self.tokens.issue(user.id, TokenKind.VERIFY, self.cfg.token_ttl)
            subject = templates.verification_subject(self.cfg.app_name, resend=resend)
            body = templates.verification_body(
                name=user.display_name,
                link=self.cfg.link_for(token),
                ttl_seconds=self.cfg.token_ttl.total_seconds(),
                resend=resend,
            )
            self.notifier.send(user.email, subject, body)
        except Exception:
            logger.warning(
                "Verification mail not delivered",
                extra={"user_id": user.id},
                exc_info=True,
            )
            return False
        return True
