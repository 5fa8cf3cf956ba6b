"""
DTOs for VerificationService.

Contracts for self-registration, email verification and resending the
verification link.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from myauth.services._shared.dto import UserPublicOut

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationIn:
    """
    Input payload for registration.

    :param email: Login email (normalized to lowercase+trim by the model).
    :type email: str
    :param password: Raw password (the model setter hashes it).
    :type password: str
    :param first_name: Optional first name, used to address the user.
    :type first_name: str | None
    :param last_name: Optional last name.
    :type last_name: str | None
    :param gender: Optional gender.
    :type gender: str | None
    :param dob: Optional date of birth.
    :type dob: date | None
    :param address: Optional postal address.
    :type address: str | None
    :param id_number: Optional national id number.
    :type id_number: str | None
    :param phone: Optional phone number.
    :type phone: str | None
    """

    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    dob: date | None = None
    address: str | None = None
    id_number: str | None = None
    phone: str | None = None

    def profile(self) -> dict[str, object]:
        """Return the model fields (everything but the raw password)."""
        return {
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "gender": self.gender,
            "dob": self.dob,
            "address": self.address,
            "id_number": self.id_number,
            "phone": self.phone,
        }


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationOut:
    """
    Output summary for registration.

    :param message: User-facing confirmation.
    :type message: str
    :param user: Public-safe user payload.
    :type user: :class:`UserPublicOut`
    :param notification_sent: Whether the verification mail was handed off.
    :type notification_sent: bool
    """

    message: str
    user: UserPublicOut
    notification_sent: bool = True


@dataclass(frozen=True, slots=True)
class VerificationOut:
    """
    Output of :meth:`VerificationService.verify_email`.

    :param message: User-facing confirmation.
    :type message: str
    :param already_verified: ``True`` when nothing changed.
    :type already_verified: bool
    """

    message: str
    already_verified: bool = False


@dataclass(frozen=True, slots=True)
class ResendOut:
    """
    Output of :meth:`VerificationService.resend_verification`.

    :param message: User-facing confirmation.
    :type message: str
    :param notification_sent: Whether the verification mail was handed off.
    :type notification_sent: bool
    """

    message: str
    notification_sent: bool = True


# --------------------------------------------------------------------------- #
# Config
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class VerificationConfig:
    """
    Verification flow configuration.

    :param token_ttl: Verification token lifetime.
    :type token_ttl: timedelta
    :param link_base: Absolute URL the token is appended to, e.g.
        ``https://example.org/api/v1/auth/verify-email``.
    :type link_base: str
    :param unique_fields: Fields that must not collide with another account.
    :type unique_fields: tuple[str, ...]
    :param app_name: Product name shown in mails.
    :type app_name: str
    """

    link_base: str
    token_ttl: timedelta = timedelta(hours=24)
    unique_fields: tuple[str, ...] = ("email",)
    app_name: str = "MyAuth"

    def link_for(self, token: str) -> str:
        return f"{self.link_base.rstrip('/')}/{token}"
