"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. Each carries a stable ``code`` so callers can branch on the failure
category without parsing messages.

The translation to HTTP responses (RFC 7807) is handled by
``myauth/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them through ``BaseService.translate_exceptions``.
    """

    code = "service_error"
    default_message = "Service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.default_message


# --------------------------------------------------------------------------- #
# Accounts
# --------------------------------------------------------------------------- #


class DuplicateAccountError(ServiceError):
    """
    Raised when registration collides with an existing account.

    :param field: Uniqueness field that collided (``email``, ``phone``,
        ``id_number``).
    :type field: str
    """

    code = "duplicate_account"

    _LABELS = {"email": "Email", "phone": "Phone", "id_number": "ID Number"}

    def __init__(self, field: str = "email") -> None:
        self.field = field
        super().__init__(f"{self._LABELS.get(field, field)} already registered")


class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    The message names the entity but never echoes the lookup key back.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    :param by: Name of the lookup field, used in the message.
    :type by: str
    """

    code = "not_found"

    def __init__(self, entity: str, key: str | int, *, by: str = "id") -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"No {entity.lower()} found with this {by}")


class AlreadyVerifiedError(ServiceError):
    """Raised when a verification mail is requested for a verified account."""

    code = "already_verified"
    default_message = "Email already verified"


# --------------------------------------------------------------------------- #
# Sessions
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """Unknown email or wrong secret. Both share one message on purpose."""

    code = "invalid_credentials"
    default_message = "Invalid credentials"


class NotVerifiedError(ServiceError):
    """Login attempted before the email address was confirmed."""

    code = "not_verified"
    default_message = "Please verify your email before logging in."


class UnauthorizedError(ServiceError):
    """Refresh token is not (or no longer) in the session registry."""

    code = "unauthorized"
    default_message = "Unauthorized"


class InvalidTokenError(ServiceError):
    """Token failed cryptographic, expiry or kind checks."""

    code = "invalid_token"
    default_message = "Invalid or expired token"


class InvalidVerificationTokenError(InvalidTokenError):
    """Verification link is unusable (bad, expired, or unknown subject)."""

    default_message = "Invalid or expired verification link."


# --------------------------------------------------------------------------- #
# Token codec
# --------------------------------------------------------------------------- #


class TokenError(ServiceError):
    """Base class for token codec failures."""

    code = "token_error"
    default_message = "Token rejected"


class MalformedTokenError(TokenError):
    """Token cannot be parsed or lacks required claims."""

    code = "malformed"
    default_message = "Malformed token"


class SignatureInvalidError(TokenError):
    """Token signature does not match the configured key."""

    code = "signature_invalid"
    default_message = "Token signature is invalid"


class TokenExpiredError(TokenError):
    """Token is correctly signed but past its encoded expiry."""

    code = "expired"
    default_message = "Token has expired"


# --------------------------------------------------------------------------- #
# Infrastructure
# --------------------------------------------------------------------------- #


class StorageUnavailableError(ServiceError):
    """Backing store (session registry, database) could not be reached."""

    code = "storage_unavailable"
    default_message = "Session store unavailable"


class NotificationFailedError(ServiceError):
    """Outbound notification could not be delivered. Non-fatal for callers."""

    code = "notification_failed"
    default_message = "Notification could not be delivered"
