# myauth/services/_shared/base.py
from __future__ import annotations

from myauth.core import errors as api_errors
from myauth.services._shared.errors import (
    DuplicateAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidVerificationTokenError,
    NotFoundError,
    NotVerifiedError,
    ServiceError,
    StorageUnavailableError,
    TokenError,
    UnauthorizedError,
)
from myauth.uow import AccountsUnitOfWork, SQLAlchemyUnitOfWork

#: Client-facing detail for any access-token codec failure.
MSG_TOKEN_REJECTED = "Invalid or expired token"


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation (service error -> RFC 7807 ``APIError``).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Credential and token errors keep their generic messages when
      translated, so clients cannot tell which check failed.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> AccountsUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: UoW that commits on a clean exit.
        :rtype: AccountsUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> AccountsUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: UoW that refuses flushes and commits.
        :rtype: AccountsUnitOfWork
        """
        return SQLAlchemyUnitOfWork(read_only=True)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, DuplicateAccountError):
            # -> 409 Conflict
            return api_errors.Conflict(exc.message, code=exc.code)

        if isinstance(exc, NotFoundError):
            # -> 404 Not Found
            return api_errors.NotFound(exc.message, code=exc.code)

        if isinstance(exc, TokenError):
            # -> 401; one code for every codec failure
            return api_errors.Unauthorized(MSG_TOKEN_REJECTED, code="invalid_token")

        if isinstance(exc, InvalidCredentialsError | UnauthorizedError):
            # -> 401 Unauthorized
            return api_errors.Unauthorized(exc.message, code=exc.code)

        if isinstance(exc, InvalidVerificationTokenError):
            # Verification links are user-facing -> 400
            return api_errors.APIError(exc.message, status_code=400, code=exc.code)

        if isinstance(exc, NotVerifiedError | InvalidTokenError):
            # -> 403 Forbidden
            return api_errors.Forbidden(exc.message, code=exc.code)

        if isinstance(exc, StorageUnavailableError):
            # -> 503 Service Unavailable
            return api_errors.ServiceUnavailable(exc.message, code=exc.code)

        if isinstance(exc, ServiceError):
            # AlreadyVerified and any other ServiceError -> 400 Bad Request
            return api_errors.APIError(exc.message, status_code=400, code=exc.code)

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
