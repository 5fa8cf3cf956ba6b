"""Mapping of service errors onto HTTP problem errors."""

from __future__ import annotations

import pytest

from myauth.core import errors as api_errors
from myauth.services._shared.base import MSG_TOKEN_REJECTED, BaseService
from myauth.services._shared.errors import (
    AlreadyVerifiedError,
    DuplicateAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidVerificationTokenError,
    MalformedTokenError,
    NotFoundError,
    NotVerifiedError,
    SignatureInvalidError,
    StorageUnavailableError,
    TokenExpiredError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    ("exc", "status", "code"),
    [
        (DuplicateAccountError("phone"), 409, "duplicate_account"),
        (NotFoundError("User", 1), 404, "not_found"),
        (AlreadyVerifiedError(), 400, "already_verified"),
        (InvalidCredentialsError(), 401, "invalid_credentials"),
        (NotVerifiedError(), 403, "not_verified"),
        (UnauthorizedError(), 401, "unauthorized"),
        (InvalidTokenError(), 403, "invalid_token"),
        (InvalidVerificationTokenError(), 400, "invalid_token"),
        (StorageUnavailableError(), 503, "storage_unavailable"),
    ],
)
def test_service_errors_map_to_api_errors(exc, status, code):
    translated = BaseService.translate_exceptions(exc)
    assert isinstance(translated, api_errors.APIError)
    assert translated.status_code == status
    assert translated.code == code
    assert translated.message == exc.message


def test_non_service_errors_pass_through():
    err = KeyError("x")
    assert BaseService.translate_exceptions(err) is err


@pytest.mark.parametrize("exc", [MalformedTokenError(), SignatureInvalidError(), TokenExpiredError()])
def test_token_failures_share_one_client_code(exc):
    translated = BaseService.translate_exceptions(exc)
    assert isinstance(translated, api_errors.Unauthorized)
    assert translated.code == "invalid_token"
    assert translated.message == MSG_TOKEN_REJECTED
