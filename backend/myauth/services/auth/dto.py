# myauth/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email (normalized by the repository).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Encoded refresh token; ``None`` when the client
        sent nothing, which makes logout a no-op.
    :type refresh_token: str | None
    """

    refresh_token: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO of a successful login.

    :param access_token: Encoded access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token (now in the session registry).
    :type refresh_token: str
    :param email: Normalised account email.
    :type email: str
    :param display_name: First name, or the email when none is stored.
    :type display_name: str
    """

    access_token: str
    refresh_token: str
    email: str
    display_name: str


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    """
    Output DTO of a refresh: a new access token only.

    :param access_token: Encoded access token.
    :type access_token: str
    """

    access_token: str


# ------------------------ Config DTO --------------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_ttl: Access token lifetime.
    :type access_ttl: timedelta
    :param refresh_ttl: Refresh token lifetime.
    :type refresh_ttl: timedelta
    """

    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)
