"""Session lifecycle: login, refresh, logout."""

from .dto import AccessTokenOut, AuthTokenConfig, LoginIn, LoginOut, LogoutIn, RefreshIn
from .service import SessionManager

__all__ = [
    "SessionManager",
    "AuthTokenConfig",
    "LoginIn",
    "LoginOut",
    "RefreshIn",
    "AccessTokenOut",
    "LogoutIn",
]
