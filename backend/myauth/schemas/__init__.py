"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginSchema,
    LoginUserSchema,
    RefreshSchema,
    RegisterSchema,
    ResendSchema,
    UserSchema,
)

__all__ = [
    "LoginSchema",
    "LoginUserSchema",
    "RefreshSchema",
    "RegisterSchema",
    "ResendSchema",
    "UserSchema",
]
