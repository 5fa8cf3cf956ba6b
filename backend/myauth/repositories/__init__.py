"""Repository package exposing persistence-layer access for domain models."""

from __future__ import annotations

from myauth.repositories.base import BaseRepository
from myauth.repositories.user import UserRepository

__all__ = ["BaseRepository", "UserRepository"]
