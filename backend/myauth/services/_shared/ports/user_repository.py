from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from myauth.models.user import User


class UserRepositoryPort(Protocol):
    """
    Persistence capability for user records.

    The storage layer enforces the one-user-per-email invariant.
    """

    def find_by_email(self, email: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def save(self, user: User) -> User: ...

    def find_conflicting_field(
        self, values: Mapping[str, Any], fields: Iterable[str]
    ) -> str | None: ...
