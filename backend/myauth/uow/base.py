"""Transaction boundary contract consumed by the auth services."""

from __future__ import annotations

from typing import Protocol

from myauth.services._shared.ports.user_repository import UserRepositoryPort


class AccountsUnitOfWork(Protocol):
    """
    One transactional scope over the account store.

    ``users`` is bound to the scope's session. A writer commits when the
    ``with`` block exits cleanly and rolls back otherwise. A read-only scope
    never commits and leaves session state to the request teardown.
    """

    users: UserRepositoryPort
    read_only: bool

    def __enter__(self) -> AccountsUnitOfWork: ...
    def __exit__(self, exc_type, exc, tb) -> None: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...
