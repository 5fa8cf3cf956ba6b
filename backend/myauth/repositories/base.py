"""Repository base for SQLAlchemy 2.x.

Repositories only read and stage rows. They never commit or roll back; the
unit of work that owns the session does.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from myauth.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Session handling and whitelisted lookups for one mapped class.

    Subclasses set ``model`` and return the columns callers may filter on
    from :meth:`_filterable_fields`. Filter keys outside that whitelist raise
    instead of being silently dropped, so a typo can never widen a query.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session of the enclosing unit of work. Defaults to
            the Flask-scoped ``db.session``.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Public filter key -> ORM attribute. Empty by default."""
        return {}

    def _where(self, stmt: Select[Any], filters: Mapping[str, Any]) -> Select[Any]:
        allowed = self._filterable_fields()
        unknown = set(filters) - set(allowed)
        if unknown:
            raise ValueError(f"Unsupported filter(s) for {self.model.__name__}: {sorted(unknown)}")
        clauses = [allowed[key] == value for key, value in filters.items()]
        return stmt.where(and_(*clauses)) if clauses else stmt

    def get(self, entity_id: Any) -> E | None:
        """Return the entity with primary key ``entity_id`` or ``None``."""
        return self.session.get(self.model, entity_id)

    def exists(self, **filters: Any) -> bool:
        """Whether at least one row matches every equality filter."""
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        return bool(self.session.execute(stmt).scalar())

    def flush(self) -> None:
        """Send staged changes to the database without committing."""
        self.session.flush()
