"""
SQLAlchemy unit of work over the Flask-scoped session.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from myauth.core.extensions import db
from myauth.repositories import UserRepository


class ReadOnlyViolation(RuntimeError):
    """A write was attempted inside a read-only unit of work."""


class SQLAlchemyUnitOfWork:
    """
    Transaction scope for one service operation.

    :param read_only: When ``True`` any flush of pending changes raises
        :class:`ReadOnlyViolation` and :meth:`commit` is refused. Exiting never
        rolls back, so objects loaded inside the block stay usable afterwards.
    :param session: Session to bind. Defaults to ``db.session``.
    """

    def __init__(self, *, read_only: bool = False, session: Session | None = None) -> None:
        self.session = session if session is not None else db.session
        self.read_only = read_only
        self.users = UserRepository(session=self.session)
        self._guarded: Session | None = None

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        if self.read_only:
            self._guarded = self._bound_session()
            event.listen(self._guarded, "before_flush", self._refuse_flush)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self.read_only:
                return
            if exc_type is not None:
                self.rollback()
                return
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        finally:
            if self._guarded is not None:
                event.remove(self._guarded, "before_flush", self._refuse_flush)
                self._guarded = None

    def commit(self) -> None:
        if self.read_only:
            raise ReadOnlyViolation("Read-only unit of work cannot commit.")
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def _bound_session(self) -> Session:
        # Listen on this thread's session only, not on the whole registry.
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    @staticmethod
    def _refuse_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise ReadOnlyViolation("Read-only unit of work: pending changes cannot be flushed.")
