"""Unit of Work: the transaction boundary of every service operation."""

from .base import AccountsUnitOfWork
from .sqlalchemy_uow import ReadOnlyViolation, SQLAlchemyUnitOfWork

__all__ = ["AccountsUnitOfWork", "ReadOnlyViolation", "SQLAlchemyUnitOfWork"]
