"""User repository: lookups and persistence for :class:`User`."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, cast

from sqlalchemy import select

from myauth.models.user import User
from myauth.repositories.base import BaseRepository

#: Order in which colliding fields are reported on registration.
UNIQUENESS_ORDER = ("email", "phone", "id_number")


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Implements the user-repository port consumed by the auth services
    (``find_by_email`` / ``find_by_id`` / ``save``). It never handles tokens
    or sessions.
    """

    model = User

    def _filterable_fields(self):
        """Columns usable in uniqueness lookups."""
        return {
            "email": User.email,
            "phone": User.phone,
            "id_number": User.id_number,
            "is_verified": User.is_verified,
        }

    # ---------------------------- Port API ----------------------------

    def find_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def find_by_id(self, user_id: int) -> User | None:
        """Fetch a user by primary key."""
        return self.get(user_id)

    def save(self, user: User) -> User:
        """Insert or update ``user`` and flush.

        The unique constraint on ``email`` is enforced at flush time and
        surfaces as :class:`sqlalchemy.exc.IntegrityError`.
        """
        self.session.add(user)
        self.flush()
        return user

    # ---------------------------- Uniqueness ----------------------------

    def find_conflicting_field(
        self, values: Mapping[str, Any], fields: Iterable[str]
    ) -> str | None:
        """Return the first of ``fields`` already taken by another account.

        Blank values never collide. Fields are checked in
        :data:`UNIQUENESS_ORDER` so that ``email`` wins over ``phone``.

        :param values: Candidate values keyed by field name.
        :param fields: Field names that must be unique.
        :returns: Colliding field name, or ``None``.
        """
        wanted = set(fields)
        for field in UNIQUENESS_ORDER:
            if field not in wanted:
                continue
            value = values.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            if field == "email":
                if self.find_by_email(str(value)) is not None:
                    return field
            elif self.exists(**{field: str(value).strip()}):
                return field
        return None
