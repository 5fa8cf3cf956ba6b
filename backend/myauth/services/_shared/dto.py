# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from myauth.models.user import User


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user payload (never exposes the password hash).

    :param id: User identifier.
    :type id: int
    :param email: Login email.
    :type email: str
    :param first_name: Optional first name.
    :type first_name: str | None
    :param last_name: Optional last name.
    :type last_name: str | None
    :param gender: Optional gender.
    :type gender: str | None
    :param dob: Optional date of birth.
    :type dob: date | None
    :param address: Optional postal address.
    :type address: str | None
    :param id_number: Optional national id number.
    :type id_number: str | None
    :param phone: Optional phone number.
    :type phone: str | None
    :param is_verified: Email ownership confirmed.
    :type is_verified: bool
    :param created_at: Creation timestamp.
    :type created_at: datetime | None
    """

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    dob: date | None = None
    address: str | None = None
    id_number: str | None = None
    phone: str | None = None
    is_verified: bool = False
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.first_name or self.email

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        """Map an ORM :class:`User` to its public representation."""
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            gender=user.gender,
            dob=user.dob,
            address=user.address,
            id_number=user.id_number,
            phone=user.phone,
            is_verified=bool(user.is_verified),
            created_at=user.created_at,
        )
