"""User account model."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, String, UniqueConstraint, false, func
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import generate_password_hash

from myauth.core.extensions import db


class User(db.Model):
    """
    Account identity plus the profile captured at registration.

    Only ``email``, ``password_hash`` and ``is_verified`` matter to the
    credential lifecycle; the remaining profile fields are carried opaquely.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    is_verified : bool
        Email ownership confirmed. Starts ``False`` and can only become
        ``True``; clearing it raises ``ValueError``.
    first_name, last_name : str | None
        Display name parts.
    gender, address : str | None
        Free-form profile data.
    dob : date | None
        Date of birth.
    id_number, phone : str | None
        Optional identifiers; uniqueness is a registration policy, not a
        schema constraint.
    created_at, updated_at : datetime
        Database-side timestamps.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Credentials
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    # Profile
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    id_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)

    # Audit (filled by the database)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_phone", "phone"),
        Index("ix_users_id_number", "id_number"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    @property
    def display_name(self) -> str:
        """First name when known, otherwise the email address."""
        return self.first_name or self.email

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("is_verified")
    def _verified_is_monotonic(self, key: str, value: bool) -> bool:
        """Reject a true -> false transition."""
        if self.is_verified and not value:
            raise ValueError("A verified account cannot become unverified.")
        return bool(value)

    @validates("phone", "id_number")
    def _strip_identifier(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        v = value.strip()
        return v or None

    def __repr__(self) -> str:
        state = "verified" if self.is_verified else "unverified"
        return f"<User id={self.id} {state}>"
