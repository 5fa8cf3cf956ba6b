"""Tests for the User model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash

from myauth.models.user import User


class TestUser:
    def test_password_hashing(self, session):
        u = User(email="Test@Example.com")
        u.password = "secret123"
        session.add(u)
        session.commit()
        assert u.password_hash != "secret123"
        assert check_password_hash(u.password_hash, "secret123") is True

    def test_password_is_write_only(self):
        u = User(email="a@example.com")
        u.password = "x"
        with pytest.raises(AttributeError):
            _ = u.password

    def test_email_normalized_and_unique(self, session):
        u1 = User(email="  Alice@Example.com ", password="pw")
        session.add(u1)
        session.commit()
        assert u1.email == "alice@example.com"

        u2 = User(email="alice@example.com", password="pw")
        session.add(u2)
        with pytest.raises(IntegrityError):
            session.commit()

    def test_new_accounts_are_unverified(self, session):
        u = User(email="new@example.com", password="pw")
        session.add(u)
        session.commit()
        assert u.is_verified is False

    def test_verification_is_monotonic(self, session):
        u = User(email="v@example.com", password="pw")
        session.add(u)
        session.commit()

        u.is_verified = True
        session.commit()
        u.is_verified = True  # re-affirming is fine

        with pytest.raises(ValueError):
            u.is_verified = False

    def test_display_name_falls_back_to_email(self):
        assert User(email="x@example.com", first_name="Ada").display_name == "Ada"
        assert User(email="x@example.com").display_name == "x@example.com"

    def test_blank_identifiers_are_stored_as_null(self):
        u = User(email="x@example.com", phone="  ", id_number=" A1 ")
        assert u.phone is None
        assert u.id_number == "A1"

    def test_basic_validations(self):
        with pytest.raises(ValueError):
            User(email="")
        with pytest.raises(ValueError):
            User(email="not-an-email")
        with pytest.raises(ValueError):
            User(email="x@example.com").password = ""
