"""Factory Boy definition for :class:`myauth.models.user.User`."""

from __future__ import annotations

import factory
from werkzeug.security import generate_password_hash

from myauth.models.user import User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`myauth.models.user.User` instances.

    Notes
    -----
    - Accounts are unverified by default, as after registration. Use
      ``UserFactory(verified=True)`` for an account that can log in.
    - ``password="..."`` overrides :data:`DEFAULT_PASSWORD`.
    """

    class Meta:
        model = User

    class Params:
        verified = factory.Trait(is_verified=True)
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    phone = factory.Sequence(lambda n: f"+1555{n:07d}")
    id_number = factory.Sequence(lambda n: f"ID{n:08d}")
    is_verified = False
    password_hash = factory.LazyAttribute(lambda o: generate_password_hash(o.password))
