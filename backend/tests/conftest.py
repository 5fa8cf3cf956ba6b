"""Pytest fixtures building an isolated application per test.

Every test that touches the database gets a fresh app bound to its own
in-memory SQLite database, so data changes never leak between cases.
"""

from __future__ import annotations

import os

import pytest

from myauth.core.config import TestingConfig
from myauth.core.container import get_container
from myauth.core.extensions import db as _db
from myauth.factory import create_app
from myauth.services._shared.ports import (
    InMemoryNotifier,
    InMemorySessionRegistry,
    StubTokenCodec,
)


@pytest.fixture()
def app():
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with :class:`TestingConfig` applied, an active app
        context and all tables created.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db):
    """Expose the app-scoped session and wire Factory Boy to it."""
    from tests.factories import bind_session

    bind_session(db.session)
    yield db.session
    bind_session(None)


@pytest.fixture()
def client(app):
    """Flask test client sharing the fixture's app context."""
    return app.test_client()


@pytest.fixture()
def container(app):
    """Services wired by the application factory."""
    return get_container()


@pytest.fixture()
def outbox(container) -> InMemoryNotifier:
    """In-memory notifier installed by ``MAIL_BACKEND = "memory"``."""
    assert isinstance(container.notifier, InMemoryNotifier)
    return container.notifier


# -- In-memory doubles for service-level tests ---------------------------------
@pytest.fixture()
def codec() -> StubTokenCodec:
    return StubTokenCodec()


@pytest.fixture()
def registry() -> InMemorySessionRegistry:
    return InMemorySessionRegistry()


@pytest.fixture()
def notifier() -> InMemoryNotifier:
    return InMemoryNotifier()
