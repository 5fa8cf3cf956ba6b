"""Flask CLI commands for operating the auth service."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from myauth.core.container import get_container
from myauth.core.extensions import db
from myauth.services._shared.errors import ServiceError

LOGGER = logging.getLogger(__name__)


@click.group("auth")
def auth_cli() -> None:
    """Account and session maintenance commands."""


@auth_cli.command("create-db")
@with_appcontext
def create_db_command() -> None:
    """Create missing tables (development convenience; use migrations elsewhere)."""
    LOGGER.info("Creating database schema...")
    db.create_all()
    click.echo("Database schema ready.")


@auth_cli.command("resend-verification")
@click.argument("email")
@with_appcontext
def resend_verification_command(email: str) -> None:
    """Send a fresh verification link to EMAIL."""
    service = get_container().verification
    try:
        result = service.resend_verification(email)
    except ServiceError as exc:
        raise click.ClickException(exc.message) from exc
    if not result.notification_sent:
        raise click.ClickException("Verification mail could not be delivered; see logs.")
    click.echo(result.message)
