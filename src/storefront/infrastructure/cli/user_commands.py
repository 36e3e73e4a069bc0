"""CLI commands for user accounts."""

from __future__ import annotations

import click

from storefront.application.authenticate_user import AuthenticateUserHandler
from storefront.application.register_user import RegisterUserHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import user_repository


@click.command("register")
@click.option("--email", required=True, help="Account email address.")
@click.password_option(help="Account password.")
@click.option("--role", "roles", multiple=True, help="Role to grant (repeatable, default customer).")
def user_register(email: str, password: str, roles: tuple[str, ...]) -> None:
    """Register a new user account."""
    handler = RegisterUserHandler(user_repo=user_repository())

    try:
        dto = handler.handle(email=email, password=password, roles=list(roles) or None)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {dto.email} registered  (id={dto.id}, roles={', '.join(dto.roles)})")


@click.command("login")
@click.option("--email", required=True, help="Account email address.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
def user_login(email: str, password: str) -> None:
    """Check a user's credentials."""
    handler = AuthenticateUserHandler(user_repo=user_repository())

    try:
        dto = handler.handle(email=email, password=password)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Signed in as {dto.email}  (id={dto.id})")
