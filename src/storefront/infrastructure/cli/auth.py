"""Credential options shared by commands that need an acting user."""

from __future__ import annotations

from typing import Any, Callable

import click

from storefront.application.authenticate_user import AuthenticateUserHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.user import User
from storefront.infrastructure.bootstrap import user_repository


def actor_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --as-user / --password to a command."""
    func = click.option(
        "--password",
        "actor_password",
        prompt=True,
        hide_input=True,
        envvar="STOREFRONT_PASSWORD",
        help="Password of the acting user.",
    )(func)
    func = click.option(
        "--as-user",
        "actor_email",
        required=True,
        envvar="STOREFRONT_USER",
        help="Email of the acting user.",
    )(func)
    return func


def acting_user(email: str, password: str) -> User:
    handler = AuthenticateUserHandler(user_repo=user_repository())
    try:
        return handler.authenticate(email, password)
    except DomainException as exc:
        raise click.ClickException(str(exc))
