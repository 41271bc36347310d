"""CLI commands that activate or deactivate users, merchants and products."""

from __future__ import annotations

import click

from commerce.application.set_status import SetResourceStatusHandler
from commerce.domain.exceptions import DomainException
from commerce.infrastructure.bootstrap import (
    merchant_repository,
    product_repository,
    user_repository,
)
from commerce.infrastructure.cli.errors import domain_error


def make_status_command(kind: str, active: bool) -> click.Command:
    """Build an ``activate`` or ``deactivate`` command for one resource kind."""
    verb = "activate" if active else "deactivate"
    key_name = "SKU" if kind == "product" else "ID"

    @click.command(verb, help=f"{verb.capitalize()} the {kind} with the given {key_name}.")
    @click.argument("key", metavar=key_name)
    def command(key: str) -> None:
        handler = SetResourceStatusHandler(
            user_repo=user_repository(),
            merchant_repo=merchant_repository(),
            product_repo=product_repository(),
        )

        try:
            status = handler.handle(kind=kind, key=key, active=active)
        except DomainException as exc:
            raise domain_error(exc) from exc

        click.echo(f"{kind.capitalize()} '{key}' is now {status}")

    return command
