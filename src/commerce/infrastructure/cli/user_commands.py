"""CLI commands for the User aggregate."""

from __future__ import annotations

import click

from commerce.application.recharge_user import RechargeUserHandler
from commerce.application.register_user import RegisterUserHandler
from commerce.application.show_account import ShowAccountHandler
from commerce.config import get_default_currency
from commerce.domain.exceptions import DomainException
from commerce.infrastructure.bootstrap import merchant_repository, user_repository
from commerce.infrastructure.cli.errors import domain_error


@click.command("register")
@click.option("--username", required=True, help="Unique user name.")
@click.option("--email", default="", help="Contact email.")
@click.option("--phone", default="", help="Contact phone.")
@click.option("--currency", default=None, help="Account currency (default from config).")
def user_register(username: str, email: str, phone: str, currency: str | None) -> None:
    """Register a user with an empty prepaid account."""
    handler = RegisterUserHandler(user_repo=user_repository())

    try:
        user = handler.handle(
            username=username,
            email=email,
            phone=phone,
            currency=currency or get_default_currency(),
        )
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"User #{user.id} '{user.username}' registered (balance {user.balance})")


@click.command("recharge")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
@click.option("--amount", required=True, help="Amount to add (e.g. 100.00).")
def user_recharge(user_id: int, amount: str) -> None:
    """Top up a user's prepaid balance."""
    handler = RechargeUserHandler(user_repo=user_repository())

    try:
        balance = handler.handle(user_id=user_id, amount=amount)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"User #{user_id} balance: {balance}")


@click.command("show")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
def user_show(user_id: int) -> None:
    """Show a user's account."""
    handler = ShowAccountHandler(
        user_repo=user_repository(),
        merchant_repo=merchant_repository(),
    )

    try:
        dto = handler.user(user_id)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"User #{dto.owner_id} '{dto.name}'  (status={dto.status})")
    click.echo(f"Balance: {dto.balance}")
