"""CLI commands for the Merchant aggregate."""

from __future__ import annotations

import click

from commerce.application.register_merchant import RegisterMerchantHandler
from commerce.application.show_account import ShowAccountHandler
from commerce.application.withdraw_income import WithdrawIncomeHandler
from commerce.config import get_default_currency
from commerce.domain.exceptions import DomainException
from commerce.infrastructure.bootstrap import merchant_repository, user_repository
from commerce.infrastructure.cli.errors import domain_error


@click.command("register")
@click.option("--name", required=True, help="Merchant name.")
@click.option("--license", "business_license", default="", help="Business license number.")
@click.option("--email", default="", help="Contact email.")
@click.option("--phone", default="", help="Contact phone.")
@click.option("--currency", default=None, help="Account currency (default from config).")
def merchant_register(
    name: str, business_license: str, email: str, phone: str, currency: str | None
) -> None:
    """Register a merchant with an empty income account."""
    handler = RegisterMerchantHandler(merchant_repo=merchant_repository())

    try:
        merchant = handler.handle(
            merchant_name=name,
            business_license=business_license,
            contact_email=email,
            contact_phone=phone,
            currency=currency or get_default_currency(),
        )
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"Merchant #{merchant.id} '{merchant.merchant_name}' registered")


@click.command("withdraw")
@click.option("--id", "merchant_id", required=True, type=int, help="Merchant ID.")
@click.option("--amount", required=True, help="Amount to withdraw.")
def merchant_withdraw(merchant_id: int, amount: str) -> None:
    """Withdraw from a merchant's balance."""
    handler = WithdrawIncomeHandler(merchant_repo=merchant_repository())

    try:
        balance = handler.handle(merchant_id=merchant_id, amount=amount)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"Merchant #{merchant_id} balance: {balance}")


@click.command("show")
@click.option("--id", "merchant_id", required=True, type=int, help="Merchant ID.")
def merchant_show(merchant_id: int) -> None:
    """Show a merchant's balance and total income."""
    handler = ShowAccountHandler(
        user_repo=user_repository(),
        merchant_repo=merchant_repository(),
    )

    try:
        dto = handler.merchant(merchant_id)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"Merchant #{dto.owner_id} '{dto.name}'  (status={dto.status})")
    click.echo(f"Balance:      {dto.balance}")
    click.echo(f"Total income: {dto.total_income}")
