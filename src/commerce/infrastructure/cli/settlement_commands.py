"""CLI commands for merchant settlement."""

from __future__ import annotations

from datetime import date

import click

from commerce.application.dto import SettlementDTO
from commerce.application.process_settlement import ProcessSettlementHandler
from commerce.application.run_daily_settlement import RunDailySettlementHandler
from commerce.application.settle_merchant import SettleMerchantHandler
from commerce.domain.exceptions import DomainException
from commerce.infrastructure.bootstrap import (
    merchant_repository,
    order_repository,
    settlement_repository,
)
from commerce.infrastructure.cli.errors import domain_error


def _parse_date(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Expected YYYY-MM-DD.")


@click.command("run")
@click.option("--date", "settlement_date", default=None, callback=_parse_date,
              help="Settlement date (YYYY-MM-DD, default today).")
@click.option("--merchant", "merchant_id", default=None, type=int,
              help="Settle only this merchant.")
def settlement_run(settlement_date: date | None, merchant_id: int | None) -> None:
    """Reconcile merchant balances against completed orders."""
    merchants = merchant_repository()
    settle = SettleMerchantHandler(
        merchant_repo=merchants,
        order_repo=order_repository(),
        settlement_repo=settlement_repository(),
    )

    try:
        if merchant_id is not None:
            settlements = [settle.handle(merchant_id, settlement_date)]
        else:
            settlements = RunDailySettlementHandler(merchants, settle).handle(settlement_date)
    except DomainException as exc:
        raise domain_error(exc) from exc

    if not settlements:
        click.echo("No merchants settled.")
        return

    click.echo(
        f"{'ID':<5} {'Merchant':>8} {'Date':<11} {'Expected':>14} "
        f"{'Actual':>14} {'Difference':>14} {'Status':<9}"
    )
    click.echo("-" * 81)
    for settlement in settlements:
        dto = SettlementDTO.from_settlement(settlement)
        click.echo(
            f"{dto.settlement_id:<5} {dto.merchant_id:>8} {dto.settlement_date:<11} "
            f"{dto.expected_income:>14} {dto.actual_balance:>14} "
            f"{dto.difference:>14} {dto.status:<9}"
        )


@click.command("process")
@click.option("--id", "settlement_id", required=True, type=int, help="Settlement ID.")
@click.option("--remarks", required=True, help="How the discrepancy was resolved.")
def settlement_process(settlement_id: int, remarks: str) -> None:
    """Mark a settlement as processed."""
    handler = ProcessSettlementHandler(settlement_repo=settlement_repository())

    try:
        dto = handler.handle(settlement_id, remarks)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"Settlement #{dto.settlement_id} is now {dto.status}")
