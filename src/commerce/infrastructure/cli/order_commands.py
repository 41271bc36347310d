"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from commerce.application.cancel_order import CancelOrderHandler
from commerce.application.dto import OrderDTO, OrderItemSpec
from commerce.application.purchase import PurchaseHandler
from commerce.application.show_order import ShowOrderHandler
from commerce.domain.exceptions import DomainException
from commerce.infrastructure.bootstrap import (
    merchant_repository,
    order_number_generator,
    order_repository,
    product_repository,
    user_repository,
)
from commerce.infrastructure.cli.errors import domain_error


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'SKU-A:3,SKU-B:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'SKU:Quantity'."
            )
        sku, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{sku}'."
            )
        specs.append(OrderItemSpec(sku=sku.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"User: #{dto.user_id}   Merchant: #{dto.merchant_id}")
    click.echo(f"Ordered:   {dto.order_time}")
    if dto.completed_time:
        click.echo(f"Completed: {dto.completed_time}")
    if dto.cancel_reason:
        click.echo(f"Cancelled: {dto.cancel_reason}")
    click.echo()
    click.echo(f"  {'SKU':<10} {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*67}")
    for item in dto.items:
        click.echo(
            f"  {item.sku:<10} {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.total_price:>14}"
        )
    click.echo(f"  {'-'*67}")
    click.echo(f"  {'Order Total':<31} {dto.total_quantity:>5} {dto.total_amount:>29}")


@click.command("purchase")
@click.option("--user", "user_id", required=True, type=int, help="Buying user ID.")
@click.option("--items", required=True, help="Items as 'SKU:Qty,SKU:Qty'.")
def order_purchase(user_id: int, items: str) -> None:
    """Buy products: creates, pays and completes an order."""
    specs = _parse_items(items)

    orders = order_repository()
    handler = PurchaseHandler(
        user_repo=user_repository(),
        merchant_repo=merchant_repository(),
        product_repo=product_repository(),
        order_repo=orders,
        order_numbers=order_number_generator(orders),
    )

    try:
        dto = handler.handle(user_id=user_id, item_specs=specs)
    except DomainException as exc:
        raise domain_error(exc) from exc

    _display_order(dto)


@click.command("cancel")
@click.option("--number", "order_number", required=True, help="Order number to cancel.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
def order_cancel(order_number: str, reason: str | None) -> None:
    """Cancel an order, refunding and restocking as needed."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        user_repo=user_repository(),
        merchant_repo=merchant_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(order_number, reason=reason)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"Order {order_number} cancelled.")


@click.command("show")
@click.option("--number", "order_number", required=True, help="Order number to display.")
def order_show(order_number: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_number)
    except DomainException as exc:
        raise domain_error(exc) from exc

    _display_order(dto)
