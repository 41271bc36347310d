"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from commerce.application.add_product import AddProductHandler
from commerce.application.add_stock import AddStockHandler
from commerce.application.update_product import UpdateProductPriceHandler
from commerce.domain.exceptions import DomainException
from commerce.infrastructure.bootstrap import merchant_repository, product_repository
from commerce.infrastructure.cli.errors import domain_error


@click.command("add")
@click.option("--sku", required=True, help="Unique stock keeping unit.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--merchant", "merchant_id", required=True, type=int, help="Merchant ID.")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--description", default="", help="Free-text description.")
def product_add(
    sku: str, name: str, price: str, merchant_id: int, stock: int, description: str
) -> None:
    """Add a new product to a merchant's catalog."""
    handler = AddProductHandler(
        product_repo=product_repository(),
        merchant_repo=merchant_repository(),
    )

    try:
        product = handler.handle(
            sku=sku,
            name=name,
            price=price,
            merchant_id=merchant_id,
            initial_stock=stock,
            description=description,
        )
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(
        f"Product {product.sku} '{product.name}' added at {product.price} "
        f"({product.available_stock} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<12} {'Name':<20} {'Price':>14} {'Stock':>7} {'Status':>9}")
    click.echo("-" * 66)
    for p in products:
        click.echo(
            f"{p.sku:<12} {p.name:<20} {str(p.price):>14} "
            f"{p.available_stock:>7} {p.status.value:>9}"
        )


@click.command("stock")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
def product_stock(sku: str, quantity: int) -> None:
    """Add stock to a product."""
    handler = AddStockHandler(product_repo=product_repository())

    try:
        available = handler.handle(sku=sku, quantity=quantity)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"Product {sku} now has {available} in stock")


@click.command("price")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_price(sku: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductPriceHandler(product_repo=product_repository())

    try:
        new_price = handler.handle(sku=sku, new_price=price)
    except DomainException as exc:
        raise domain_error(exc) from exc

    click.echo(f"Product {sku} price updated to {new_price}")
