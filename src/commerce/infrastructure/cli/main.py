import click

from commerce.logging import configure_logging
from commerce.infrastructure.cli.merchant_commands import (
    merchant_register,
    merchant_show,
    merchant_withdraw,
)
from commerce.infrastructure.cli.order_commands import (
    order_cancel,
    order_purchase,
    order_show,
)
from commerce.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_price,
    product_stock,
)
from commerce.infrastructure.cli.settlement_commands import (
    settlement_process,
    settlement_run,
)
from commerce.infrastructure.cli.status_commands import make_status_command
from commerce.infrastructure.cli.user_commands import (
    user_recharge,
    user_register,
    user_show,
)


@click.group()
@click.option("-v", "--verbose", count=True, help="More log output (repeatable).")
@click.option("-q", "--quiet", count=True, help="Less log output (repeatable).")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int) -> None:
    """Commerce — orders, accounts and merchant settlement"""
    configure_logging(verbose, quiet, color=ctx.color is not False)


@cli.group()
def user() -> None:
    """Manage users and their prepaid balances."""


@cli.group()
def merchant() -> None:
    """Manage merchants and their income."""


@cli.group()
def product() -> None:
    """Manage products and stock."""


@cli.group()
def order() -> None:
    """Buy, cancel and inspect orders."""


@cli.group()
def settlement() -> None:
    """Reconcile merchant balances."""


# Register subcommands
user.add_command(user_register)
user.add_command(user_recharge)
user.add_command(user_show)
merchant.add_command(merchant_register)
merchant.add_command(merchant_withdraw)
merchant.add_command(merchant_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_price)
order.add_command(order_purchase)
order.add_command(order_cancel)
order.add_command(order_show)
settlement.add_command(settlement_run)
settlement.add_command(settlement_process)

for _group, _kind in ((user, "user"), (merchant, "merchant"), (product, "product")):
    _group.add_command(make_status_command(_kind, active=True))
    _group.add_command(make_status_command(_kind, active=False))
