import click

from orderledger.infrastructure.cli.item_commands import (
    item_add,
    item_delete,
    item_list,
    item_update_price,
)
from orderledger.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_ship,
    order_show,
)
from orderledger.infrastructure.config import load_settings
from orderledger.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Order Ledger — inventory and orders"""
    configure_logging(load_settings().log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def item() -> None:
    """Manage inventory items."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_ship)
order.add_command(order_show)
item.add_command(item_add)
item.add_command(item_delete)
item.add_command(item_list)
item.add_command(item_update_price)
