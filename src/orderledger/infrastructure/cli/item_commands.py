"""CLI commands for the Item aggregate."""

from __future__ import annotations

import click

from orderledger.application.add_item import AddItemHandler
from orderledger.application.delete_item import DeleteItemHandler
from orderledger.application.list_items import ListItemsHandler
from orderledger.application.update_item_price import UpdateItemPriceHandler
from orderledger.domain.exceptions import DomainException
from orderledger.domain.model.value_objects import format_minor_units
from orderledger.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Item name (1-200 characters).")
@click.option("--price", required=True, type=click.IntRange(min=0), help="Price in cents.")
@click.option("--stock", required=True, type=click.IntRange(min=0), help="Units in stock.")
def item_add(name: str, price: int, stock: int) -> None:
    """Add a new item to the inventory."""
    handler = AddItemHandler(unit_of_work())

    try:
        dto = handler.handle(name=name, price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Item {dto.id} '{dto.name}' added at {format_minor_units(dto.price)} "
        f"with {dto.stock} in stock"
    )


@click.command("list")
def item_list() -> None:
    """List all items, newest first."""
    items = ListItemsHandler(unit_of_work()).handle()

    if not items:
        click.echo("No items found.")
        return

    click.echo(f"{'ID':<32} {'Name':<20} {'Price':>10} {'Stock':>7} {'Ver':>5}")
    click.echo("-" * 78)
    for it in items:
        click.echo(
            f"{it.id:<32} {it.name:<20} {format_minor_units(it.price):>10} "
            f"{it.stock:>7} {it.version:>5}"
        )


@click.command("update-price")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--price", required=True, type=click.IntRange(min=0), help="New price in cents.")
def item_update_price(item_id: str, price: int) -> None:
    """Update an item's price (existing orders keep their price)."""
    handler = UpdateItemPriceHandler(unit_of_work())

    try:
        dto = handler.handle(item_id=item_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {dto.id} price updated to {format_minor_units(dto.price)}")


@click.command("delete")
@click.option("--id", "item_id", required=True, help="Item ID.")
def item_delete(item_id: str) -> None:
    """Delete an item that no order references."""
    handler = DeleteItemHandler(unit_of_work())

    try:
        handler.handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item_id} deleted.")
