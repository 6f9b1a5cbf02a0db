"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderledger.application.cancel_order import CancelOrderHandler
from orderledger.application.create_order import CreateOrderHandler
from orderledger.application.dto import OrderDTO, OrderItemSpec
from orderledger.application.list_orders import ListOrdersHandler
from orderledger.application.ship_order import ShipOrderHandler
from orderledger.application.show_order import ShowOrderHandler
from orderledger.domain.exceptions import DomainException
from orderledger.domain.model.value_objects import format_minor_units
from orderledger.infrastructure.bootstrap import unit_of_work


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'abc123:3,def456:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ItemId:Quantity'."
            )
        item_id, qty_str = pair.rsplit(":", 1)
        item_id = item_id.strip()
        if not item_id:
            raise click.BadParameter(f"Missing item ID in '{pair}'.")
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for item '{item_id}'."
            )
        if qty <= 0:
            raise click.BadParameter(f"Quantity for item '{item_id}' must be positive.")
        specs.append(OrderItemSpec(item_id=item_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    click.echo()
    click.echo(f"  {'Item':<32} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*60}")
    for line in dto.lines:
        click.echo(
            f"  {line.item_id:<32} {line.quantity:>5} "
            f"{format_minor_units(line.unit_price):>10} "
            f"{format_minor_units(line.line_total):>10}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Order Total':<38} {format_minor_units(dto.total):>21}")


@click.command("create")
@click.option("--items", required=True, help="Items as 'ItemId:Qty,ItemId:Qty'.")
def order_create(items: str) -> None:
    """Create a new order (reserves stock)."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(unit_of_work())

    try:
        dto = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
def order_list() -> None:
    """List all orders, newest first."""
    orders = ListOrdersHandler(unit_of_work()).handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<10} {'Lines':>5} {'Total':>12}  Created")
    click.echo("-" * 58)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.status:<10} {len(dto.lines):>5} "
            f"{format_minor_units(dto.total):>12}  {dto.created_at:%Y-%m-%d %H:%M}"
        )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (releases its stock; repeating it is harmless)."""
    handler = CancelOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} {dto.status.lower()}.")


@click.command("ship")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to ship.")
def order_ship(order_id: int) -> None:
    """Mark an order as shipped."""
    handler = ShipOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} {dto.status.lower()}.")
