"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.change_order_status import ChangeOrderStatusHandler
from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import AppContext
from storefront.infrastructure.cli.errors import DomainCommandError


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Owner:   {dto.user_id}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("place")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def order_place(app: AppContext, items: str) -> None:
    """Place a new order (reserves stock atomically)."""
    specs = _parse_items(items)
    handler = PlaceOrderHandler(uow=app.uow)

    try:
        dto = handler.handle(app.identity, specs)
    except DomainException as exc:
        raise DomainCommandError(exc)

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(app: AppContext, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=app.uow)

    try:
        dto = handler.handle(app.identity, order_id)
    except DomainException as exc:
        raise DomainCommandError(exc)

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    default=None,
    help="Only orders in this status.",
)
@click.pass_obj
def order_list(app: AppContext, status: str | None) -> None:
    """List your own orders."""
    handler = ListOrdersHandler(uow=app.uow)

    try:
        orders = handler.handle(app.identity, status=status)
    except DomainException as exc:
        raise DomainCommandError(exc)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<12} {'Items':>5} {'Total':>12}  Created")
    click.echo("-" * 58)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.status:<12} {len(dto.items):>5} {dto.total:>12}  {dto.created_at}"
        )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(app: AppContext, order_id: int) -> None:
    """Cancel a pending order."""
    handler = CancelOrderHandler(uow=app.uow, lifecycle=app.lifecycle)

    try:
        handler.handle(app.identity, order_id)
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Order #{order_id} cancelled.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--to",
    "status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Target status.",
)
@click.pass_obj
def order_status(app: AppContext, order_id: int, status: str) -> None:
    """Move an order to a new status."""
    handler = ChangeOrderStatusHandler(uow=app.uow, lifecycle=app.lifecycle)

    try:
        dto = handler.handle(app.identity, order_id, status)
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Order #{dto.id} is now {dto.status}.")
