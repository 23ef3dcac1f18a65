"""CLI commands for orders: checkout and outcome reporting."""

from __future__ import annotations

import click

from stockres.application.complete_order import CompleteOrderHandler
from stockres.application.dto import OrderDTO
from stockres.application.fail_order import FailOrderHandler
from stockres.application.place_order import PlaceOrderHandler
from stockres.domain.exceptions import DomainException
from stockres.infrastructure.bootstrap import unit_of_work


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     #{dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Unit':<8} {'Qty':>6} {'Warehouse':>10} {'State':<10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        warehouse = "-" if item.warehouse_id is None else str(item.warehouse_id)
        click.echo(
            f"  {item.product_id:<20} {item.unit:<8} {item.quantity:>6} {warehouse:>10} {item.state:<10}"
        )


@click.command("place")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
def order_place(user_id: int) -> None:
    """Turn the reserved lines of a cart into a pending order."""
    handler = PlaceOrderHandler(unit_of_work())

    try:
        dto = handler.handle(user_id=user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("complete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_complete(order_id: int) -> None:
    """Mark an order completed (reserved stock is deducted)."""
    handler = CompleteOrderHandler(unit_of_work())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} completed, stock deducted.")


@click.command("fail")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_fail(order_id: int) -> None:
    """Mark an order failed (reserved stock is released)."""
    handler = FailOrderHandler(unit_of_work())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} failed, reservations released.")
