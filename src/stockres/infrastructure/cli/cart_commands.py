"""CLI commands for cart lines."""

from __future__ import annotations

import click

from stockres.application.add_to_cart import AddToCartHandler
from stockres.application.clear_cart import ClearCartHandler
from stockres.application.remove_from_cart import RemoveFromCartHandler
from stockres.application.show_cart import ShowCartHandler
from stockres.domain.exceptions import DomainException
from stockres.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--unit", required=True, help="Unit of measure (e.g. PCS, BOX).")
@click.option("--quantity", required=True, type=int, help="Units to add.")
def cart_add(user_id: int, product_id: str, unit: str, quantity: int) -> None:
    """Add units to a cart line and reserve them."""
    handler = AddToCartHandler(unit_of_work())

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id, unit=unit, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Reserved {dto.quantity} {dto.unit} of '{dto.product_id}' "
        f"in warehouse #{dto.warehouse_id}"
    )


@click.command("remove")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--unit", required=True, help="Unit of measure.")
@click.option("--quantity", required=True, type=int, help="Units to remove.")
def cart_remove(user_id: int, product_id: str, unit: str, quantity: int) -> None:
    """Remove units from a cart line, releasing their reservation."""
    handler = RemoveFromCartHandler(unit_of_work())

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id, unit=unit, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto.action == "deleted":
        click.echo(f"Removed '{dto.product_id}' ({dto.unit}) from cart, released {dto.released}")
    else:
        click.echo(
            f"Released {dto.released} of '{dto.product_id}' ({dto.unit}), "
            f"{dto.remaining_quantity} left in cart"
        )


@click.command("clear")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
def cart_clear(user_id: int) -> None:
    """Empty a cart, releasing every reservation."""
    handler = ClearCartHandler(unit_of_work())

    try:
        count = handler.handle(user_id=user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart of user #{user_id} cleared ({count} line(s))")


@click.command("show")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
def cart_show(user_id: int) -> None:
    """Show a cart and where each line is reserved."""
    lines = ShowCartHandler(unit_of_work()).handle(user_id=user_id)

    if not lines:
        click.echo("Cart is empty.")
        return

    click.echo(f"{'Product':<20} {'Unit':<8} {'Qty':>6} {'State':<10} {'Warehouse':>10}  Reserved at")
    click.echo("-" * 80)
    for line in lines:
        warehouse = "-" if line.warehouse_id is None else str(line.warehouse_id)
        click.echo(
            f"{line.product_id:<20} {line.unit:<8} {line.quantity:>6} {line.state:<10} "
            f"{warehouse:>10}  {line.reserved_at or '-'}"
        )
