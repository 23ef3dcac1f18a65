import click

from stockres.infrastructure.bootstrap import settings
from stockres.infrastructure.cli.cart_commands import cart_add, cart_clear, cart_remove, cart_show
from stockres.infrastructure.cli.order_commands import order_complete, order_fail, order_place
from stockres.infrastructure.cli.reservation_commands import reservations_release_expired
from stockres.infrastructure.cli.stock_commands import stock_set, stock_show, stock_sync
from stockres.infrastructure.cli.warehouse_commands import (
    warehouse_add,
    warehouse_list,
    warehouse_set_default,
    warehouse_update,
)
from stockres.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """stockres — multi-warehouse stock reservations"""
    configure_logging(settings().log_level)


@cli.group()
def warehouse() -> None:
    """Manage warehouses and their priority."""


@cli.group()
def stock() -> None:
    """Manage stock records."""


@cli.group()
def cart() -> None:
    """Manage cart lines and their reservations."""


@cli.group()
def order() -> None:
    """Place orders and report their outcome."""


@cli.group()
def reservations() -> None:
    """Reservation maintenance."""


# Register subcommands
warehouse.add_command(warehouse_add)
warehouse.add_command(warehouse_list)
warehouse.add_command(warehouse_set_default)
warehouse.add_command(warehouse_update)
stock.add_command(stock_set)
stock.add_command(stock_show)
stock.add_command(stock_sync)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
cart.add_command(cart_show)
order.add_command(order_place)
order.add_command(order_complete)
order.add_command(order_fail)
reservations.add_command(reservations_release_expired)
