"""CLI commands for the Warehouse aggregate."""

from __future__ import annotations

import click

from stockres.application.register_warehouse import RegisterWarehouseHandler
from stockres.application.set_default_warehouse import SetDefaultWarehouseHandler
from stockres.application.show_warehouses import ShowWarehousesHandler
from stockres.application.update_warehouse import UpdateWarehouseHandler
from stockres.domain.exceptions import DomainException
from stockres.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--code", required=True, help="Warehouse code (unique).")
@click.option("--name", required=True, help="Warehouse name.")
@click.option("--priority", type=int, default=999, show_default=True, help="1 makes it the default.")
@click.option("--business-code", default="", help="ERP business code.")
@click.option("--branch-code", default="", help="ERP branch code.")
@click.option("--address", default=None)
@click.option("--phone", default=None)
@click.option("--type", "warehouse_type", default=None, help="Free-form warehouse type.")
@click.option("--inactive", is_flag=True, default=False, help="Register as inactive.")
def warehouse_add(
    code: str,
    name: str,
    priority: int,
    business_code: str,
    branch_code: str,
    address: str | None,
    phone: str | None,
    warehouse_type: str | None,
    inactive: bool,
) -> None:
    """Register a new warehouse."""
    handler = RegisterWarehouseHandler(unit_of_work())

    try:
        dto = handler.handle(
            code=code,
            name=name,
            priority=priority,
            is_active=not inactive,
            business_code=business_code,
            branch_code=branch_code,
            address=address,
            phone=phone,
            warehouse_type=warehouse_type,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse #{dto.id} '{dto.code}' added (priority={dto.priority})")


@click.command("list")
@click.option("--all", "include_inactive", is_flag=True, default=False, help="Include inactive warehouses.")
@click.option("--summary", is_flag=True, default=False, help="Show stock totals per warehouse.")
def warehouse_list(include_inactive: bool, summary: bool) -> None:
    """List warehouses in allocation order."""
    warehouses = ShowWarehousesHandler(unit_of_work()).handle(
        include_inactive=include_inactive, with_summary=summary
    )

    if not warehouses:
        click.echo("No warehouses found.")
        return

    header = f"{'ID':<6} {'Code':<12} {'Name':<24} {'Priority':>8} {'Active':>7}"
    if summary:
        header += f" {'Products':>9} {'Stock':>9} {'Reserved':>9}"
    click.echo(header)
    click.echo("-" * len(header))
    for w in warehouses:
        line = (
            f"{w.id:<6} {w.code:<12} {w.name:<24} {w.priority:>8} "
            f"{'yes' if w.is_active else 'no':>7}"
        )
        if summary:
            line += f" {w.products_count:>9} {w.total_stock:>9} {w.total_reserved:>9}"
        if w.is_default:
            line += "  (default)"
        click.echo(line)


@click.command("set-default")
@click.option("--code", required=True, help="Warehouse code.")
def warehouse_set_default(code: str) -> None:
    """Make a warehouse the default; every other one drops to priority 999."""
    handler = SetDefaultWarehouseHandler(unit_of_work())

    try:
        dto = handler.handle(warehouse_code=code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse '{dto.code}' is now the default")


@click.command("update")
@click.option("--id", "warehouse_id", required=True, type=int, help="Warehouse ID.")
@click.option("--name", default=None)
@click.option("--priority", type=int, default=None)
@click.option("--active/--inactive", "is_active", default=None)
@click.option("--address", default=None)
@click.option("--phone", default=None)
def warehouse_update(
    warehouse_id: int,
    name: str | None,
    priority: int | None,
    is_active: bool | None,
    address: str | None,
    phone: str | None,
) -> None:
    """Update warehouse fields."""
    changes = {
        key: value
        for key, value in {
            "name": name,
            "priority": priority,
            "is_active": is_active,
            "address": address,
            "phone": phone,
        }.items()
        if value is not None
    }
    if not changes:
        raise click.ClickException("Nothing to update")

    handler = UpdateWarehouseHandler(unit_of_work())

    try:
        dto = handler.handle(warehouse_id, **changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse #{dto.id} '{dto.code}' updated (priority={dto.priority})")
