"""CLI commands for stock records."""

from __future__ import annotations

import json
from pathlib import Path

import click

from stockres.application.dto import StockSyncRow
from stockres.application.set_stock import SetStockHandler
from stockres.application.show_stock import ShowStockHandler
from stockres.application.sync_stock import SyncStockHandler
from stockres.domain.exceptions import DomainException
from stockres.infrastructure.bootstrap import settings, unit_of_work


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_code", required=True, help="Warehouse code.")
@click.option("--unit", required=True, help="Unit of measure.")
@click.option("--stock", required=True, type=int, help="Physical quantity on hand.")
@click.option("--min-stock", type=int, default=None, help="Low-stock threshold.")
def stock_set(product_id: str, warehouse_code: str, unit: str, stock: int, min_stock: int | None) -> None:
    """Set the physical stock of a (product, warehouse, unit)."""
    handler = SetStockHandler(unit_of_work())

    try:
        line = handler.handle(
            product_id=product_id,
            warehouse_code=warehouse_code,
            unit=unit,
            stock=stock,
            min_stock=min_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock for '{line.product_id}' ({line.unit}) in '{warehouse_code}' set to {line.stock} "
        f"(reserved={line.reserved}, available={line.available})"
    )


@click.command("show")
@click.option("--product", "product_id", default=None, help="Filter by product ID.")
@click.option("--unit", default=None, help="Filter by unit.")
@click.option("--warehouse", "warehouse_code", default=None, help="Filter by warehouse code.")
@click.option("--with-stock", "with_stock_only", is_flag=True, default=False, help="Only records with stock.")
@click.option("--available", "available_only", is_flag=True, default=False, help="Only records with available stock.")
def stock_show(
    product_id: str | None,
    unit: str | None,
    warehouse_code: str | None,
    with_stock_only: bool,
    available_only: bool,
) -> None:
    """Show stock levels."""
    handler = ShowStockHandler(unit_of_work())

    try:
        lines = handler.handle(
            product_id=product_id,
            unit=unit,
            warehouse_code=warehouse_code,
            with_stock_only=with_stock_only,
            available_only=available_only,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(
        f"{'Product':<20} {'Unit':<8} {'Warehouse':>10} {'Stock':>8} {'Reserved':>10} {'Available':>10}"
    )
    click.echo("-" * 71)
    for line in lines:
        flag = "  (below min)" if line.below_min_stock else ""
        click.echo(
            f"{line.product_id:<20} {line.unit:<8} {line.warehouse_id:>10} {line.stock:>8} "
            f"{line.reserved:>10} {line.available:>10}{flag}"
        )


def _load_sync_rows(path: Path) -> list[StockSyncRow]:
    """Parse a JSON list of {product_id, warehouse_code, unit, stock} objects."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON in {path}: {exc}")
    if not isinstance(raw, list):
        raise click.BadParameter(f"{path} must contain a JSON list of stock rows")

    rows: list[StockSyncRow] = []
    for index, entry in enumerate(raw):
        try:
            rows.append(
                StockSyncRow(
                    product_id=str(entry["product_id"]),
                    warehouse_code=str(entry["warehouse_code"]),
                    unit=str(entry["unit"]),
                    stock=int(entry["stock"]),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise click.BadParameter(f"Invalid stock row #{index}: {exc}")
    return rows


@click.command("sync")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stock_sync(file: Path) -> None:
    """Replace physical stock with the counts reported in FILE (JSON)."""
    rows = _load_sync_rows(file)
    handler = SyncStockHandler(unit_of_work(), batch_size=settings().stock_sync_batch_size)

    try:
        report = handler.handle(rows)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock sync done: {report.reset} record(s) reset, {report.updated} updated, "
        f"{report.created} created, {report.skipped} skipped"
    )
