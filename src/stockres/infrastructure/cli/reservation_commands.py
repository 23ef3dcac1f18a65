"""CLI command for the expired-reservation sweep.

Meant to be invoked by an external scheduler (cron, a Kubernetes CronJob).
"""

from __future__ import annotations

import click

from stockres.application.release_expired_reservations import ReleaseExpiredReservationsHandler
from stockres.domain.exceptions import DomainException
from stockres.infrastructure.bootstrap import settings, unit_of_work


@click.command("release-expired")
@click.option("--dry-run", is_flag=True, default=False, help="List what would be released without changing anything.")
@click.option("--timeout", type=int, default=None, help="Expiry in minutes (defaults to the configured value).")
def reservations_release_expired(dry_run: bool, timeout: int | None) -> None:
    """Release cart reservations older than the timeout."""
    timeout_minutes = timeout if timeout is not None else settings().cart_reservation_timeout

    try:
        handler = ReleaseExpiredReservationsHandler(unit_of_work(), timeout_minutes=timeout_minutes)
        report = handler.handle(dry_run=dry_run)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Looking for reservations older than {report.timeout_minutes} minutes ({report.cutoff})")
    if not report.candidates:
        click.echo("No expired reservations found.")
        return

    click.echo(f"Found {len(report.candidates)} expired reservation(s)")
    click.echo(f"{'User':>6} {'Product':<20} {'Unit':<8} {'Qty':>6} {'Warehouse':>10} {'Age (min)':>10}")
    click.echo("-" * 66)
    for c in report.candidates:
        click.echo(
            f"{c.user_id:>6} {c.product_id:<20} {c.unit:<8} {c.quantity:>6} "
            f"{c.warehouse_id:>10} {c.reserved_minutes_ago:>10}"
        )

    if report.dry_run:
        click.echo("DRY RUN: no changes made.")
        return

    click.echo(
        f"Released {report.processed} reservation(s), {report.released_quantity} unit(s) in total."
    )
