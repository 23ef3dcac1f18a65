"""Application service: Release Expired Reservations (the sweep).

Meant to be run periodically by an external scheduler.  Candidates are
listed once, then each line is released in its own transaction through the
same locked ledger path used by live requests, never through a bulk
update, so the sweep can run alongside request traffic.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import structlog

from stockres.application.dto import ExpiredReservationDTO, SweepReport
from stockres.application.unit_of_work import UnitOfWork, reservation_lifecycle
from stockres.domain.exceptions import ValidationError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_MINUTES = 1440  # 24 hours
MIN_TIMEOUT_MINUTES = 1
MAX_TIMEOUT_MINUTES = 10080  # 7 days


def validate_timeout(minutes: int) -> int:
    if not MIN_TIMEOUT_MINUTES <= minutes <= MAX_TIMEOUT_MINUTES:
        raise ValidationError(
            f"Reservation timeout must be between {MIN_TIMEOUT_MINUTES} and "
            f"{MAX_TIMEOUT_MINUTES} minutes, got {minutes}"
        )
    return minutes


class ReleaseExpiredReservationsHandler:

    def __init__(self, uow: UnitOfWork, timeout_minutes: int = DEFAULT_TIMEOUT_MINUTES) -> None:
        self._uow = uow
        self._timeout_minutes = validate_timeout(timeout_minutes)

    def handle(self, now: datetime | None = None, dry_run: bool = False) -> SweepReport:
        """Release every cart reservation older than the timeout.

        With ``dry_run`` the candidates are reported and nothing changes.
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(minutes=self._timeout_minutes)

        logger.info(
            "Looking for expired reservations",
            cutoff=cutoff.isoformat(),
            timeout_minutes=self._timeout_minutes,
            dry_run=dry_run,
        )

        with self._uow as uow:
            stale = uow.cart_items.list_reserved_before(cutoff)
            candidates = [
                ExpiredReservationDTO(
                    item_id=item.id,  # type: ignore[arg-type]
                    user_id=item.user_id,
                    product_id=item.product_id,
                    unit=item.unit,
                    quantity=item.quantity,
                    warehouse_id=item.reservation.warehouse_id,
                    reserved_minutes_ago=int((now - item.reservation.reserved_at).total_seconds() // 60),
                )
                for item in stale
            ]

        report_args = dict(
            cutoff=cutoff.isoformat(),
            timeout_minutes=self._timeout_minutes,
            dry_run=dry_run,
            candidates=candidates,
        )
        if dry_run or not candidates:
            return SweepReport(**report_args)

        processed = 0
        released_quantity = 0
        for candidate in candidates:
            with self._uow as uow:
                released = reservation_lifecycle(uow).expire(candidate.item_id, cutoff)
            if released:
                processed += 1
                released_quantity += released

        logger.info(
            "Expired reservations cleanup completed",
            processed_items=processed,
            total_released_quantity=released_quantity,
            expiration_minutes=self._timeout_minutes,
        )
        return SweepReport(processed=processed, released_quantity=released_quantity, **report_args)
