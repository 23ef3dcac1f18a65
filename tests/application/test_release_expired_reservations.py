"""Integration tests for the expired-reservation sweep."""

from datetime import datetime, timedelta, timezone

import pytest

from stockres.application.add_to_cart import AddToCartHandler
from stockres.application.release_expired_reservations import ReleaseExpiredReservationsHandler
from stockres.application.unit_of_work import reservation_lifecycle
from stockres.domain.exceptions import ValidationError
from stockres.domain.model.value_objects import StockKey
from tests.fakes import FakeStockRepository, FakeUnitOfWork, FakeWarehouseRepository, stock, warehouse

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
KEY = StockKey("P1", 1, "PCS")


def _setup() -> FakeUnitOfWork:
    uow = FakeUnitOfWork(
        stock=FakeStockRepository([stock("P1", 1, "PCS", 100)]),
        warehouses=FakeWarehouseRepository([warehouse(1, "W1", priority=1)]),
    )
    add = AddToCartHandler(uow)
    add.handle(user_id=1, product_id="P1", unit="PCS", quantity=5, now=T0)
    add.handle(user_id=2, product_id="P1", unit="PCS", quantity=3, now=T0 + timedelta(hours=20))
    return uow


class TestSweep:

    def test_releases_only_stale_lines(self):
        uow = _setup()
        handler = ReleaseExpiredReservationsHandler(uow, timeout_minutes=1440)

        report = handler.handle(now=T0 + timedelta(hours=25))

        assert [c.user_id for c in report.candidates] == [1]
        assert report.candidates[0].reserved_minutes_ago == 25 * 60
        assert report.processed == 1
        assert report.released_quantity == 5
        assert uow.stock.get(KEY).reserved_stock == 3
        assert uow.cart_items.get_line(1, "P1", "PCS") is None
        assert uow.cart_items.get_line(2, "P1", "PCS") is not None

    def test_each_line_in_its_own_transaction(self):
        uow = _setup()
        before = uow.commits
        report = ReleaseExpiredReservationsHandler(uow, timeout_minutes=60).handle(now=T0 + timedelta(days=2))

        assert report.processed == 2
        # one listing transaction plus one per line
        assert uow.commits - before == 3
        assert uow.stock.get(KEY).reserved_stock == 0

    def test_dry_run_changes_nothing(self):
        uow = _setup()

        report = ReleaseExpiredReservationsHandler(uow).handle(now=T0 + timedelta(days=2), dry_run=True)

        assert report.dry_run
        assert len(report.candidates) == 2
        assert report.processed == 0
        assert uow.stock.get(KEY).reserved_stock == 8
        assert len(uow.cart_items) == 2

    def test_nothing_to_do(self):
        uow = _setup()
        report = ReleaseExpiredReservationsHandler(uow).handle(now=T0 + timedelta(hours=1))
        assert report.candidates == []
        assert report.processed == 0

    @pytest.mark.parametrize("timeout", [0, 10081])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError, match="between 1 and 10080"):
            ReleaseExpiredReservationsHandler(FakeUnitOfWork(), timeout_minutes=timeout)


class TestExpireLine:

    def test_line_refreshed_since_listing_is_kept(self):
        uow = _setup()
        line = uow.cart_items.get_line(1, "P1", "PCS")
        # Re-added after the sweep listed it: reservation timestamp moves forward
        AddToCartHandler(uow).handle(user_id=1, product_id="P1", unit="PCS", quantity=1, now=T0 + timedelta(hours=24))

        with uow:
            released = reservation_lifecycle(uow).expire(line.id, cutoff=T0 + timedelta(hours=1))

        assert released == 0
        assert uow.cart_items.get_line(1, "P1", "PCS").quantity == 6

    def test_deleted_line_is_skipped(self):
        uow = _setup()
        with uow:
            assert reservation_lifecycle(uow).expire(999, cutoff=T0 + timedelta(days=5)) == 0
