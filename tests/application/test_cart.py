"""Integration tests for the cart use cases (add, remove, clear, show)."""

from datetime import datetime, timezone

import pytest

from stockres.application.add_to_cart import AddToCartHandler
from stockres.application.clear_cart import ClearCartHandler
from stockres.application.events import EventDispatcher
from stockres.application.listeners import register_listeners
from stockres.application.remove_from_cart import RemoveFromCartHandler
from stockres.application.show_cart import ShowCartHandler
from stockres.domain.events import CartItemRemoved
from stockres.domain.exceptions import EntityNotFoundError, InsufficientStockError, ValidationError
from stockres.domain.model.reservation import ReservationState
from stockres.domain.model.value_objects import StockKey
from tests.fakes import FakeStockRepository, FakeUnitOfWork, FakeWarehouseRepository, stock, warehouse

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
W1_KG = StockKey("P1", 1, "kg")
W2_KG = StockKey("P1", 2, "kg")


def _setup(records=None, dispatcher=None) -> FakeUnitOfWork:
    return FakeUnitOfWork(
        stock=FakeStockRepository(records if records is not None else [stock("P1", 1, "kg", 10)]),
        warehouses=FakeWarehouseRepository([warehouse(1, "W1", priority=1), warehouse(2, "W2", priority=2)]),
        dispatcher=dispatcher,
    )


def _reserved(uow: FakeUnitOfWork, key: StockKey) -> int:
    return uow.stock.get(key).reserved_stock


class TestAddToCart:

    def test_add_then_add_more_to_same_line(self):
        uow = _setup()
        handler = AddToCartHandler(uow)

        dto = handler.handle(user_id=7, product_id="P1", unit="kg", quantity=3, now=NOW)
        assert dto.warehouse_id == 1
        assert dto.state == "RESERVED"
        assert _reserved(uow, W1_KG) == 3

        dto = handler.handle(user_id=7, product_id="P1", unit="kg", quantity=2, now=NOW)
        assert dto.quantity == 5
        assert _reserved(uow, W1_KG) == 5
        assert len(uow.cart_items) == 1

    def test_reserved_at_reported_in_utc(self):
        uow = _setup()
        dto = AddToCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=1, now=NOW)
        assert dto.reserved_at == "2024-05-01 12:00:00 UTC"

    def test_growing_line_moves_to_warehouse_that_fits(self):
        uow = _setup([stock("P1", 1, "kg", 10), stock("P1", 2, "kg", 50)])
        handler = AddToCartHandler(uow)
        handler.handle(user_id=7, product_id="P1", unit="kg", quantity=8, now=NOW)

        dto = handler.handle(user_id=7, product_id="P1", unit="kg", quantity=4, now=NOW)

        assert dto.warehouse_id == 2
        assert _reserved(uow, W1_KG) == 0
        assert _reserved(uow, W2_KG) == 12

    def test_insufficient_stock_reports_total_available(self):
        uow = _setup([stock("P1", 1, "kg", 10, reserved=7), stock("P1", 2, "kg", 4)])

        with pytest.raises(InsufficientStockError, match="need 5, have 7 available") as exc_info:
            AddToCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=5, now=NOW)

        assert exc_info.value.available == 7
        assert len(uow.cart_items) == 0

    def test_failed_growth_keeps_previous_reservation(self):
        uow = _setup()
        handler = AddToCartHandler(uow)
        handler.handle(user_id=7, product_id="P1", unit="kg", quantity=6, now=NOW)

        with pytest.raises(InsufficientStockError):
            handler.handle(user_id=7, product_id="P1", unit="kg", quantity=5, now=NOW)

        assert uow.rollbacks == 1
        assert _reserved(uow, W1_KG) == 6
        line = uow.cart_items.get_line(7, "P1", "kg")
        assert line.quantity == 6
        assert line.reservation.warehouse_id == 1

    def test_unstocked_unit_rejected(self):
        uow = _setup()
        with pytest.raises(InsufficientStockError):
            AddToCartHandler(uow).handle(user_id=7, product_id="P1", unit="box", quantity=1, now=NOW)

    def test_non_positive_quantity_rejected(self):
        uow = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            AddToCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=0, now=NOW)


class TestRemoveFromCart:

    def _cart_with_eight(self, dispatcher=None) -> FakeUnitOfWork:
        uow = _setup([stock("P1", 1, "kg", 20)], dispatcher=dispatcher)
        AddToCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=8, now=NOW)
        return uow

    def test_partial_removal_releases_exactly_removed(self):
        uow = self._cart_with_eight()

        dto = RemoveFromCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=3)

        assert dto.action == "updated"
        assert dto.released == 3
        assert dto.remaining_quantity == 5
        assert _reserved(uow, W1_KG) == 5
        assert uow.cart_items.get_line(7, "P1", "kg").quantity == 5

    def test_full_removal_deletes_line_after_event(self):
        seen = []

        def spy(event, uow):
            seen.append((event.reason, uow.cart_items.get_by_id(event.item.id) is not None))

        dispatcher = register_listeners(EventDispatcher())
        dispatcher.subscribe(CartItemRemoved, spy)
        uow = self._cart_with_eight(dispatcher)
        handler = RemoveFromCartHandler(uow)
        handler.handle(user_id=7, product_id="P1", unit="kg", quantity=3)

        dto = handler.handle(user_id=7, product_id="P1", unit="kg", quantity=5)

        assert dto.action == "deleted"
        assert _reserved(uow, W1_KG) == 0
        assert uow.cart_items.get_line(7, "P1", "kg") is None
        # The event saw the line still in the store
        assert seen == [("removed", True)]

    def test_removing_more_than_line_deletes_it(self):
        uow = self._cart_with_eight()
        dto = RemoveFromCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=50)
        assert dto.action == "deleted"
        assert dto.released == 8
        assert _reserved(uow, W1_KG) == 0

    def test_missing_line_rejected(self):
        uow = _setup()
        with pytest.raises(EntityNotFoundError, match="not in the cart"):
            RemoveFromCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=1)


class TestClearAndShowCart:

    def test_clear_releases_every_line(self):
        uow = _setup([stock("P1", 1, "kg", 10), stock("P1", 1, "box", 10)])
        add = AddToCartHandler(uow)
        add.handle(user_id=7, product_id="P1", unit="kg", quantity=2, now=NOW)
        add.handle(user_id=7, product_id="P1", unit="box", quantity=3, now=NOW)
        add.handle(user_id=8, product_id="P1", unit="kg", quantity=1, now=NOW)

        assert ClearCartHandler(uow).handle(user_id=7) == 2

        assert _reserved(uow, W1_KG) == 1
        assert _reserved(uow, StockKey("P1", 1, "box")) == 0
        assert ShowCartHandler(uow).handle(user_id=7) == []
        assert len(ShowCartHandler(uow).handle(user_id=8)) == 1

    def test_show_cart(self):
        uow = _setup()
        AddToCartHandler(uow).handle(user_id=7, product_id="P1", unit="kg", quantity=2, now=NOW)

        [line] = ShowCartHandler(uow).handle(user_id=7)

        assert line.product_id == "P1"
        assert line.quantity == 2
        assert line.state == ReservationState.RESERVED.value
        assert line.warehouse_id == 1
