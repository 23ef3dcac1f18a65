"""Unit of Work: the transaction boundary of every use case.

Usage::

    with uow:
        record = uow.stock.get(key, for_update=True)
        ...

- no exception  -> commit
- any exception -> rollback, then re-raise

One UnitOfWork object may open several transactions in turn (one per
``with`` block); the expiry sweep relies on that to release each stale
line in its own transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockres.application.events import EventDispatcher
from stockres.domain.events import DomainEvent
from stockres.domain.repository.cart_item_repository import CartItemRepository
from stockres.domain.repository.order_repository import OrderRepository
from stockres.domain.repository.stock_repository import StockRepository
from stockres.domain.repository.warehouse_repository import WarehouseRepository
from stockres.domain.service.reservation_allocator import ReservationAllocator
from stockres.domain.service.reservation_lifecycle import ReservationLifecycle
from stockres.domain.service.stock_ledger import StockLedger
from stockres.domain.service.warehouse_directory import WarehouseDirectory


class UnitOfWork(ABC):

    stock: StockRepository
    warehouses: WarehouseRepository
    cart_items: CartItemRepository
    orders: OrderRepository

    def __init__(self, dispatcher: EventDispatcher | None = None) -> None:
        self.dispatcher = dispatcher if dispatcher is not None else EventDispatcher()

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._close()
        # False -> exception keeps propagating
        return False

    def publish(self, event: DomainEvent) -> None:
        """Dispatch *event* now, inside the current transaction."""
        self.dispatcher.dispatch(event, self)

    @abstractmethod
    def _begin(self) -> None:
        """Open a transaction and bind the repositories to it."""

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

    def _close(self) -> None:
        pass


# ---------------------------------------------------------------------------
# Domain services bound to an open unit of work
# ---------------------------------------------------------------------------


def warehouse_directory(uow: UnitOfWork) -> WarehouseDirectory:
    return WarehouseDirectory(uow.warehouses)


def reservation_lifecycle(uow: UnitOfWork) -> ReservationLifecycle:
    ledger = StockLedger(uow.stock)
    allocator = ReservationAllocator(warehouse_directory(uow), uow.stock, ledger)
    return ReservationLifecycle(uow.cart_items, allocator, ledger, publish=uow.publish)
