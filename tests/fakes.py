"""In-memory fake repositories and unit of work for testing.

These implement the same abstract interfaces as the SQLAlchemy
repositories but keep everything in dicts.  Like a real store they hand
out copies, so a change only sticks once it is saved, and the fake unit of
work restores its snapshot on rollback.
"""

from __future__ import annotations

import copy
from datetime import datetime

from stockres.application.events import EventDispatcher
from stockres.application.listeners import register_listeners
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.model.cart_item import CartItem
from stockres.domain.model.order import Order
from stockres.domain.model.stock_record import StockRecord
from stockres.domain.model.value_objects import StockKey
from stockres.domain.model.warehouse import Warehouse
from stockres.domain.repository.cart_item_repository import CartItemRepository
from stockres.domain.repository.order_repository import OrderRepository
from stockres.domain.repository.stock_repository import StockRepository
from stockres.domain.repository.warehouse_repository import WarehouseRepository


class FakeStockRepository(StockRepository):

    def __init__(self, records: list[StockRecord] | None = None) -> None:
        self._store: dict[StockKey, StockRecord] = {}
        self._next_id = 1
        self.locked: list[StockKey] = []
        for record in records or []:
            self.save(record)

    def get(self, key: StockKey, *, for_update: bool = False) -> StockRecord | None:
        if for_update:
            self.locked.append(key)
        record = self._store.get(key)
        return copy.deepcopy(record) if record is not None else None

    def find(
        self,
        *,
        product_id: str | None = None,
        unit: str | None = None,
        warehouse_id: int | None = None,
        with_stock_only: bool = False,
        available_only: bool = False,
    ) -> list[StockRecord]:
        found = [
            r for r in self._store.values()
            if (product_id is None or r.product_id == product_id)
            and (unit is None or r.unit == unit)
            and (warehouse_id is None or r.warehouse_id == warehouse_id)
            and (not with_stock_only or r.stock > 0)
            and (not available_only or r.stock > r.reserved_stock)
        ]
        found.sort(key=lambda r: (r.product_id, r.unit, r.warehouse_id))
        return [copy.deepcopy(r) for r in found]

    def total_available(self, product_id: str, unit: str) -> int:
        return sum(
            r.available_stock for r in self._store.values()
            if r.product_id == product_id and r.unit == unit
        )

    def summarize_by_warehouse(self) -> dict[int, tuple[int, int, int]]:
        summary: dict[int, tuple[int, int, int]] = {}
        for r in self._store.values():
            count, stock, reserved = summary.get(r.warehouse_id, (0, 0, 0))
            summary[r.warehouse_id] = (count + 1, stock + r.stock, reserved + r.reserved_stock)
        return summary

    def reset_all_stock(self) -> int:
        for r in self._store.values():
            r.stock = 0
        return len(self._store)

    def save(self, record: StockRecord) -> None:
        if record.id is None:
            record.id = self._next_id
            self._next_id += 1
        self._store[record.key] = copy.deepcopy(record)


class FakeWarehouseRepository(WarehouseRepository):

    def __init__(self, warehouses: list[Warehouse] | None = None) -> None:
        self._store: dict[int, Warehouse] = {}
        self._next_id = 1
        for w in warehouses or []:
            self.save(w)

    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        w = self._store.get(warehouse_id)
        return copy.deepcopy(w) if w is not None else None

    def get_by_code(self, code: str) -> Warehouse | None:
        for w in self._store.values():
            if w.code == code:
                return copy.deepcopy(w)
        return None

    def list_active_by_priority(self) -> list[Warehouse]:
        return [w for w in self.list_all() if w.is_active]

    def list_all(self) -> list[Warehouse]:
        ordered = sorted(self._store.values(), key=lambda w: (w.priority, w.id))
        return [copy.deepcopy(w) for w in ordered]

    def set_priority_except(self, warehouse_id: int, priority: int) -> int:
        changed = 0
        for w in self._store.values():
            if w.id != warehouse_id and w.priority != priority:
                w.priority = priority
                changed += 1
        return changed

    def save(self, warehouse: Warehouse) -> None:
        if warehouse.id is None:
            warehouse.id = self._next_id
        self._next_id = max(self._next_id, warehouse.id + 1)
        self._store[warehouse.id] = copy.deepcopy(warehouse)


class FakeCartItemRepository(CartItemRepository):

    def __init__(self) -> None:
        self._store: dict[int, CartItem] = {}
        self._next_id = 1

    def get_by_id(self, item_id: int, *, for_update: bool = False) -> CartItem | None:
        item = self._store.get(item_id)
        return copy.deepcopy(item) if item is not None else None

    def get_line(self, user_id: int, product_id: str, unit: str) -> CartItem | None:
        for item in self._store.values():
            if (item.user_id, item.product_id, item.unit) == (user_id, product_id, unit.strip()):
                return copy.deepcopy(item)
        return None

    def list_for_user(self, user_id: int) -> list[CartItem]:
        return [copy.deepcopy(i) for i in self._store.values() if i.user_id == user_id]

    def list_reserved_before(self, cutoff: datetime) -> list[CartItem]:
        stale = [
            i for i in self._store.values()
            if i.is_reserved and i.reservation.reserved_at < cutoff
        ]
        stale.sort(key=lambda i: (i.reservation.reserved_at, i.id))
        return [copy.deepcopy(i) for i in stale]

    def save(self, item: CartItem) -> None:
        if item.id is None:
            item.id = self._next_id
            self._next_id += 1
        self._store[item.id] = copy.deepcopy(item)

    def delete(self, item: CartItem) -> None:
        self._store.pop(item.id, None)

    def __len__(self) -> int:
        return len(self._store)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = copy.deepcopy(order)


class FakeUnitOfWork(UnitOfWork):
    """Unit of work over the fakes above.

    Entering takes a snapshot of every repository; rollback puts it back.
    Listeners are registered unless a dispatcher is passed in.
    """

    def __init__(
        self,
        stock: FakeStockRepository | None = None,
        warehouses: FakeWarehouseRepository | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        super().__init__(dispatcher if dispatcher is not None else register_listeners(EventDispatcher()))
        self.stock = stock or FakeStockRepository()
        self.warehouses = warehouses or FakeWarehouseRepository()
        self.cart_items = FakeCartItemRepository()
        self.orders = FakeOrderRepository()
        self.commits = 0
        self.rollbacks = 0
        self._snapshot: list[dict] | None = None

    def _repositories(self) -> list:
        return [self.stock, self.warehouses, self.cart_items, self.orders]

    def _begin(self) -> None:
        self._snapshot = [copy.deepcopy(repo.__dict__) for repo in self._repositories()]

    def commit(self) -> None:
        self.commits += 1
        self._snapshot = None

    def rollback(self) -> None:
        self.rollbacks += 1
        for repo, state in zip(self._repositories(), self._snapshot or []):
            repo.__dict__.clear()
            repo.__dict__.update(state)
        self._snapshot = None


def warehouse(warehouse_id: int, code: str, priority: int = 999, is_active: bool = True) -> Warehouse:
    return Warehouse(id=warehouse_id, code=code, name=f"Warehouse {code}", priority=priority, is_active=is_active)


def stock(product_id: str, warehouse_id: int, unit: str, stock: int, reserved: int = 0) -> StockRecord:
    return StockRecord(
        product_id=product_id,
        warehouse_id=warehouse_id,
        unit=unit,
        stock=stock,
        reserved_stock=reserved,
    )
