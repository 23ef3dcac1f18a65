"""Domain service: Reservation Lifecycle.

Ties reservations to cart lines and order items and drives them through
none -> reserved -> {released, consumed}.  Every path that deletes a cart
line publishes CartItemRemoved first, while the line is still in the store.

All methods expect to run inside one unit of work.  Failures that must
undo earlier steps (insufficient stock after a release, a reduce
shortfall) are raised so the unit of work rolls back.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

import structlog

from stockres.domain.events import CartItemRemoved, DomainEvent
from stockres.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    LedgerReduceShortfall,
)
from stockres.domain.model.cart_item import CartItem
from stockres.domain.model.order import Order
from stockres.domain.model.value_objects import Quantity
from stockres.domain.repository.cart_item_repository import CartItemRepository
from stockres.domain.service.reservation_allocator import ReservationAllocator
from stockres.domain.service.stock_ledger import ReduceOutcome, StockLedger

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Removal:
    item: CartItem
    removed: int
    deleted: bool


class ReservationLifecycle:

    def __init__(
        self,
        cart_repo: CartItemRepository,
        allocator: ReservationAllocator,
        ledger: StockLedger,
        publish: Callable[[DomainEvent], None],
    ) -> None:
        self._cart_repo = cart_repo
        self._allocator = allocator
        self._ledger = ledger
        self._publish = publish

    # --- Cart lines -----------------------------------------------------------

    def add_to_cart(
        self,
        user_id: int,
        product_id: str,
        unit: str,
        quantity: Quantity,
        now: datetime,
    ) -> CartItem:
        """Reserve stock for an addition and record it on the cart line.

        The line's previous hold (if any) is released in full and the new
        total is allocated from scratch, possibly in another warehouse.
        """
        item = self._cart_repo.get_line(user_id, product_id, unit)
        if item is None:
            item = CartItem.create(user_id, product_id, unit)

        total = Quantity(item.quantity + quantity.value)

        if item.is_reserved:
            result = self._allocator.reallocate(
                item.stock_key, item.quantity, product_id, item.unit, total.value
            )
        else:
            result = self._allocator.allocate(product_id, item.unit, total.value)

        if not result.success:
            raise InsufficientStockError(product_id, item.unit, total.value, result.total_available)

        item.reserve(result.warehouse.id, total, now)
        self._cart_repo.save(item)
        return item

    def remove_from_cart(
        self,
        user_id: int,
        product_id: str,
        unit: str,
        quantity: Quantity,
    ) -> Removal:
        """Release exactly the removed quantity; delete the line if emptied."""
        item = self._cart_repo.get_line(user_id, product_id, unit)
        if item is None:
            raise EntityNotFoundError(
                f"Product '{product_id}' ({unit}) is not in the cart of user #{user_id}"
            )

        if quantity.value >= item.quantity:
            removed = item.quantity
            self._release_line(item)
            self._discard(item, reason="removed")
            return Removal(item=item, removed=removed, deleted=True)

        removed = item.decrease(quantity)
        if item.is_reserved:
            self._ledger.release(item.stock_key, removed)
        self._cart_repo.save(item)
        return Removal(item=item, removed=removed, deleted=False)

    def clear_cart(self, user_id: int) -> list[CartItem]:
        items = self._cart_repo.list_for_user(user_id)
        for item in items:
            self._release_line(item)
            self._discard(item, reason="cleared")
        return items

    def expire(self, item_id: int, cutoff: datetime) -> int:
        """Release one stale line.  Returns the quantity released.

        The line is re-read under lock; if it was deleted or re-reserved
        since the sweep listed it, nothing happens.
        """
        item = self._cart_repo.get_by_id(item_id, for_update=True)
        if item is None or not item.is_reserved or not item.reservation.is_older_than(cutoff):
            return 0
        released = item.quantity
        self._release_line(item)
        self._discard(item, reason="expired")
        logger.info(
            "Released expired reservation",
            user_id=item.user_id,
            product_id=item.product_id,
            unit=item.unit,
            warehouse_id=item.reservation.warehouse_id,
            quantity=released,
            reserved_at=item.reservation.reserved_at.isoformat(),
        )
        return released

    # --- Order outcomes -------------------------------------------------------

    def release_order(self, order: Order) -> int:
        """Order failed: drop every item's hold.  Returns units released."""
        released = 0
        for item in order.items:
            if not item.is_reserved:
                continue
            if self._ledger.release(item.stock_key, item.quantity):
                released += item.quantity
            item.release()
        logger.info("Released stock for failed order", order_id=order.id, quantity=released)
        return released

    def consume_order(self, order: Order) -> int:
        """Order completed: turn every item's hold into a deduction.

        Raises LedgerReduceShortfall if any line lacks physical stock; the
        caller's transaction then rolls back every line of the order.
        """
        consumed = 0
        shortfalls: list[tuple[str, str, int, int]] = []
        for item in order.items:
            if not item.is_reserved:
                continue
            outcome = self._ledger.reduce(item.stock_key, item.quantity)
            if outcome == ReduceOutcome.SHORTFALL:
                shortfalls.append((item.product_id, item.unit, item.warehouse_id, item.quantity))
                continue
            if outcome == ReduceOutcome.REDUCED:
                consumed += item.quantity
            item.consume()

        if shortfalls:
            logger.error("Stock shortfall on order completion", order_id=order.id, lines=shortfalls)
            raise LedgerReduceShortfall(order.id, shortfalls)

        logger.info("Reduced stock for completed order", order_id=order.id, quantity=consumed)
        return consumed

    # --- Internal helpers -----------------------------------------------------

    def _release_line(self, item: CartItem) -> None:
        if item.is_reserved:
            self._ledger.release(item.stock_key, item.quantity)
        item.release()

    def _discard(self, item: CartItem, reason: str) -> None:
        self._publish(CartItemRemoved(item=item, reason=reason))
        self._cart_repo.delete(item)
