"""Order aggregate — what a checkout turns a cart into.

Only the stock-affecting part of an order lives here: each item carries the
warehouse its reservation was taken from, copied from the cart line at
checkout.  Payment and everything else is handled outside this system; it
reports back through the "completed" and "failed" outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from stockres.domain.exceptions import ValidationError
from stockres.domain.model.reservation import ReservationState
from stockres.domain.model.value_objects import StockKey


class OrderStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass
class OrderItem:
    product_id: str
    unit: str
    quantity: int
    warehouse_id: int | None
    state: ReservationState = ReservationState.RESERVED
    id: int | None = None

    def __post_init__(self) -> None:
        if self.warehouse_id is None and self.state == ReservationState.RESERVED:
            self.state = ReservationState.NONE

    @property
    def stock_key(self) -> StockKey | None:
        if self.warehouse_id is None:
            return None
        return StockKey(self.product_id, self.warehouse_id, self.unit)

    @property
    def is_reserved(self) -> bool:
        return self.state == ReservationState.RESERVED

    def consume(self) -> None:
        self.state = ReservationState.CONSUMED

    def release(self) -> None:
        self.state = ReservationState.RELEASED


@dataclass
class Order:
    """Aggregate root for orders placed from a cart.

    Use ``Order.create()`` for new orders; ``__init__`` stays simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: int
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user_id: int, items: list[OrderItem]) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")
        for item in items:
            if item.quantity <= 0:
                raise ValidationError("Order item quantity must be positive")
        return Order(id=None, user_id=user_id, items=list(items))

    # --- State transitions ----------------------------------------------------

    def complete(self) -> None:
        """Transition PENDING -> COMPLETED.

        Stock consumption is done by the lifecycle listener reacting to the
        OrderCompleted event, in the same transaction.
        """
        self._ensure_pending("complete")
        self.status = OrderStatus.COMPLETED

    def fail(self) -> None:
        """Transition PENDING -> FAILED."""
        self._ensure_pending("fail")
        self.status = OrderStatus.FAILED

    # --- Internal helpers -----------------------------------------------------

    def _ensure_pending(self, action: str) -> None:
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot {action} order — current status is {self.status.value}, "
                f"expected PENDING"
            )
