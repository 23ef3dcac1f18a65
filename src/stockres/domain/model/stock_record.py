"""StockRecord aggregate: physical and reserved stock of one pool.

There is one StockRecord per (product, warehouse, unit).  It knows the total
physical quantity and how much of it is held by in-progress carts and
orders.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockres.domain.exceptions import ValidationError
from stockres.domain.model.value_objects import StockKey


@dataclass
class StockRecord:
    """Aggregate root for a stock pool.

    Invariants:
    - ``reserved_stock`` is never negative
    - ``stock`` is never negative

    ``available_stock`` may be negative: an external stock sync can shrink
    ``stock`` below what is already reserved.  Such a record refuses every
    new reservation until reservations drain; it is not auto-corrected.
    """

    product_id: str
    warehouse_id: int
    unit: str
    stock: int = 0
    reserved_stock: int = 0
    min_stock: int | None = None
    id: int | None = None

    @property
    def key(self) -> StockKey:
        return StockKey(self.product_id, self.warehouse_id, self.unit)

    @property
    def available_stock(self) -> int:
        return self.stock - self.reserved_stock

    @property
    def is_below_min_stock(self) -> bool:
        return self.min_stock is not None and self.stock < self.min_stock

    def reserve(self, quantity: int) -> bool:
        """Hold *quantity* units if they are available right now.

        Returns False and leaves the record untouched otherwise.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if self.available_stock < quantity:
            return False
        self.reserved_stock += quantity
        return True

    def release(self, quantity: int) -> None:
        """Drop a hold.  Over-release clamps ``reserved_stock`` at zero."""
        if quantity < 0:
            raise ValidationError("Release quantity cannot be negative")
        self.reserved_stock = max(0, self.reserved_stock - quantity)

    def reduce(self, quantity: int) -> bool:
        """Realise a reservation as a sale.

        Both ``stock`` and ``reserved_stock`` decrease by *quantity*
        (reserved floored at zero).  Returns False and changes nothing when
        physical stock is insufficient.
        """
        if quantity <= 0:
            raise ValidationError("Reduce quantity must be positive")
        if self.stock < quantity:
            return False
        self.stock -= quantity
        self.reserved_stock = max(0, self.reserved_stock - quantity)
        return True

    def overwrite_stock(self, stock: int) -> None:
        """Replace the physical count with an externally reported one.

        ``reserved_stock`` is left as is.
        """
        if stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {stock}")
        self.stock = stock
