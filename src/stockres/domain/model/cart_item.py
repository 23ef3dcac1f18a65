"""CartItem aggregate: one cart line and the reservation behind it.

A cart line is unique per (user, product, unit).  When its state is
RESERVED it carries a Reservation naming the warehouse whose StockRecord
holds ``quantity`` units for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from stockres.domain.exceptions import ValidationError
from stockres.domain.model.reservation import Reservation, ReservationState
from stockres.domain.model.value_objects import Quantity, StockKey


@dataclass
class CartItem:
    """Aggregate root for a cart line.

    Invariants:
    - a RESERVED line always carries a Reservation
    - a NONE line never carries one
    """

    id: int | None
    user_id: int
    product_id: str
    unit: str
    quantity: int = 0
    state: ReservationState = ReservationState.NONE
    reservation: Reservation | None = None

    def __post_init__(self) -> None:
        if self.state == ReservationState.RESERVED and self.reservation is None:
            raise ValidationError("A reserved cart line must reference a warehouse")
        if self.state == ReservationState.NONE and self.reservation is not None:
            raise ValidationError("An unreserved cart line cannot reference a warehouse")

    # --- Factory (used for NEW lines only) ------------------------------------

    @staticmethod
    def create(user_id: int, product_id: str, unit: str) -> CartItem:
        """Start an empty, unreserved line; ``reserve()`` gives it a quantity."""
        if not product_id:
            raise ValidationError("Product ID is required")
        if not unit or not unit.strip():
            raise ValidationError("Unit is required")
        return CartItem(id=None, user_id=user_id, product_id=product_id, unit=unit.strip())

    # --- State transitions ----------------------------------------------------

    def reserve(self, warehouse_id: int, quantity: Quantity, at: datetime) -> None:
        """Transition NONE|RESERVED -> RESERVED for the new total quantity."""
        if self.state not in (ReservationState.NONE, ReservationState.RESERVED):
            raise ValidationError(
                f"Cannot reserve cart line — current state is {self.state.value}"
            )
        self.quantity = quantity.value
        self.reservation = Reservation(warehouse_id=warehouse_id, reserved_at=at)
        self.state = ReservationState.RESERVED

    def decrease(self, quantity: Quantity) -> int:
        """Take *quantity* units off the line.

        Returns the number of units actually removed, capped at the
        current line quantity.
        """
        removed = min(quantity.value, self.quantity)
        self.quantity -= removed
        return removed

    def release(self) -> None:
        """Transition RESERVED -> RELEASED.  Unreserved lines stay NONE."""
        if self.state == ReservationState.RESERVED:
            self.state = ReservationState.RELEASED

    # --- Computed properties --------------------------------------------------

    @property
    def is_reserved(self) -> bool:
        return self.state == ReservationState.RESERVED

    @property
    def stock_key(self) -> StockKey | None:
        if self.reservation is None:
            return None
        return StockKey(self.product_id, self.reservation.warehouse_id, self.unit)
