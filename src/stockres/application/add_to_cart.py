"""Application service: Add To Cart use case.

Runs release-previous -> allocate-new -> persist-line as one unit of work:
if the new total cannot be allocated, InsufficientStockError propagates and
the rollback restores the line's previous reservation untouched.
"""

from __future__ import annotations

from datetime import datetime, timezone

from stockres.application.dto import CartItemDTO
from stockres.application.mapping import cart_item_to_dto
from stockres.application.unit_of_work import UnitOfWork, reservation_lifecycle
from stockres.domain.model.value_objects import Quantity


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: int,
        product_id: str,
        unit: str,
        quantity: int,
        now: datetime | None = None,
    ) -> CartItemDTO:
        """Add *quantity* units to the user's line and reserve the new total.

        Raises InsufficientStockError (with the total available stock) if no
        single warehouse can hold the whole line.
        """
        qty = Quantity(quantity)
        now = now or datetime.now(timezone.utc)

        with self._uow as uow:
            item = reservation_lifecycle(uow).add_to_cart(user_id, product_id, unit, qty, now)
            return cart_item_to_dto(item)
