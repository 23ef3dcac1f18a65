"""Application service: Remove From Cart use case.

Releases exactly the removed quantity.  The line is deleted, with a
CartItemRemoved event published first, once nothing is left on it.
"""

from __future__ import annotations

from stockres.application.dto import CartRemovalDTO
from stockres.application.unit_of_work import UnitOfWork, reservation_lifecycle
from stockres.domain.model.value_objects import Quantity


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, product_id: str, unit: str, quantity: int) -> CartRemovalDTO:
        qty = Quantity(quantity)

        with self._uow as uow:
            removal = reservation_lifecycle(uow).remove_from_cart(user_id, product_id, unit, qty)

        return CartRemovalDTO(
            product_id=product_id,
            unit=unit,
            action="deleted" if removal.deleted else "updated",
            released=removal.removed,
            remaining_quantity=0 if removal.deleted else removal.item.quantity,
        )
