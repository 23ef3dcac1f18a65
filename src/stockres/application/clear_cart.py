"""Application service: Clear Cart use case."""

from __future__ import annotations

from stockres.application.unit_of_work import UnitOfWork, reservation_lifecycle


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> int:
        """Release every line's reservation and empty the cart.

        Returns the number of lines removed.
        """
        with self._uow as uow:
            items = reservation_lifecycle(uow).clear_cart(user_id)
            return len(items)
