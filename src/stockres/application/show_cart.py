"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from stockres.application.dto import CartItemDTO
from stockres.application.mapping import cart_item_to_dto
from stockres.application.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> list[CartItemDTO]:
        with self._uow as uow:
            return [cart_item_to_dto(item) for item in uow.cart_items.list_for_user(user_id)]
