"""Application service: Fail Order use case.

Marks the order FAILED and publishes OrderFailed; the lifecycle listener
releases every item's reservation in the same transaction.
"""

from __future__ import annotations

from stockres.application.dto import OrderDTO
from stockres.application.mapping import order_to_dto
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.events import OrderFailed
from stockres.domain.exceptions import EntityNotFoundError


class FailOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            order.fail()
            uow.orders.save(order)
            uow.publish(OrderFailed(order_id=order_id))

            return order_to_dto(uow.orders.get_by_id(order_id))
