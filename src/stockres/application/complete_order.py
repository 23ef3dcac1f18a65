"""Application service: Complete Order use case.

Marks the order COMPLETED and publishes OrderCompleted; the lifecycle
listener consumes the reservations in the same transaction.  A stock
shortfall raises LedgerReduceShortfall and rolls everything back, so the
order stays PENDING until someone reconciles it by hand.
"""

from __future__ import annotations

from stockres.application.dto import OrderDTO
from stockres.application.mapping import order_to_dto
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.events import OrderCompleted
from stockres.domain.exceptions import EntityNotFoundError


class CompleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            order.complete()
            uow.orders.save(order)
            uow.publish(OrderCompleted(order_id=order_id))

            return order_to_dto(uow.orders.get_by_id(order_id))
