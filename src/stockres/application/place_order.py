"""Application service: Place Order use case (checkout).

Moves the user's reserved cart lines into a PENDING order.  Each order item
inherits the warehouse of its line's reservation, so the hold is
*transferred*, not released: no ledger call and no CartItemRemoved event.
Lines without a reservation stay in the cart.
"""

from __future__ import annotations

import structlog

from stockres.application.dto import OrderDTO
from stockres.application.mapping import order_to_dto
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.exceptions import ValidationError
from stockres.domain.model.order import Order, OrderItem

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> OrderDTO:
        with self._uow as uow:
            lines = uow.cart_items.list_for_user(user_id)
            reserved = [line for line in lines if line.is_reserved]
            if not reserved:
                raise ValidationError(f"Cart of user #{user_id} has no reserved items")

            skipped = len(lines) - len(reserved)
            if skipped:
                logger.warning("Unreserved cart lines left out of order", user_id=user_id, lines=skipped)

            order = Order.create(
                user_id=user_id,
                items=[
                    OrderItem(
                        product_id=line.product_id,
                        unit=line.unit,
                        quantity=line.quantity,
                        warehouse_id=line.reservation.warehouse_id,
                    )
                    for line in reserved
                ],
            )
            uow.orders.save(order)

            for line in reserved:
                uow.cart_items.delete(line)

            logger.info("Order placed", order_id=order.id, user_id=user_id, items=len(order.items))
            return order_to_dto(order)
