"""Event listeners wired to the dispatcher at composition time.

Order outcomes re-enter the stock ledger here, decoupling whoever reports
the outcome from the stock mechanics.
"""

from __future__ import annotations

import structlog

from stockres.application.events import EventDispatcher
from stockres.application.unit_of_work import UnitOfWork, reservation_lifecycle
from stockres.domain.events import CartItemRemoved, OrderCompleted, OrderFailed
from stockres.domain.exceptions import EntityNotFoundError

logger = structlog.get_logger(__name__)


def consume_order_reservations(event: OrderCompleted, uow: UnitOfWork) -> None:
    order = uow.orders.get_by_id(event.order_id)
    if order is None:
        raise EntityNotFoundError(f"Order #{event.order_id} not found")
    reservation_lifecycle(uow).consume_order(order)
    uow.orders.save(order)


def release_order_reservations(event: OrderFailed, uow: UnitOfWork) -> None:
    order = uow.orders.get_by_id(event.order_id)
    if order is None:
        raise EntityNotFoundError(f"Order #{event.order_id} not found")
    reservation_lifecycle(uow).release_order(order)
    uow.orders.save(order)


def audit_cart_item_removed(event: CartItemRemoved, uow: UnitOfWork) -> None:
    item = event.item
    reservation = item.reservation
    logger.info(
        "Cart item removed",
        reason=event.reason,
        user_id=item.user_id,
        product_id=item.product_id,
        unit=item.unit,
        quantity=item.quantity,
        warehouse_id=reservation.warehouse_id if reservation else None,
    )


def register_listeners(dispatcher: EventDispatcher) -> EventDispatcher:
    dispatcher.subscribe(OrderCompleted, consume_order_reservations)
    dispatcher.subscribe(OrderFailed, release_order_reservations)
    dispatcher.subscribe(CartItemRemoved, audit_cart_item_removed)
    return dispatcher
