"""Domain -> DTO mapping shared by several use cases."""

from __future__ import annotations

from stockres.application.dto import CartItemDTO, OrderDTO, OrderItemDTO
from stockres.domain.model.cart_item import CartItem
from stockres.domain.model.order import Order


def cart_item_to_dto(item: CartItem) -> CartItemDTO:
    reservation = item.reservation
    return CartItemDTO(
        product_id=item.product_id,
        unit=item.unit,
        quantity=item.quantity,
        state=item.state.value,
        warehouse_id=reservation.warehouse_id if reservation else None,
        reserved_at=(
            reservation.reserved_at.strftime("%Y-%m-%d %H:%M:%S UTC") if reservation else None
        ),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                unit=item.unit,
                quantity=item.quantity,
                warehouse_id=item.warehouse_id,
                state=item.state.value,
            )
            for item in order.items
        ],
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
