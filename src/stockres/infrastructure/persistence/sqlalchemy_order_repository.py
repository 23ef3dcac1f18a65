"""SQLAlchemy implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from stockres.domain.model.order import Order, OrderItem, OrderStatus
from stockres.domain.model.reservation import ReservationState
from stockres.domain.repository.order_repository import OrderRepository
from stockres.infrastructure.persistence._time import to_utc
from stockres.infrastructure.persistence.models import OrderItemModel, OrderModel


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        )
        row = self._session.execute(stmt).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def save(self, order: Order) -> None:
        if order.id is None:
            row = OrderModel(
                user_id=order.user_id,
                status=order.status.value,
                placed_at=to_utc(order.created_at),
                items=[self._new_item_row(item) for item in order.items],
            )
            self._session.add(row)
            self._session.flush()
            order.id = row.id
            for item, item_row in zip(order.items, row.items):
                item.id = item_row.id
            return

        row = self._session.get(OrderModel, order.id)
        row.status = order.status.value
        rows_by_id = {item_row.id: item_row for item_row in row.items}
        for item in order.items:
            item_row = rows_by_id.get(item.id)
            if item_row is None:
                item_row = self._new_item_row(item)
                row.items.append(item_row)
            else:
                item_row.reservation_state = item.state.value
        self._session.flush()
        for item, item_row in zip(order.items, row.items):
            item.id = item_row.id

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _new_item_row(item: OrderItem) -> OrderItemModel:
        return OrderItemModel(
            product_id=item.product_id,
            unit=item.unit,
            quantity=item.quantity,
            warehouse_id=item.warehouse_id,
            reservation_state=item.state.value,
        )

    @staticmethod
    def _to_domain(row: OrderModel) -> Order:
        return Order(
            id=row.id,
            user_id=row.user_id,
            status=OrderStatus(row.status),
            created_at=to_utc(row.placed_at),
            items=[
                OrderItem(
                    id=item_row.id,
                    product_id=item_row.product_id,
                    unit=item_row.unit,
                    quantity=item_row.quantity,
                    warehouse_id=item_row.warehouse_id,
                    state=ReservationState(item_row.reservation_state),
                )
                for item_row in row.items
            ],
        )
