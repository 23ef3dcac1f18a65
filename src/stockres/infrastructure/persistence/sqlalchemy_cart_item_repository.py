"""SQLAlchemy implementation of CartItemRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from stockres.domain.model.cart_item import CartItem
from stockres.domain.model.reservation import Reservation, ReservationState
from stockres.domain.repository.cart_item_repository import CartItemRepository
from stockres.infrastructure.persistence._time import to_utc
from stockres.infrastructure.persistence.models import CartItemModel


class SqlAlchemyCartItemRepository(CartItemRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartItemRepository interface -----------------------------------------

    def get_by_id(self, item_id: int, *, for_update: bool = False) -> CartItem | None:
        stmt = select(CartItemModel).where(CartItemModel.id == item_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        row = self._session.execute(stmt).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def get_line(self, user_id: int, product_id: str, unit: str) -> CartItem | None:
        stmt = select(CartItemModel).where(
            CartItemModel.user_id == user_id,
            CartItemModel.product_id == product_id,
            CartItemModel.unit == unit.strip(),
        )
        row = self._session.execute(stmt).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_for_user(self, user_id: int) -> list[CartItem]:
        stmt = select(CartItemModel).where(CartItemModel.user_id == user_id).order_by(CartItemModel.id)
        return [self._to_domain(row) for row in self._session.execute(stmt).scalars()]

    def list_reserved_before(self, cutoff: datetime) -> list[CartItem]:
        stmt = (
            select(CartItemModel)
            .where(
                CartItemModel.reservation_state == ReservationState.RESERVED.value,
                CartItemModel.reserved_at < to_utc(cutoff),
            )
            .order_by(CartItemModel.reserved_at, CartItemModel.id)
        )
        return [self._to_domain(row) for row in self._session.execute(stmt).scalars()]

    def save(self, item: CartItem) -> None:
        if item.id is None:
            row = CartItemModel()
            self._apply(item, row)
            self._session.add(row)
            self._session.flush()
            item.id = row.id
            return

        row = self._session.get(CartItemModel, item.id)
        self._apply(item, row)
        self._session.flush()

    def delete(self, item: CartItem) -> None:
        if item.id is None:
            return
        row = self._session.get(CartItemModel, item.id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: CartItemModel) -> CartItem:
        state = ReservationState(row.reservation_state)
        reservation = None
        if row.reserved_warehouse_id is not None and row.reserved_at is not None:
            reservation = Reservation(
                warehouse_id=row.reserved_warehouse_id,
                reserved_at=to_utc(row.reserved_at),
            )
        return CartItem(
            id=row.id,
            user_id=row.user_id,
            product_id=row.product_id,
            unit=row.unit,
            quantity=row.quantity,
            state=state,
            reservation=reservation if state != ReservationState.NONE else None,
        )

    @staticmethod
    def _apply(item: CartItem, row: CartItemModel) -> None:
        row.user_id = item.user_id
        row.product_id = item.product_id
        row.unit = item.unit
        row.quantity = item.quantity
        row.reservation_state = item.state.value
        if item.reservation is not None:
            row.reserved_warehouse_id = item.reservation.warehouse_id
            row.reserved_at = to_utc(item.reservation.reserved_at)
        else:
            row.reserved_warehouse_id = None
            row.reserved_at = None
