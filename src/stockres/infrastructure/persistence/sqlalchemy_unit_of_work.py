"""SQLAlchemy implementation of UnitOfWork: one session per ``with`` block."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from stockres.application.events import EventDispatcher
from stockres.application.unit_of_work import UnitOfWork
from stockres.infrastructure.persistence.sqlalchemy_cart_item_repository import (
    SqlAlchemyCartItemRepository,
)
from stockres.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)
from stockres.infrastructure.persistence.sqlalchemy_stock_repository import (
    SqlAlchemyStockRepository,
)
from stockres.infrastructure.persistence.sqlalchemy_warehouse_repository import (
    SqlAlchemyWarehouseRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(
        self,
        session_factory: sessionmaker,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        super().__init__(dispatcher)
        self._session_factory = session_factory
        self.session: Session | None = None

    def _begin(self) -> None:
        if self.session is not None:
            raise RuntimeError("Unit of work is already open")
        self.session = self._session_factory()
        self.stock = SqlAlchemyStockRepository(self.session)
        self.warehouses = SqlAlchemyWarehouseRepository(self.session)
        self.cart_items = SqlAlchemyCartItemRepository(self.session)
        self.orders = SqlAlchemyOrderRepository(self.session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def _close(self) -> None:
        try:
            self.session.close()
        finally:
            self.session = None
