"""SQLAlchemy implementation of StockRepository."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from stockres.domain.model.stock_record import StockRecord
from stockres.domain.model.value_objects import StockKey
from stockres.domain.repository.stock_repository import StockRepository
from stockres.infrastructure.persistence.models import StockRecordModel


class SqlAlchemyStockRepository(StockRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- StockRepository interface --------------------------------------------

    def get(self, key: StockKey, *, for_update: bool = False) -> StockRecord | None:
        stmt = select(StockRecordModel).where(
            StockRecordModel.product_id == key.product_id,
            StockRecordModel.warehouse_id == key.warehouse_id,
            StockRecordModel.unit == key.unit,
        )
        if for_update:
            # Re-read the locked row even if the session already holds it
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        row = self._session.execute(stmt).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def find(
        self,
        *,
        product_id: str | None = None,
        unit: str | None = None,
        warehouse_id: int | None = None,
        with_stock_only: bool = False,
        available_only: bool = False,
    ) -> list[StockRecord]:
        stmt = select(StockRecordModel)
        if product_id is not None:
            stmt = stmt.where(StockRecordModel.product_id == product_id)
        if unit is not None:
            stmt = stmt.where(StockRecordModel.unit == unit)
        if warehouse_id is not None:
            stmt = stmt.where(StockRecordModel.warehouse_id == warehouse_id)
        if with_stock_only:
            stmt = stmt.where(StockRecordModel.stock > 0)
        if available_only:
            stmt = stmt.where(StockRecordModel.stock > StockRecordModel.reserved_stock)
        stmt = stmt.order_by(
            StockRecordModel.product_id, StockRecordModel.unit, StockRecordModel.warehouse_id
        )
        return [self._to_domain(row) for row in self._session.execute(stmt).scalars()]

    def total_available(self, product_id: str, unit: str) -> int:
        stmt = select(
            func.coalesce(func.sum(StockRecordModel.stock - StockRecordModel.reserved_stock), 0)
        ).where(
            StockRecordModel.product_id == product_id,
            StockRecordModel.unit == unit,
        )
        return int(self._session.execute(stmt).scalar_one())

    def summarize_by_warehouse(self) -> dict[int, tuple[int, int, int]]:
        stmt = select(
            StockRecordModel.warehouse_id,
            func.count(StockRecordModel.id),
            func.coalesce(func.sum(StockRecordModel.stock), 0),
            func.coalesce(func.sum(StockRecordModel.reserved_stock), 0),
        ).group_by(StockRecordModel.warehouse_id)
        return {
            warehouse_id: (int(count), int(stock), int(reserved))
            for warehouse_id, count, stock, reserved in self._session.execute(stmt)
        }

    def reset_all_stock(self) -> int:
        result = self._session.execute(
            update(StockRecordModel).values(stock=0).execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def save(self, record: StockRecord) -> None:
        if record.id is None:
            row = StockRecordModel()
            self._apply(record, row)
            self._session.add(row)
            self._session.flush()
            record.id = row.id
            return

        row = self._session.get(StockRecordModel, record.id)
        self._apply(record, row)
        self._session.flush()

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: StockRecordModel) -> StockRecord:
        return StockRecord(
            id=row.id,
            product_id=row.product_id,
            warehouse_id=row.warehouse_id,
            unit=row.unit,
            stock=row.stock,
            reserved_stock=row.reserved_stock,
            min_stock=row.min_stock,
        )

    @staticmethod
    def _apply(record: StockRecord, row: StockRecordModel) -> None:
        row.product_id = record.product_id
        row.warehouse_id = record.warehouse_id
        row.unit = record.unit
        row.stock = record.stock
        row.reserved_stock = record.reserved_stock
        row.min_stock = record.min_stock
