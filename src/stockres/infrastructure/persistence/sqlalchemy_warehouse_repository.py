"""SQLAlchemy implementation of WarehouseRepository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from stockres.domain.model.warehouse import Warehouse
from stockres.domain.repository.warehouse_repository import WarehouseRepository
from stockres.infrastructure.persistence.models import WarehouseModel

_BY_PRIORITY = (WarehouseModel.priority, WarehouseModel.id)


class SqlAlchemyWarehouseRepository(WarehouseRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- WarehouseRepository interface ----------------------------------------

    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        row = self._session.get(WarehouseModel, warehouse_id)
        return self._to_domain(row) if row is not None else None

    def get_by_code(self, code: str) -> Warehouse | None:
        stmt = select(WarehouseModel).where(WarehouseModel.warehouse_code == code)
        row = self._session.execute(stmt).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_active_by_priority(self) -> list[Warehouse]:
        stmt = select(WarehouseModel).where(WarehouseModel.is_active.is_(True)).order_by(*_BY_PRIORITY)
        return [self._to_domain(row) for row in self._session.execute(stmt).scalars()]

    def list_all(self) -> list[Warehouse]:
        stmt = select(WarehouseModel).order_by(*_BY_PRIORITY)
        return [self._to_domain(row) for row in self._session.execute(stmt).scalars()]

    def set_priority_except(self, warehouse_id: int, priority: int) -> int:
        stmt = (
            update(WarehouseModel)
            .where(WarehouseModel.id != warehouse_id, WarehouseModel.priority != priority)
            .values(priority=priority)
            .execution_options(synchronize_session="fetch")
        )
        return self._session.execute(stmt).rowcount

    def save(self, warehouse: Warehouse) -> None:
        if warehouse.id is None:
            row = WarehouseModel()
            self._apply(warehouse, row)
            self._session.add(row)
            self._session.flush()
            warehouse.id = row.id
            return

        row = self._session.get(WarehouseModel, warehouse.id)
        self._apply(warehouse, row)
        self._session.flush()

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: WarehouseModel) -> Warehouse:
        return Warehouse(
            id=row.id,
            code=row.warehouse_code,
            name=row.name,
            priority=row.priority,
            is_active=row.is_active,
            business_code=row.business_code,
            branch_code=row.branch_code,
            address=row.address,
            phone=row.phone,
            warehouse_type=row.warehouse_type,
        )

    @staticmethod
    def _apply(warehouse: Warehouse, row: WarehouseModel) -> None:
        row.warehouse_code = warehouse.code
        row.name = warehouse.name
        row.priority = warehouse.priority
        row.is_active = warehouse.is_active
        row.business_code = warehouse.business_code
        row.branch_code = warehouse.branch_code
        row.address = warehouse.address
        row.phone = warehouse.phone
        row.warehouse_type = warehouse.warehouse_type
