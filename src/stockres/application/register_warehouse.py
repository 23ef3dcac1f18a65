"""Application service: Register Warehouse use case."""

from __future__ import annotations

from stockres.application.dto import WarehouseDTO
from stockres.application.show_warehouses import warehouse_to_dto
from stockres.application.unit_of_work import UnitOfWork, warehouse_directory
from stockres.domain.model.warehouse import FALLBACK_PRIORITY, Warehouse


class RegisterWarehouseHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        code: str,
        name: str,
        priority: int = FALLBACK_PRIORITY,
        **metadata,
    ) -> WarehouseDTO:
        """Add a warehouse.  Registering one at priority 1 makes it the default."""
        warehouse = Warehouse.create(code=code, name=name, priority=priority, **metadata)
        with self._uow as uow:
            warehouse_directory(uow).register(warehouse)
            return warehouse_to_dto(warehouse)
