"""Application service: Set Default Warehouse use case."""

from __future__ import annotations

from stockres.application.dto import WarehouseDTO
from stockres.application.show_warehouses import warehouse_to_dto
from stockres.application.unit_of_work import UnitOfWork, warehouse_directory
from stockres.domain.exceptions import EntityNotFoundError


class SetDefaultWarehouseHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, warehouse_code: str) -> WarehouseDTO:
        """Make a warehouse the default (priority 1, active); demote the rest."""
        with self._uow as uow:
            warehouse = uow.warehouses.get_by_code(warehouse_code)
            if warehouse is None:
                raise EntityNotFoundError(f"Warehouse '{warehouse_code}' not found")
            warehouse_directory(uow).set_default(warehouse)
            return warehouse_to_dto(warehouse)
