"""Application service: Update Warehouse use case.

The generic update path.  Editing a warehouse's priority to 1 demotes every
other warehouse, exactly as the dedicated "set default" action does.
"""

from __future__ import annotations

from stockres.application.dto import WarehouseDTO
from stockres.application.show_warehouses import warehouse_to_dto
from stockres.application.unit_of_work import UnitOfWork, warehouse_directory
from stockres.domain.exceptions import EntityNotFoundError


class UpdateWarehouseHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, warehouse_id: int, **changes) -> WarehouseDTO:
        with self._uow as uow:
            warehouse = uow.warehouses.get_by_id(warehouse_id)
            if warehouse is None:
                raise EntityNotFoundError(f"Warehouse #{warehouse_id} not found")
            warehouse_directory(uow).update(warehouse, changes)
            return warehouse_to_dto(warehouse)
