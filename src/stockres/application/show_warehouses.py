"""Application service: Show Warehouses use case (query)."""

from __future__ import annotations

from stockres.application.dto import WarehouseDTO
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.model.warehouse import Warehouse


def warehouse_to_dto(
    warehouse: Warehouse,
    summary: tuple[int, int, int] | None = None,
) -> WarehouseDTO:
    products_count = total_stock = total_reserved = None
    if summary is not None:
        products_count, total_stock, total_reserved = summary
    return WarehouseDTO(
        id=warehouse.id,  # type: ignore[arg-type]
        code=warehouse.code,
        name=warehouse.name,
        priority=warehouse.priority,
        is_active=warehouse.is_active,
        is_default=warehouse.is_default,
        products_count=products_count,
        total_stock=total_stock,
        total_reserved=total_reserved,
    )


class ShowWarehousesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, include_inactive: bool = False, with_summary: bool = False) -> list[WarehouseDTO]:
        """Warehouses in allocation order, optionally with stock totals."""
        with self._uow as uow:
            if include_inactive:
                warehouses = uow.warehouses.list_all()
            else:
                warehouses = uow.warehouses.list_active_by_priority()

            summaries = uow.stock.summarize_by_warehouse() if with_summary else {}
            return [
                warehouse_to_dto(
                    w,
                    summaries.get(w.id, (0, 0, 0)) if with_summary else None,
                )
                for w in warehouses
            ]
