"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from stockres.application.dto import StockLineDTO
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.exceptions import EntityNotFoundError
from stockres.domain.model.stock_record import StockRecord


def stock_record_to_dto(record: StockRecord) -> StockLineDTO:
    return StockLineDTO(
        product_id=record.product_id,
        warehouse_id=record.warehouse_id,
        unit=record.unit,
        stock=record.stock,
        reserved=record.reserved_stock,
        available=record.available_stock,
        min_stock=record.min_stock,
        below_min_stock=record.is_below_min_stock,
    )


class ShowStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str | None = None,
        unit: str | None = None,
        warehouse_code: str | None = None,
        with_stock_only: bool = False,
        available_only: bool = False,
    ) -> list[StockLineDTO]:
        with self._uow as uow:
            warehouse_id = None
            if warehouse_code is not None:
                warehouse = uow.warehouses.get_by_code(warehouse_code)
                if warehouse is None:
                    raise EntityNotFoundError(f"Warehouse '{warehouse_code}' not found")
                warehouse_id = warehouse.id

            records = uow.stock.find(
                product_id=product_id,
                unit=unit,
                warehouse_id=warehouse_id,
                with_stock_only=with_stock_only,
                available_only=available_only,
            )
            return [stock_record_to_dto(r) for r in records]
