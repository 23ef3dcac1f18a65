"""Application service: Set Stock use case (manual stock entry).

Creates the (product, warehouse, unit) record on first use.  Only the
physical count changes; reservations are left alone.
"""

from __future__ import annotations

from stockres.application.dto import StockLineDTO
from stockres.application.show_stock import stock_record_to_dto
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.exceptions import EntityNotFoundError, ValidationError
from stockres.domain.model.stock_record import StockRecord
from stockres.domain.model.value_objects import StockKey


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str,
        warehouse_code: str,
        unit: str,
        stock: int,
        min_stock: int | None = None,
    ) -> StockLineDTO:
        if min_stock is not None and min_stock < 0:
            raise ValidationError("Minimum stock cannot be negative")

        with self._uow as uow:
            warehouse = uow.warehouses.get_by_code(warehouse_code)
            if warehouse is None:
                raise EntityNotFoundError(f"Warehouse '{warehouse_code}' not found")

            key = StockKey(product_id, warehouse.id, unit.strip())
            record = uow.stock.get(key, for_update=True)
            if record is None:
                record = StockRecord(product_id=product_id, warehouse_id=warehouse.id, unit=key.unit)

            record.overwrite_stock(stock)
            if min_stock is not None:
                record.min_stock = min_stock
            uow.stock.save(record)
            return stock_record_to_dto(record)
