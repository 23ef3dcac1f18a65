"""Application service: Sync Stock use case (ERP stock import).

The ERP report is the truth for physical counts: every record's ``stock``
is reset to zero, then the reported rows are applied batch by batch, all in
one transaction.  ``reserved_stock`` is never touched, so a shrinking count
can push available stock below zero until the reservations drain.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from stockres.application.dto import StockSyncReport, StockSyncRow
from stockres.application.unit_of_work import UnitOfWork
from stockres.domain.exceptions import ValidationError
from stockres.domain.model.stock_record import StockRecord
from stockres.domain.model.value_objects import StockKey
from stockres.domain.model.warehouse import Warehouse

logger = structlog.get_logger(__name__)


class SyncStockHandler:

    def __init__(self, uow: UnitOfWork, batch_size: int = 500) -> None:
        if batch_size <= 0:
            raise ValidationError("Sync batch size must be positive")
        self._uow = uow
        self._batch_size = batch_size

    def handle(self, rows: Iterable[StockSyncRow]) -> StockSyncReport:
        rows = list(rows)
        updated = created = skipped = 0

        with self._uow as uow:
            warehouses: dict[str, Warehouse | None] = {}
            reset = uow.stock.reset_all_stock()
            logger.info("Stock sync started", rows=len(rows), reset=reset)

            for start in range(0, len(rows), self._batch_size):
                batch = rows[start:start + self._batch_size]
                for row in batch:
                    if row.warehouse_code not in warehouses:
                        warehouses[row.warehouse_code] = uow.warehouses.get_by_code(row.warehouse_code)
                    warehouse = warehouses[row.warehouse_code]
                    if warehouse is None or not warehouse.is_active:
                        logger.warning(
                            "Skipping stock row for unknown or inactive warehouse",
                            warehouse_code=row.warehouse_code,
                            product_id=row.product_id,
                        )
                        skipped += 1
                        continue

                    key = StockKey(row.product_id, warehouse.id, row.unit.strip())
                    record = uow.stock.get(key, for_update=True)
                    if record is None:
                        record = StockRecord(product_id=row.product_id, warehouse_id=warehouse.id, unit=key.unit)
                        created += 1
                    else:
                        updated += 1
                    record.overwrite_stock(row.stock)
                    uow.stock.save(record)

                logger.info("Stock sync batch applied", offset=start, size=len(batch))

        logger.info("Stock sync finished", updated=updated, created=created, skipped=skipped)
        return StockSyncReport(reset=reset, updated=updated, created=created, skipped=skipped)
