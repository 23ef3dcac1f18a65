"""Domain service: Reservation Allocator.

Turns a demand (product, unit, quantity) into a reservation against one
warehouse, honouring warehouse priority: the first active warehouse whose
pool has enough available stock takes the whole demand.

A demand is never split across warehouses.  Stock that is sufficient in
aggregate but spread over several warehouses is rejected; that is a
product policy, not a defect.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from stockres.domain.model.value_objects import StockKey
from stockres.domain.model.warehouse import Warehouse
from stockres.domain.repository.stock_repository import StockRepository
from stockres.domain.service.stock_ledger import StockLedger
from stockres.domain.service.warehouse_directory import WarehouseDirectory

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AllocationResult:
    """Outcome of an allocation.

    On failure ``warehouse`` is None and ``total_available`` holds the
    available stock summed over every warehouse, for diagnostics.
    """

    product_id: str
    unit: str
    quantity: int
    warehouse: Warehouse | None = None
    total_available: int = 0

    @property
    def success(self) -> bool:
        return self.warehouse is not None

    @property
    def stock_key(self) -> StockKey | None:
        if self.warehouse is None:
            return None
        return StockKey(self.product_id, self.warehouse.id, self.unit)


class ReservationAllocator:

    def __init__(
        self,
        directory: WarehouseDirectory,
        stock_repo: StockRepository,
        ledger: StockLedger,
    ) -> None:
        self._directory = directory
        self._stock_repo = stock_repo
        self._ledger = ledger

    def allocate(self, product_id: str, unit: str, quantity: int) -> AllocationResult:
        """Reserve *quantity* in the best-priority warehouse that has it."""
        for warehouse in self._directory.active_by_priority():
            key = StockKey(product_id, warehouse.id, unit)
            if self._ledger.reserve(key, quantity):
                logger.info(
                    "Stock reserved",
                    product_id=product_id,
                    unit=unit,
                    quantity=quantity,
                    warehouse_id=warehouse.id,
                    warehouse_code=warehouse.code,
                )
                return AllocationResult(product_id, unit, quantity, warehouse=warehouse)

        available = self.total_available(product_id, unit)
        logger.info(
            "No warehouse can satisfy demand",
            product_id=product_id,
            unit=unit,
            quantity=quantity,
            total_available=available,
        )
        return AllocationResult(product_id, unit, quantity, total_available=available)

    def reallocate(
        self,
        previous_key: StockKey | None,
        previous_quantity: int,
        product_id: str,
        unit: str,
        new_total: int,
    ) -> AllocationResult:
        """Release the whole previous hold, then allocate the new total.

        The two steps are not atomic on their own; the caller's transaction
        must cover both so a failure rolls the release back too.
        """
        if previous_key is not None and previous_quantity > 0:
            self._lock_pools(product_id, unit)
            self._ledger.release(previous_key, previous_quantity)
        return self.allocate(product_id, unit, new_total)

    def total_available(self, product_id: str, unit: str) -> int:
        return self._stock_repo.total_available(product_id, unit)

    def _lock_pools(self, product_id: str, unit: str) -> None:
        # Row locks are taken in warehouse priority order, as allocate() does
        for warehouse in self._directory.active_by_priority():
            self._stock_repo.get(StockKey(product_id, warehouse.id, unit), for_update=True)
