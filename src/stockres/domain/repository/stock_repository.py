"""Abstract repository for StockRecord aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  ``for_update=True`` asks the store for a write lock on the
row that is held until the surrounding transaction ends; every ledger
mutation goes through it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockres.domain.model.stock_record import StockRecord
from stockres.domain.model.value_objects import StockKey


class StockRepository(ABC):

    @abstractmethod
    def get(self, key: StockKey, *, for_update: bool = False) -> StockRecord | None:
        """Return the record for a (product, warehouse, unit), or None."""

    @abstractmethod
    def find(
        self,
        *,
        product_id: str | None = None,
        unit: str | None = None,
        warehouse_id: int | None = None,
        with_stock_only: bool = False,
        available_only: bool = False,
    ) -> list[StockRecord]:
        """Return records matching every given filter."""

    @abstractmethod
    def total_available(self, product_id: str, unit: str) -> int:
        """Sum of ``stock - reserved_stock`` over every warehouse."""

    @abstractmethod
    def summarize_by_warehouse(self) -> dict[int, tuple[int, int, int]]:
        """Map warehouse id -> (records count, total stock, total reserved)."""

    @abstractmethod
    def reset_all_stock(self) -> int:
        """Set ``stock`` to zero on every record; return how many."""

    @abstractmethod
    def save(self, record: StockRecord) -> None:
        """Persist a new or updated record."""
