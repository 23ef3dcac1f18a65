"""Domain service: Stock Ledger.

The only code allowed to change ``stock`` and ``reserved_stock``.  Each
operation locks the record row for the rest of the caller's transaction
before reading it, so two concurrent reservations against the same
(product, warehouse, unit) cannot both see stale availability.

Outcomes are returned as values, never raised: running out of stock is
routine, and a missing record simply means there is nothing to release.
"""

from __future__ import annotations

from enum import Enum

import structlog

from stockres.domain.model.value_objects import StockKey
from stockres.domain.repository.stock_repository import StockRepository

logger = structlog.get_logger(__name__)


class ReduceOutcome(Enum):
    REDUCED = "REDUCED"
    SHORTFALL = "SHORTFALL"
    MISSING_ROW = "MISSING_ROW"


class StockLedger:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def reserve(self, key: StockKey, quantity: int) -> bool:
        """Hold *quantity* units of the pool if available.

        Returns False, with nothing changed, when the record is missing or
        its available stock is short.
        """
        record = self._stock_repo.get(key, for_update=True)
        if record is None:
            return False
        if not record.reserve(quantity):
            return False
        self._stock_repo.save(record)
        return True

    def release(self, key: StockKey, quantity: int) -> bool:
        """Drop a hold, clamping at zero.

        Returns False when there is no record for *key*; that is not an
        error, the line may predate any stock row for its unit.
        """
        record = self._stock_repo.get(key, for_update=True)
        if record is None:
            logger.debug("Nothing to release, no stock record", stock_key=str(key), quantity=quantity)
            return False
        record.release(quantity)
        self._stock_repo.save(record)
        return True

    def reduce(self, key: StockKey, quantity: int) -> ReduceOutcome:
        """Convert a hold into a permanent deduction."""
        record = self._stock_repo.get(key, for_update=True)
        if record is None:
            logger.debug("Nothing to reduce, no stock record", stock_key=str(key), quantity=quantity)
            return ReduceOutcome.MISSING_ROW
        if not record.reduce(quantity):
            return ReduceOutcome.SHORTFALL
        self._stock_repo.save(record)
        return ReduceOutcome.REDUCED
