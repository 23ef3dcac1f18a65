"""Abstract repository for Warehouse aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockres.domain.model.warehouse import Warehouse


class WarehouseRepository(ABC):

    @abstractmethod
    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        """Return a warehouse by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Warehouse | None:
        """Return a warehouse by its external code, or None if not found."""

    @abstractmethod
    def list_active_by_priority(self) -> list[Warehouse]:
        """Active warehouses, priority ascending, ties by ID."""

    @abstractmethod
    def list_all(self) -> list[Warehouse]:
        """Every warehouse, priority ascending, ties by ID."""

    @abstractmethod
    def set_priority_except(self, warehouse_id: int, priority: int) -> int:
        """Force ``priority`` on every warehouse but one; return how many."""

    @abstractmethod
    def save(self, warehouse: Warehouse) -> None:
        """Persist a new or updated warehouse."""
