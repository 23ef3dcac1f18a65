"""Domain service: Warehouse Directory.

Enumerates the warehouses eligible for allocation and keeps the "one
default warehouse" invariant.  Every path that can put a warehouse at
priority 1 (registration, the explicit "set default" action and the generic
update) ends in ``_renormalize()``, which demotes all other warehouses in
the same transaction.
"""

from __future__ import annotations

import structlog

from stockres.domain.exceptions import PriorityInvariantViolation, ValidationError
from stockres.domain.model.warehouse import DEFAULT_PRIORITY, FALLBACK_PRIORITY, Warehouse
from stockres.domain.repository.warehouse_repository import WarehouseRepository

logger = structlog.get_logger(__name__)

# Fields the generic update path may touch.
UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "priority",
        "is_active",
        "business_code",
        "branch_code",
        "address",
        "phone",
        "warehouse_type",
    }
)


class WarehouseDirectory:

    def __init__(self, warehouse_repo: WarehouseRepository) -> None:
        self._warehouse_repo = warehouse_repo

    # --- Queries --------------------------------------------------------------

    def active_by_priority(self) -> list[Warehouse]:
        """Scan order for the allocator."""
        return self._warehouse_repo.list_active_by_priority()

    def default(self) -> Warehouse | None:
        defaults = [w for w in self.active_by_priority() if w.is_default]
        if len(defaults) > 1:
            raise PriorityInvariantViolation(
                "More than one active default warehouse: "
                + ", ".join(w.code for w in defaults)
            )
        return defaults[0] if defaults else None

    # --- Commands -------------------------------------------------------------

    def register(self, warehouse: Warehouse) -> Warehouse:
        if self._warehouse_repo.get_by_code(warehouse.code) is not None:
            raise ValidationError(f"Warehouse code '{warehouse.code}' already exists")
        self._warehouse_repo.save(warehouse)
        if warehouse.is_default:
            self._renormalize(warehouse)
        return warehouse

    def set_default(self, warehouse: Warehouse) -> None:
        warehouse.make_default()
        self._warehouse_repo.save(warehouse)
        self._renormalize(warehouse)

    def update(self, warehouse: Warehouse, changes: dict) -> Warehouse:
        """Generic field update, followed by the priority hook."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown warehouse field(s): {', '.join(sorted(unknown))}")

        previous_priority = warehouse.priority
        for name, value in changes.items():
            if name == "priority":
                warehouse.change_priority(value)
            elif name == "name" and (not value or not str(value).strip()):
                raise ValidationError("Warehouse name is required")
            else:
                setattr(warehouse, name, value)
        self._warehouse_repo.save(warehouse)

        if warehouse.priority != previous_priority and warehouse.is_default:
            self._renormalize(warehouse)
        return warehouse

    # --- Internal helpers -----------------------------------------------------

    def _renormalize(self, default: Warehouse) -> None:
        demoted = self._warehouse_repo.set_priority_except(default.id, FALLBACK_PRIORITY)
        logger.info(
            "Default warehouse changed",
            warehouse_id=default.id,
            warehouse_code=default.code,
            priority=DEFAULT_PRIORITY,
            demoted=demoted,
        )
