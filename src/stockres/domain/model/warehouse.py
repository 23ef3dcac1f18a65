"""Warehouse aggregate.

Warehouses are created by the ERP sync or by an administrator and are never
hard-deleted while they own stock rows.  Their ``priority`` decides the
order in which the allocator scans them.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockres.domain.exceptions import ValidationError

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
DEFAULT_PRIORITY = 1
FALLBACK_PRIORITY = 999


@dataclass
class Warehouse:
    """A physical warehouse.

    Lower ``priority`` means preferred.  Priority 1 marks the default
    warehouse; keeping it unique is the job of the WarehouseDirectory,
    not of a single aggregate.
    """

    id: int | None
    code: str
    name: str
    priority: int = FALLBACK_PRIORITY
    is_active: bool = True
    business_code: str = ""
    branch_code: str = ""
    address: str | None = None
    phone: str | None = None
    warehouse_type: str | None = None

    # --- Factory (used for NEW warehouses only) -------------------------------

    @staticmethod
    def create(
        code: str,
        name: str,
        priority: int = FALLBACK_PRIORITY,
        **metadata,
    ) -> Warehouse:
        if not code or not code.strip():
            raise ValidationError("Warehouse code is required")
        if not name or not name.strip():
            raise ValidationError("Warehouse name is required")
        _check_priority(priority)
        return Warehouse(
            id=None,
            code=code.strip(),
            name=name.strip(),
            priority=priority,
            **metadata,
        )

    # --- Behaviour ------------------------------------------------------------

    @property
    def is_default(self) -> bool:
        return self.priority == DEFAULT_PRIORITY

    def make_default(self) -> None:
        self.priority = DEFAULT_PRIORITY
        self.is_active = True

    def change_priority(self, priority: int) -> None:
        _check_priority(priority)
        self.priority = priority


def _check_priority(priority: int) -> None:
    if isinstance(priority, bool) or not isinstance(priority, int) or priority <= 0:
        raise ValidationError(f"Warehouse priority must be a positive integer, got {priority!r}")
