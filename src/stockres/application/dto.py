"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CartItemDTO:
    """Output: a cart line and where its stock is held."""

    product_id: str
    unit: str
    quantity: int
    state: str
    warehouse_id: int | None
    reserved_at: str | None  # "YYYY-MM-DD HH:MM:SS UTC"


@dataclass(frozen=True)
class CartRemovalDTO:
    product_id: str
    unit: str
    action: str  # "deleted" or "updated"
    released: int
    remaining_quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    unit: str
    quantity: int
    warehouse_id: int | None
    state: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: int
    status: str
    items: list[OrderItemDTO]
    created_at: str


@dataclass(frozen=True)
class WarehouseDTO:
    id: int
    code: str
    name: str
    priority: int
    is_active: bool
    is_default: bool
    products_count: int | None = None
    total_stock: int | None = None
    total_reserved: int | None = None


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    warehouse_id: int
    unit: str
    stock: int
    reserved: int
    available: int
    min_stock: int | None
    below_min_stock: bool


@dataclass(frozen=True)
class StockSyncRow:
    """Input: one (product, warehouse, unit) count reported by the ERP."""

    product_id: str
    warehouse_code: str
    unit: str
    stock: int


@dataclass(frozen=True)
class StockSyncReport:
    reset: int
    updated: int
    created: int
    skipped: int


@dataclass(frozen=True)
class ExpiredReservationDTO:
    item_id: int
    user_id: int
    product_id: str
    unit: str
    quantity: int
    warehouse_id: int
    reserved_minutes_ago: int


@dataclass(frozen=True)
class SweepReport:
    cutoff: str
    timeout_minutes: int
    dry_run: bool
    candidates: list[ExpiredReservationDTO] = field(default_factory=list)
    processed: int = 0
    released_quantity: int = 0
