"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockres.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot reserve, remove or order zero
    or negative units.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StockKey:
    """Identity of a stock pool: (product, warehouse, unit).

    The unit is part of the identity because the same product may be sold
    in several measurement units, each with its own independent pool.
    """

    product_id: str
    warehouse_id: int
    unit: str

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValidationError("Product ID is required")
        if not self.unit or not self.unit.strip():
            raise ValidationError("Unit is required")

    def __str__(self) -> str:
        return f"{self.product_id}/{self.unit}@{self.warehouse_id}"
