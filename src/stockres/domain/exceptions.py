"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

"Stock unavailable" is an expected outcome inside the ledger and the
allocator, which report it as result values.  It only becomes an exception
(``InsufficientStockError``) at the lifecycle boundary, where it must abort
the surrounding unit of work.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(ValidationError):
    """No single active warehouse can satisfy a reservation demand.

    ``available`` is the total available stock for the (product, unit)
    across every warehouse at the time of the failure.
    """

    def __init__(self, product_id: str, unit: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.unit = unit
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' ({unit}) "
            f"(need {requested}, have {available} available)"
        )


class LedgerReduceShortfall(DomainException):
    """Physical stock is lower than a reservation being consumed.

    Signals a desync between the ERP and the reservation ledger.  There is
    no compensating action; the order needs manual reconciliation.
    """

    def __init__(self, order_id: int | None, lines: list[tuple[str, str, int, int]]) -> None:
        # lines: (product_id, unit, warehouse_id, quantity)
        self.order_id = order_id
        self.lines = list(lines)
        described = ", ".join(
            f"{product_id}/{unit}@{warehouse_id} x{qty}"
            for product_id, unit, warehouse_id, qty in self.lines
        )
        super().__init__(
            f"Cannot consume reservations for order #{order_id}: "
            f"physical stock short for {described}"
        )


class PriorityInvariantViolation(DomainException):
    """More than one active warehouse holds the default priority."""
