"""Domain events published through the unit of work.

Events are dispatched synchronously inside the publishing transaction, so a
subscriber to CartItemRemoved still sees the line in the store.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockres.domain.model.cart_item import CartItem


@dataclass(frozen=True)
class DomainEvent:
    """Marker base class."""


@dataclass(frozen=True)
class CartItemRemoved(DomainEvent):
    item: CartItem
    reason: str  # "removed", "cleared" or "expired"


@dataclass(frozen=True)
class OrderCompleted(DomainEvent):
    order_id: int


@dataclass(frozen=True)
class OrderFailed(DomainEvent):
    order_id: int
