"""Abstract repository for CartItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from stockres.domain.model.cart_item import CartItem


class CartItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: int, *, for_update: bool = False) -> CartItem | None:
        """Return a cart line by its ID, or None."""

    @abstractmethod
    def get_line(self, user_id: int, product_id: str, unit: str) -> CartItem | None:
        """Return the user's line for a (product, unit), or None."""

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[CartItem]:
        """Return every line in the user's cart."""

    @abstractmethod
    def list_reserved_before(self, cutoff: datetime) -> list[CartItem]:
        """Reserved lines whose reservation timestamp is older than *cutoff*."""

    @abstractmethod
    def save(self, item: CartItem) -> None:
        """Persist a new or updated line."""

    @abstractmethod
    def delete(self, item: CartItem) -> None:
        """Remove a line."""
