"""Abstract repository for the Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_id(self, cart_id: str) -> Cart | None:
        """Return a cart by its ID, or None if not found."""

    @abstractmethod
    def find_active_by_customer_id(self, customer_id: str) -> Cart | None:
        """Return the customer's ACTIVE cart, or None."""

    @abstractmethod
    def find_all_by_customer_id(self, customer_id: str) -> list[Cart]:
        """Return every cart the customer has owned, in any status."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""

    @abstractmethod
    def delete(self, cart_id: str) -> None:
        """Remove a cart. Deleting an unknown ID is a no-op."""
