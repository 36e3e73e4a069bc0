"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return the product with this SKU (case-insensitive), or None."""

    @abstractmethod
    def list_all(self, limit: int | None = None, offset: int = 0) -> list[Product]:
        """Return products in catalog order, optionally paginated."""

    @abstractmethod
    def find_by_category(self, category_slug: str) -> list[Product]:
        """Return every product whose category slug matches."""

    @abstractmethod
    def search(self, query: str) -> list[Product]:
        """Return products whose name or description contains *query*."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Deleting an unknown ID is a no-op."""
