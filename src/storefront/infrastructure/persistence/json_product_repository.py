"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, ProductCategory, Sku
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonRecordFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> Product | None:
        wanted = sku.strip().upper()
        for raw in self._file.load():
            if raw["sku"] == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[Product]:
        records = self._file.load()[offset:]
        if limit is not None:
            records = records[:limit]
        return [self._to_domain(raw) for raw in records]

    def find_by_category(self, category_slug: str) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["category"]["slug"] == category_slug
        ]

    def search(self, query: str) -> list[Product]:
        needle = query.strip().lower()
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if needle in raw["name"].lower() or needle in raw["description"].lower()
        ]

    def save(self, product: Product) -> None:
        self._file.upsert(self._to_raw(product))

    def delete(self, product_id: str) -> None:
        self._file.remove(product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "sku": product.sku.value,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "category": {
                "name": product.category.name,
                "slug": product.category.slug,
            },
            "stock_quantity": product.stock_quantity,
            "is_active": product.is_active,
            "image_urls": list(product.image_urls),
            "metadata": dict(product.metadata),
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw["description"],
            sku=Sku(raw["sku"]),
            price=Money(Decimal(raw["price"]), raw["currency"]),
            category=ProductCategory(raw["category"]["name"], raw["category"]["slug"]),
            stock_quantity=raw.get("stock_quantity", 0),
            is_active=raw.get("is_active", True),
            image_urls=list(raw.get("image_urls", [])),
            metadata=dict(raw.get("metadata", {})),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
