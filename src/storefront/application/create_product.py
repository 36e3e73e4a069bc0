"""Application service: Create Product use case."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog

from storefront.application.authorization import require_permission
from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.user import Permission, User
from storefront.domain.model.value_objects import Money, ProductCategory, Sku
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        actor: User,
        name: str,
        description: str,
        sku: str,
        price: str | Decimal | int,
        currency: str,
        category: str,
        stock_quantity: int = 0,
        image_urls: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog. SKUs must be unique."""
        require_permission(actor, Permission.PRODUCT_CREATE)
        normalized_sku = Sku(sku)
        if self._product_repo.get_by_sku(normalized_sku.value) is not None:
            raise ValidationError(f"Product with SKU {normalized_sku} already exists")

        product = Product.create(
            name=name,
            description=description,
            sku=normalized_sku.value,
            price=Money.of(price, currency),
            category=ProductCategory(category),
            stock_quantity=stock_quantity,
        )
        for url in image_urls or []:
            product.add_image(url)
        for key, value in (metadata or {}).items():
            product.set_metadata(key, value)

        self._product_repo.save(product)

        logger.info("Product created", product_id=product.id, sku=product.sku.value)
        return ProductDTO.from_product(product)
