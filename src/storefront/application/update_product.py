"""Application service: Update Product use case.

Applies a partial update: only the arguments that are not None change.
Price changes never affect existing carts or orders; they captured a
price snapshot when the item was added.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog

from storefront.application.authorization import require_permission
from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import Permission, User
from storefront.domain.model.value_objects import Money, ProductCategory
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        actor: User,
        product_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        price: str | Decimal | int | None = None,
        currency: str | None = None,
        category: str | None = None,
        stock_quantity: int | None = None,
        is_active: bool | None = None,
        image_urls: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ProductDTO:
        require_permission(actor, Permission.PRODUCT_UPDATE)
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            product.update_name(name)
        if description is not None:
            product.update_description(description)
        if price is not None:
            product.update_price(Money.of(price, currency or product.price.currency))
        if category is not None:
            product.update_category(ProductCategory(category))

        # Stock moves through increase/decrease so the entity's rules apply.
        if stock_quantity is not None:
            difference = stock_quantity - product.stock_quantity
            if difference > 0:
                product.increase_stock(difference)
            elif difference < 0:
                product.decrease_stock(-difference)

        if is_active is not None:
            if is_active:
                product.activate()
            else:
                product.deactivate()

        if image_urls is not None:
            for url in list(product.image_urls):
                product.remove_image(url)
            for url in image_urls:
                product.add_image(url)

        for key, value in (metadata or {}).items():
            product.set_metadata(key, value)

        self._product_repo.save(product)

        logger.info("Product updated", product_id=product.id)
        return ProductDTO.from_product(product)
