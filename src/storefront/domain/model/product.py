"""Product aggregate.

Products live independently of carts and orders. They have their own
lifecycle: prices change, stock moves, products are activated and
withdrawn from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.base import Entity, new_id, utcnow
from storefront.domain.model.value_objects import Money, ProductCategory, Sku


def _check_stock_change(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Stock quantity must be an integer")
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")


@dataclass(eq=False)
class Product(Entity):
    """A product in the catalog.

    Stock and activation are independent: a product is available only
    when it is both active and in stock.  The price currency is fixed
    at creation; carts and orders copy the price, so later updates do not
    affect them.
    """

    id: str
    name: str
    description: str
    sku: Sku
    price: Money
    category: ProductCategory
    stock_quantity: int = 0
    is_active: bool = True
    image_urls: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @staticmethod
    def create(
        name: str,
        description: str,
        sku: str,
        price: Money,
        category: ProductCategory,
        stock_quantity: int = 0,
        product_id: str | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not description or not description.strip():
            raise ValidationError("Product description is required")
        if isinstance(stock_quantity, bool) or not isinstance(stock_quantity, int):
            raise ValidationError("Stock quantity must be an integer")
        if stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")

        return Product(
            id=product_id or new_id(),
            name=name.strip(),
            description=description.strip(),
            sku=Sku(sku),
            price=price,
            category=category,
            stock_quantity=stock_quantity,
        )

    # --- Catalog details ------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price within its original currency."""
        if new_price.currency != self.price.currency:
            raise ValidationError(
                f"Cannot change product currency from {self.price.currency} "
                f"to {new_price.currency}"
            )
        self.price = new_price
        self.touch()

    def update_name(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name cannot be empty")
        self.name = new_name.strip()
        self.touch()

    def update_description(self, new_description: str) -> None:
        if not new_description or not new_description.strip():
            raise ValidationError("Product description cannot be empty")
        self.description = new_description.strip()
        self.touch()

    def update_category(self, new_category: ProductCategory) -> None:
        self.category = new_category
        self.touch()

    # --- Stock ----------------------------------------------------------------

    def increase_stock(self, quantity: int) -> None:
        _check_stock_change(quantity)
        self.stock_quantity += quantity
        self.touch()

    def decrease_stock(self, quantity: int) -> None:
        _check_stock_change(quantity)
        if quantity > self.stock_quantity:
            raise ValidationError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.stock_quantity})"
            )
        self.stock_quantity -= quantity
        self.touch()

    # --- Images and metadata --------------------------------------------------

    def add_image(self, image_url: str) -> None:
        if not image_url or not image_url.strip():
            raise ValidationError("Image URL cannot be empty")
        url = image_url.strip()
        if url in self.image_urls:
            return
        self.image_urls.append(url)
        self.touch()

    def remove_image(self, image_url: str) -> None:
        if image_url in self.image_urls:
            self.image_urls.remove(image_url)
            self.touch()

    def set_metadata(self, key: str, value: Any) -> None:
        if not key or not key.strip():
            raise ValidationError("Metadata key cannot be empty")
        self.metadata[key] = value
        self.touch()

    def remove_metadata(self, key: str) -> None:
        if key in self.metadata:
            del self.metadata[key]
            self.touch()

    # --- Activation -----------------------------------------------------------

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    # --- Queries --------------------------------------------------------------

    def is_in_stock(self) -> bool:
        return self.stock_quantity > 0

    def is_available(self) -> bool:
        return self.is_active and self.is_in_stock()
