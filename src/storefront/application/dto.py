"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money values are
pre-formatted (``"49.99 CAD"``); timestamps are ISO 8601 strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import ShippingAddress


@dataclass(frozen=True)
class ShippingAddressSpec:
    """Input: the address the customer typed at checkout."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def to_value_object(self) -> ShippingAddress:
        return ShippingAddress(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )


@dataclass(frozen=True)
class CartItemDTO:
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    discount: str
    subtotal: str
    total: str


@dataclass(frozen=True)
class CartDTO:
    id: str
    customer_id: str
    status: str
    currency: str
    items: list[CartItemDTO]
    subtotal: str
    total_discount: str
    total_amount: str
    total_item_count: int
    created_at: str
    updated_at: str

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        return CartDTO(
            id=cart.id,
            customer_id=cart.customer_id,
            status=cart.status.value,
            currency=cart.currency,
            items=[
                CartItemDTO(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    discount=str(item.discount),
                    subtotal=str(item.subtotal),
                    total=str(item.total),
                )
                for item in cart.items
            ],
            subtotal=str(cart.subtotal),
            total_discount=str(cart.total_discount),
            total_amount=str(cart.total_amount),
            total_item_count=cart.total_item_count,
            created_at=cart.created_at.isoformat(),
            updated_at=cart.updated_at.isoformat(),
        )


@dataclass(frozen=True)
class OrderLineDTO:
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    discount: str
    subtotal: str
    total: str


@dataclass(frozen=True)
class OrderDTO:
    id: str
    customer_id: str
    status: str
    currency: str
    order_lines: list[OrderLineDTO]
    shipping_address: str
    subtotal: str
    total_discount: str
    total_amount: str
    total_item_count: int
    tracking_number: str | None
    cancellation_reason: str | None
    created_at: str
    updated_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_id=order.customer_id,
            status=order.status.value,
            currency=order.currency,
            order_lines=[
                OrderLineDTO(
                    id=line.id,
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    discount=str(line.discount),
                    subtotal=str(line.subtotal),
                    total=str(line.total),
                )
                for line in order.order_lines
            ],
            shipping_address=str(order.shipping_address),
            subtotal=str(order.subtotal),
            total_discount=str(order.total_discount),
            total_amount=str(order.total_amount),
            total_item_count=order.total_item_count,
            tracking_number=order.tracking_number,
            cancellation_reason=order.cancellation_reason,
            created_at=order.created_at.isoformat(),
            updated_at=order.updated_at.isoformat(),
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    sku: str
    price: str
    currency: str
    category_name: str
    category_slug: str
    stock_quantity: int
    is_active: bool
    is_available: bool
    image_urls: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            sku=product.sku.value,
            price=str(product.price),
            currency=product.price.currency,
            category_name=product.category.name,
            category_slug=product.category.slug,
            stock_quantity=product.stock_quantity,
            is_active=product.is_active,
            is_available=product.is_available(),
            image_urls=list(product.image_urls),
            metadata=dict(product.metadata),
        )


@dataclass(frozen=True)
class UserDTO:
    id: str
    email: str
    roles: list[str]

    @staticmethod
    def from_user(user: User) -> UserDTO:
        return UserDTO(
            id=user.id,
            email=user.email.value,
            roles=[role.value for role in user.roles],
        )
