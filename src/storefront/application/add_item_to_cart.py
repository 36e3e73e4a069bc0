"""Application service: Add Item to Cart use case.

Looks up the product to snapshot its name and current price, finds the
customer's active cart (creating one on first use) and lets the Cart
aggregate decide whether the item merges into an existing line.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO
from storefront.application.events import EventPublisher
from storefront.domain.exceptions import BusinessRuleViolationError, EntityNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddItemToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        publisher: EventPublisher,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, customer_id: str, product_id: str, quantity: int) -> CartDTO:
        customer_id = customer_id.strip()
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if not product.is_available():
            raise BusinessRuleViolationError(f"Product '{product.name}' is not available")

        cart = self._cart_repo.find_active_by_customer_id(customer_id)
        if cart is None:
            cart = Cart.create(customer_id, product.price.currency)
            logger.info("Cart created", cart_id=cart.id, customer_id=cart.customer_id)

        cart.add_item(product.id, product.name, quantity, product.price)
        self._cart_repo.save(cart)
        self._publisher.publish_all(cart.pull_events())

        logger.info(
            "Item added to cart",
            cart_id=cart.id,
            product_id=product.id,
            quantity=quantity,
            item_count=cart.total_item_count,
        )
        return CartDTO.from_cart(cart)
