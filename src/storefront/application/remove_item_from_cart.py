"""Application service: Remove Item from Cart use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO
from storefront.application.events import EventPublisher
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class RemoveItemFromCartHandler:

    def __init__(self, cart_repo: CartRepository, publisher: EventPublisher) -> None:
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(self, customer_id: str, product_id: str) -> CartDTO:
        customer_id = customer_id.strip()
        cart = self._cart_repo.find_active_by_customer_id(customer_id)
        if cart is None:
            raise EntityNotFoundError(f"No active cart for customer '{customer_id}'")

        cart.remove_item(product_id)
        self._cart_repo.save(cart)
        self._publisher.publish_all(cart.pull_events())

        logger.info("Item removed from cart", cart_id=cart.id, product_id=product_id)
        return CartDTO.from_cart(cart)
