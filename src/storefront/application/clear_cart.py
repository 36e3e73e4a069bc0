"""Application service: Clear Cart use case."""

from __future__ import annotations

import structlog

from storefront.application.events import EventPublisher
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository, publisher: EventPublisher) -> None:
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(self, customer_id: str) -> None:
        customer_id = customer_id.strip()
        cart = self._cart_repo.find_active_by_customer_id(customer_id)
        if cart is None:
            raise EntityNotFoundError(f"No active cart for customer '{customer_id}'")

        cart.clear()
        self._cart_repo.save(cart)
        self._publisher.publish_all(cart.pull_events())

        logger.info("Cart cleared", cart_id=cart.id)
