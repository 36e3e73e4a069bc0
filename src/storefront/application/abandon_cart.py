"""Application service: Abandon Cart use case.

Marks the customer's active cart as abandoned so the next add-to-cart
starts a fresh one.
"""

from __future__ import annotations

import structlog

from storefront.application.events import EventPublisher
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class AbandonCartHandler:

    def __init__(self, cart_repo: CartRepository, publisher: EventPublisher) -> None:
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(self, customer_id: str) -> None:
        customer_id = customer_id.strip()
        cart = self._cart_repo.find_active_by_customer_id(customer_id)
        if cart is None:
            raise EntityNotFoundError(f"No active cart for customer '{customer_id}'")

        cart.mark_as_abandoned()
        self._cart_repo.save(cart)
        self._publisher.publish_all(cart.pull_events())

        logger.info("Cart abandoned", cart_id=cart.id, item_count=cart.total_item_count)
