"""Application service: Cancel Order use case.

Only PENDING and CONFIRMED orders can be cancelled; the Order aggregate
enforces that rule and the error propagates to the caller unchanged.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_permission
from storefront.application.events import EventPublisher
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import Permission, User
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository, publisher: EventPublisher) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(self, actor: User, order_id: str, reason: str) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order with ID '{order_id}' not found")

        # Customers may cancel their own orders without order:update.
        if actor.id != order.customer_id:
            require_permission(actor, Permission.ORDER_UPDATE)

        order.cancel(reason)
        self._order_repo.save(order)
        self._publisher.publish_all(order.pull_events())

        logger.info("Order cancelled", order_id=order.id, reason=reason)
