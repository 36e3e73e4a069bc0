"""Application service: Advance Order use case.

Moves an order one step along its fulfilment path
(confirm -> process -> ship -> deliver).
"""

from __future__ import annotations

from enum import Enum

import structlog

from storefront.application.authorization import require_permission
from storefront.application.dto import OrderDTO
from storefront.application.events import EventPublisher
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import Permission, User
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class OrderTransition(Enum):
    CONFIRM = "confirm"
    PROCESS = "process"
    SHIP = "ship"
    DELIVER = "deliver"


class AdvanceOrderHandler:

    def __init__(self, order_repo: OrderRepository, publisher: EventPublisher) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(
        self,
        actor: User,
        order_id: str,
        transition: OrderTransition,
        tracking_number: str | None = None,
    ) -> OrderDTO:
        require_permission(actor, Permission.ORDER_UPDATE)
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order with ID '{order_id}' not found")

        previous = order.status
        if transition is OrderTransition.CONFIRM:
            order.confirm()
        elif transition is OrderTransition.PROCESS:
            order.process()
        elif transition is OrderTransition.SHIP:
            order.ship(tracking_number)
        else:
            order.deliver()

        self._order_repo.save(order)
        self._publisher.publish_all(order.pull_events())

        logger.info(
            "Order status changed",
            order_id=order.id,
            from_status=previous.value,
            to_status=order.status.value,
        )
        return OrderDTO.from_order(order)
