"""Application service: Create Order use case (checkout).

This is the only place that coordinates two aggregates: the Cart is
checked out and an Order is built from its lines.  Both are validated
in memory first and only then persisted, so a rejected checkout leaves
storage untouched.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, ShippingAddressSpec
from storefront.application.events import EventPublisher
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(
        self,
        customer_id: str,
        cart_id: str,
        shipping_address: ShippingAddressSpec,
    ) -> OrderDTO:
        """Check out a cart into a new pending order.

        Steps:
        1. Load the cart and make sure it belongs to the customer.
        2. Validate the shipping address.
        3. Check the cart out (fails on empty or non-active carts).
        4. Build order lines from the cart's items (price snapshot).
        5. Persist order then cart, and publish their events.
        """
        customer_id = customer_id.strip()
        cart = self._cart_repo.get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart with ID '{cart_id}' not found")
        if cart.customer_id != customer_id:
            raise ValidationError("Cart does not belong to customer")

        address = shipping_address.to_value_object()

        cart.checkout()

        order_lines = [OrderLine.from_cart_item(item) for item in cart.items]
        order = Order.create(
            customer_id=customer_id,
            order_lines=order_lines,
            shipping_address=address,
            currency=cart.currency,
        )

        self._order_repo.save(order)
        self._cart_repo.save(cart)
        self._publisher.publish_all(order.pull_events())
        self._publisher.publish_all(cart.pull_events())

        logger.info(
            "Order created",
            order_id=order.id,
            cart_id=cart.id,
            customer_id=customer_id,
            total=str(order.total_amount),
        )
        return OrderDTO.from_order(order)
