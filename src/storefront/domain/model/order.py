"""Order aggregate — the result of checking out a cart.

The Order is an aggregate root that owns its order lines.  The line set
is fixed at creation; afterwards only the status moves, one step at a
time, along PENDING -> CONFIRMED -> PROCESSING -> SHIPPED -> DELIVERED,
with CANCELLED reachable from PENDING or CONFIRMED.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from storefront.domain.exceptions import (
    BusinessRuleViolationError,
    InvalidOperationError,
    ValidationError,
)
from storefront.domain.model.base import AggregateRoot, Entity, PricedLine, new_id, utcnow
from storefront.domain.model.events import (
    DomainEvent,
    OrderCancelled,
    OrderConfirmed,
    OrderCreated,
    OrderDelivered,
    OrderProcessing,
    OrderShipped,
)
from storefront.domain.model.value_objects import (
    Money,
    Quantity,
    ShippingAddress,
    ensure_supported_currency,
)

if TYPE_CHECKING:
    from storefront.domain.model.cart import CartItem


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def can_be_cancelled(self) -> bool:
        return self in (OrderStatus.PENDING, OrderStatus.CONFIRMED)


@dataclass(eq=False)
class OrderLine(PricedLine, Entity):
    """Captures the product, quantity and price snapshot at checkout.

    Lines expose no mutators; the quantity, price and discount recorded
    at creation are what the customer is charged.
    """

    id: str
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    discount: Money | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if self.discount is None:
            self.discount = Money.zero(self.unit_price.currency)
        elif self.discount.currency != self.unit_price.currency:
            raise ValidationError(
                f"Discount currency {self.discount.currency} does not match "
                f"price currency {self.unit_price.currency}"
            )
        if self.discount.greater_than(self.subtotal):
            raise ValidationError("Discount cannot exceed subtotal")

    @staticmethod
    def create(
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
        discount: Money | None = None,
        line_id: str | None = None,
    ) -> OrderLine:
        if not product_id or not str(product_id).strip():
            raise ValidationError("Product ID is required")
        if not product_name or not product_name.strip():
            raise ValidationError("Product name is required")
        return OrderLine(
            id=line_id or new_id(),
            product_id=product_id,
            product_name=product_name.strip(),
            quantity=Quantity(quantity),
            unit_price=unit_price,
            discount=discount,
        )

    @staticmethod
    def from_cart_item(item: CartItem) -> OrderLine:
        return OrderLine.create(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity.value,
            unit_price=item.unit_price,
            discount=item.discount,
        )


@dataclass(eq=False)
class Order(AggregateRoot):
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    creation rules before anything is recorded.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str
    customer_id: str
    order_lines: list[OrderLine]
    shipping_address: ShippingAddress
    currency: str
    status: OrderStatus = OrderStatus.PENDING
    tracking_number: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        order_lines: list[OrderLine],
        shipping_address: ShippingAddress,
        currency: str,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")

        if not order_lines:
            raise ValidationError("Order must have at least one line item")

        currency = ensure_supported_currency(currency)

        for line in order_lines:
            if line.unit_price.currency != currency:
                raise ValidationError(
                    f"All order lines must be priced in {currency}, "
                    f"line for {line.product_name} is in {line.unit_price.currency}"
                )

        order = Order(
            id=new_id(),
            customer_id=customer_id.strip(),
            order_lines=list(order_lines),
            shipping_address=shipping_address,
            currency=currency,
        )
        total = order.total_amount
        order.record_event(
            OrderCreated(
                order.id,
                {
                    "customer_id": order.customer_id,
                    "total_amount": total.amount,
                    "currency": total.currency,
                },
            )
        )
        return order

    # --- State transitions ----------------------------------------------------

    def confirm(self) -> None:
        """Transition PENDING -> CONFIRMED."""
        self._advance(OrderStatus.PENDING, OrderStatus.CONFIRMED)
        self.record_event(OrderConfirmed(self.id))

    def process(self) -> None:
        """Transition CONFIRMED -> PROCESSING."""
        self._advance(OrderStatus.CONFIRMED, OrderStatus.PROCESSING)
        self.record_event(OrderProcessing(self.id))

    def ship(self, tracking_number: str | None = None) -> None:
        """Transition PROCESSING -> SHIPPED, recording the tracking number."""
        if tracking_number is not None:
            tracking_number = tracking_number.strip() or None
        self._advance(OrderStatus.PROCESSING, OrderStatus.SHIPPED)
        self.tracking_number = tracking_number
        self.record_event(OrderShipped(self.id, {"tracking_number": tracking_number}))

    def deliver(self) -> None:
        """Transition SHIPPED -> DELIVERED."""
        self._advance(OrderStatus.SHIPPED, OrderStatus.DELIVERED)
        self.record_event(OrderDelivered(self.id))

    def cancel(self, reason: str) -> None:
        """Transition PENDING|CONFIRMED -> CANCELLED.

        Once processing has started the order can no longer be
        cancelled; that is a business rule, not a state-machine gap.
        """
        if not self.status.can_be_cancelled:
            raise BusinessRuleViolationError(
                f"Cannot cancel order with status: {self.status.value}",
                current_status=self.status.value,
            )
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason
        self.record_event(OrderCancelled(self.id, {"reason": reason}))
        self.touch()

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.currency)
        for line in self.order_lines:
            result = result + line.subtotal
        return result

    @property
    def total_discount(self) -> Money:
        result = Money.zero(self.currency)
        for line in self.order_lines:
            result = result + line.discount
        return result

    @property
    def total_amount(self) -> Money:
        result = Money.zero(self.currency)
        for line in self.order_lines:
            result = result + line.total
        return result

    @property
    def total_item_count(self) -> int:
        return sum(line.quantity.value for line in self.order_lines)

    # --- Internal helpers -----------------------------------------------------

    def _advance(self, expected: OrderStatus, target: OrderStatus) -> None:
        if self.status != expected:
            raise InvalidOperationError(
                f"Cannot move order to {target.value} — current status is "
                f"{self.status.value}, expected {expected.value}",
                current_status=self.status.value,
            )
        self.status = target
        self.touch()
