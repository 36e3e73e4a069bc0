"""Cart aggregate — a customer's shopping cart.

The Cart is an aggregate root that owns its items exclusively.  Every
mutation goes through the Cart so it can enforce the lifecycle rule
(only ACTIVE carts change), the single-currency rule and the capacity
limit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from storefront.domain.exceptions import (
    BusinessRuleViolationError,
    InvalidOperationError,
    ValidationError,
)
from storefront.domain.model.base import AggregateRoot, Entity, PricedLine, new_id, utcnow
from storefront.domain.model.events import (
    CartAbandoned,
    CartCheckedOut,
    CartCleared,
    CartCreated,
    DomainEvent,
    ItemAdded,
    ItemQuantityUpdated,
    ItemRemoved,
)
from storefront.domain.model.value_objects import (
    Money,
    Quantity,
    default_currency,
    ensure_supported_currency,
)


class CartStatus(Enum):
    ACTIVE = "active"
    CHECKED_OUT = "checked-out"
    ABANDONED = "abandoned"


MAX_DISTINCT_ITEMS = 50


@dataclass(eq=False)
class CartItem(PricedLine, Entity):
    """One product line in a cart.

    ``discount`` defaults to zero in the unit price's currency.
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

    @staticmethod
    def create(
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
        item_id: str | None = None,
    ) -> CartItem:
        if not product_id or not str(product_id).strip():
            raise ValidationError("Product ID is required")
        if not product_name or not product_name.strip():
            raise ValidationError("Product name is required")
        return CartItem(
            id=item_id or new_id(),
            product_id=product_id,
            product_name=product_name.strip(),
            quantity=Quantity(quantity),
            unit_price=unit_price,
        )

    def increase_quantity(self, amount: int) -> None:
        self.quantity = self.quantity.increase(amount)
        self.touch()

    def update_quantity(self, new_quantity: int) -> None:
        self.quantity = Quantity(new_quantity)
        self.touch()

    def apply_discount(self, discount: Money) -> None:
        if discount.greater_than(self.subtotal):
            raise ValidationError("Discount cannot exceed subtotal")
        self.discount = discount
        self.touch()


@dataclass(eq=False)
class Cart(AggregateRoot):
    """Aggregate root for shopping carts.

    Use ``Cart.create()`` for new carts; it validates the customer and
    currency and records ``CartCreated``.  The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted carts without
    re-validating or re-emitting events.
    """

    id: str
    customer_id: str
    currency: str = field(default_factory=default_currency)
    items: list[CartItem] = field(default_factory=list)
    status: CartStatus = CartStatus.ACTIVE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False)

    # --- Factory (used for NEW carts only) ------------------------------------

    @staticmethod
    def create(customer_id: str, currency: str | None = None) -> Cart:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")

        cart = Cart(
            id=new_id(),
            customer_id=customer_id.strip(),
            currency=ensure_supported_currency(currency or default_currency()),
        )
        cart.record_event(CartCreated(cart.id, {"customer_id": cart.customer_id}))
        return cart

    # --- Item management ------------------------------------------------------

    def add_item(
        self,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
    ) -> None:
        """Add a product, or merge into the existing line for that product.

        Merging re-validates the combined quantity; a failure leaves the
        cart untouched.
        """
        self._assert_active()

        if unit_price.currency != self.currency:
            raise ValidationError(
                f"Product currency {unit_price.currency} does not match "
                f"cart currency {self.currency}"
            )

        added = Quantity(quantity)
        existing = self._find_item(product_id)

        if existing is not None:
            existing.increase_quantity(added.value)
        else:
            if len(self.items) >= MAX_DISTINCT_ITEMS:
                raise BusinessRuleViolationError(
                    f"Cart cannot contain more than {MAX_DISTINCT_ITEMS} items"
                )
            self.items.append(
                CartItem.create(product_id, product_name, added.value, unit_price)
            )

        self.record_event(
            ItemAdded(
                self.id,
                {
                    "product_id": product_id,
                    "product_name": product_name,
                    "quantity": added.value,
                    "unit_price": unit_price.amount,
                    "currency": unit_price.currency,
                },
            )
        )
        self.touch()

    def remove_item(self, product_id: str) -> None:
        self._assert_active()

        item = self._require_item(product_id)
        self.items.remove(item)

        self.record_event(ItemRemoved(self.id, {"product_id": product_id}))
        self.touch()

    def update_item_quantity(self, product_id: str, quantity: int) -> None:
        """Replace (not increment) the quantity of an existing line."""
        self._assert_active()

        item = self._require_item(product_id)
        previous = item.quantity.value
        item.update_quantity(quantity)

        self.record_event(
            ItemQuantityUpdated(
                self.id,
                {
                    "product_id": product_id,
                    "previous_quantity": previous,
                    "new_quantity": item.quantity.value,
                },
            )
        )
        self.touch()

    def clear(self) -> None:
        self._assert_active()

        removed = len(self.items)
        self.items = []

        self.record_event(CartCleared(self.id, {"removed_item_count": removed}))
        self.touch()

    # --- Lifecycle ------------------------------------------------------------

    def checkout(self) -> None:
        """Transition ACTIVE -> CHECKED_OUT.

        Called by the order-creation use case together with
        ``Order.create()``; a checked-out cart never changes again.
        """
        self._assert_active()

        if self.is_empty:
            raise BusinessRuleViolationError(
                "Cannot checkout empty cart", current_status=self.status.value
            )

        total = self.total_amount
        self.status = CartStatus.CHECKED_OUT
        self.record_event(
            CartCheckedOut(
                self.id,
                {
                    "customer_id": self.customer_id,
                    "total_amount": total.amount,
                    "currency": total.currency,
                },
            )
        )
        self.touch()

    def mark_as_abandoned(self) -> None:
        if self.status != CartStatus.ACTIVE:
            raise InvalidOperationError(
                f"Only active carts can be marked as abandoned, "
                f"current status is {self.status.value}",
                current_status=self.status.value,
            )

        self.status = CartStatus.ABANDONED
        self.record_event(CartAbandoned(self.id, {"customer_id": self.customer_id}))
        self.touch()

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def total_discount(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.discount
        return result

    @property
    def total_amount(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.total
        return result

    @property
    def total_item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def is_active(self) -> bool:
        return self.status == CartStatus.ACTIVE

    def has_product(self, product_id: str) -> bool:
        return self._find_item(product_id) is not None

    def get_item(self, product_id: str) -> CartItem | None:
        return self._find_item(product_id)

    # --- Internal helpers -----------------------------------------------------

    def _assert_active(self) -> None:
        if self.status != CartStatus.ACTIVE:
            raise InvalidOperationError(
                f"Cannot modify cart with status: {self.status.value}",
                current_status=self.status.value,
            )

    def _find_item(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def _require_item(self, product_id: str) -> CartItem:
        item = self._find_item(product_id)
        if item is None:
            raise ValidationError(
                f"Item with product ID {product_id} not found in cart"
            )
        return item
