"""Unit tests for the Cart aggregate and its business rules."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import (
    BusinessRuleViolationError,
    InvalidOperationError,
    ValidationError,
)
from storefront.domain.model.cart import MAX_DISTINCT_ITEMS, Cart, CartItem, CartStatus
from storefront.domain.model.value_objects import Money, set_supported_currencies


def _cad(amount: str) -> Money:
    return Money.of(amount, "CAD")


def _cart_with_widget(qty: int = 2) -> Cart:
    cart = Cart.create("c1", "CAD")
    cart.add_item("p1", "Widget", qty, _cad("10"))
    return cart


class TestCartCreation:

    def test_happy_path(self):
        cart = Cart.create("c1", "cad")
        assert cart.customer_id == "c1"
        assert cart.currency == "CAD"
        assert cart.status == CartStatus.ACTIVE
        assert cart.is_empty
        assert cart.id

    def test_records_cart_created(self):
        cart = Cart.create("c1")
        assert [e.event_type for e in cart.events] == ["CartCreated"]
        assert cart.events[0].event_data == {"customer_id": "c1"}
        assert cart.events[0].aggregate_id == cart.id

    def test_customer_required(self):
        with pytest.raises(ValidationError, match="Customer ID is required"):
            Cart.create("  ")

    def test_unsupported_currency(self):
        with pytest.raises(ValidationError, match="Unsupported currency"):
            Cart.create("c1", "JPY")

    def test_default_currency_comes_from_policy(self):
        set_supported_currencies(["USD", "EUR"], default="usd")
        cart = Cart.create("c1")
        assert cart.currency == "USD"
        assert cart.total_amount == Money.zero("USD")


class TestAddItem:

    def test_same_product_merges_into_one_line(self):
        cart = Cart.create("c1", "CAD")
        cart.add_item("p1", "Widget", 2, _cad("10"))
        cart.add_item("p1", "Widget", 3, _cad("10"))

        assert len(cart.items) == 1
        assert cart.items[0].quantity.value == 5
        assert cart.subtotal == _cad("50")
        assert cart.total_amount == _cad("50")
        assert cart.total_discount == _cad("0")
        assert [e.event_type for e in cart.events] == [
            "CartCreated",
            "ItemAdded",
            "ItemAdded",
        ]

    def test_item_added_payload(self):
        cart = _cart_with_widget(qty=2)
        data = cart.events[-1].event_data
        assert data["product_id"] == "p1"
        assert data["quantity"] == 2
        assert data["unit_price"] == Decimal("10")
        assert data["currency"] == "CAD"

    def test_distinct_products_are_separate_lines(self):
        cart = _cart_with_widget()
        cart.add_item("p2", "Gadget", 1, _cad("4.50"))
        assert len(cart.items) == 2
        assert cart.total_item_count == 3
        assert cart.total_amount == _cad("24.50")

    def test_merge_past_max_quantity_leaves_cart_unchanged(self):
        cart = _cart_with_widget(qty=990)
        events_before = len(cart.events)
        with pytest.raises(ValidationError, match="cannot exceed 999"):
            cart.add_item("p1", "Widget", 10, _cad("10"))
        assert cart.items[0].quantity.value == 990
        assert len(cart.events) == events_before

    def test_currency_mismatch_rejected(self):
        cart = Cart.create("c1", "CAD")
        with pytest.raises(ValidationError, match="does not match cart currency"):
            cart.add_item("p1", "Widget", 1, Money.of("10", "USD"))
        assert cart.is_empty

    def test_invalid_quantity_rejected(self):
        cart = Cart.create("c1")
        with pytest.raises(ValidationError, match="at least 1"):
            cart.add_item("p1", "Widget", 0, _cad("10"))

    def test_product_name_required(self):
        cart = Cart.create("c1")
        with pytest.raises(ValidationError, match="Product name is required"):
            cart.add_item("p1", " ", 1, _cad("10"))

    def test_capacity_limit(self):
        cart = Cart.create("c1")
        for i in range(MAX_DISTINCT_ITEMS):
            cart.add_item(f"p{i}", f"Product {i}", 1, _cad("1"))
        before = [item.product_id for item in cart.items]

        with pytest.raises(BusinessRuleViolationError, match="more than 50 items"):
            cart.add_item("p-extra", "One Too Many", 1, _cad("1"))

        assert [item.product_id for item in cart.items] == before

    def test_existing_product_can_still_merge_at_capacity(self):
        cart = Cart.create("c1")
        for i in range(MAX_DISTINCT_ITEMS):
            cart.add_item(f"p{i}", f"Product {i}", 1, _cad("1"))
        cart.add_item("p0", "Product 0", 1, _cad("1"))
        assert cart.get_item("p0").quantity.value == 2


class TestRemoveAndUpdate:

    def test_remove_item(self):
        cart = _cart_with_widget()
        cart.remove_item("p1")
        assert cart.is_empty
        assert cart.events[-1].event_type == "ItemRemoved"
        assert cart.events[-1].event_data == {"product_id": "p1"}

    def test_remove_unknown_item(self):
        cart = _cart_with_widget()
        with pytest.raises(ValidationError, match="not found in cart"):
            cart.remove_item("nope")

    def test_update_quantity_replaces(self):
        cart = _cart_with_widget(qty=2)
        cart.update_item_quantity("p1", 7)
        assert cart.get_item("p1").quantity.value == 7
        event = cart.events[-1]
        assert event.event_type == "ItemQuantityUpdated"
        assert event.event_data["previous_quantity"] == 2
        assert event.event_data["new_quantity"] == 7

    def test_update_unknown_item(self):
        cart = Cart.create("c1")
        with pytest.raises(ValidationError, match="not found in cart"):
            cart.update_item_quantity("p1", 2)

    def test_update_to_invalid_quantity(self):
        cart = _cart_with_widget(qty=2)
        with pytest.raises(ValidationError):
            cart.update_item_quantity("p1", 0)
        assert cart.get_item("p1").quantity.value == 2

    def test_clear(self):
        cart = _cart_with_widget()
        cart.add_item("p2", "Gadget", 1, _cad("1"))
        cart.clear()
        assert cart.is_empty
        assert cart.events[-1].event_type == "CartCleared"
        assert cart.events[-1].event_data == {"removed_item_count": 2}


class TestCheckout:

    def test_checkout(self):
        cart = _cart_with_widget(qty=3)
        cart.checkout()
        assert cart.status == CartStatus.CHECKED_OUT
        assert not cart.is_active
        event = cart.events[-1]
        assert event.event_type == "CartCheckedOut"
        assert event.event_data["total_amount"] == Decimal("30")
        assert event.event_data["customer_id"] == "c1"

    def test_empty_cart_cannot_checkout(self):
        cart = Cart.create("c1")
        with pytest.raises(BusinessRuleViolationError, match="Cannot checkout empty cart") as exc:
            cart.checkout()
        assert exc.value.current_status == "active"
        assert cart.status == CartStatus.ACTIVE

    def test_checkout_twice_rejected(self):
        cart = _cart_with_widget()
        cart.checkout()
        with pytest.raises(InvalidOperationError):
            cart.checkout()

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda c: c.add_item("p2", "Gadget", 1, _cad("1")),
            lambda c: c.remove_item("p1"),
            lambda c: c.update_item_quantity("p1", 5),
            lambda c: c.clear(),
        ],
        ids=["add", "remove", "update", "clear"],
    )
    def test_checked_out_cart_is_frozen(self, mutate):
        cart = _cart_with_widget(qty=2)
        cart.checkout()
        events_before = len(cart.events)

        with pytest.raises(InvalidOperationError, match="Cannot modify cart with status: checked-out") as exc:
            mutate(cart)

        assert exc.value.current_status == "checked-out"
        assert len(cart.items) == 1
        assert cart.items[0].quantity.value == 2
        assert len(cart.events) == events_before


class TestAbandon:

    def test_mark_as_abandoned(self):
        cart = _cart_with_widget()
        cart.mark_as_abandoned()
        assert cart.status == CartStatus.ABANDONED
        assert cart.events[-1].event_type == "CartAbandoned"

    def test_abandoned_cart_rejects_changes(self):
        cart = _cart_with_widget()
        cart.mark_as_abandoned()
        with pytest.raises(InvalidOperationError):
            cart.add_item("p2", "Gadget", 1, _cad("1"))

    def test_checked_out_cart_cannot_be_abandoned(self):
        cart = _cart_with_widget()
        cart.checkout()
        with pytest.raises(InvalidOperationError, match="Only active carts"):
            cart.mark_as_abandoned()


class TestCartItem:

    def test_discount_defaults_to_zero(self):
        item = CartItem.create("p1", "Widget", 2, _cad("10"))
        assert item.discount == _cad("0")
        assert item.total == _cad("20")

    def test_apply_discount(self):
        item = CartItem.create("p1", "Widget", 2, _cad("10"))
        item.apply_discount(_cad("5"))
        assert item.total == _cad("15")

    def test_discount_cannot_exceed_subtotal(self):
        item = CartItem.create("p1", "Widget", 1, _cad("10"))
        with pytest.raises(ValidationError, match="cannot exceed subtotal"):
            item.apply_discount(_cad("10.01"))

    def test_entity_equality_by_id(self):
        a = CartItem.create("p1", "Widget", 1, _cad("10"), item_id="same")
        b = CartItem.create("p2", "Gadget", 5, _cad("3"), item_id="same")
        assert a == b
        assert a != CartItem.create("p1", "Widget", 1, _cad("10"))


class TestEvents:

    def test_pull_events_drains(self):
        cart = _cart_with_widget()
        pulled = cart.pull_events()
        assert [e.event_type for e in pulled] == ["CartCreated", "ItemAdded"]
        assert not cart.has_events
        assert cart.events == ()

    def test_clear_events(self):
        cart = _cart_with_widget()
        cart.clear_events()
        assert not cart.has_events
