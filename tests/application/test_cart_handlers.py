"""Integration tests for the cart use cases.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from storefront.application.abandon_cart import AbandonCartHandler
from storefront.application.add_item_to_cart import AddItemToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.get_cart import GetCartHandler
from storefront.application.remove_item_from_cart import RemoveItemFromCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.cart import CartStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, ProductCategory
from tests.fakes import FakeCartRepository, FakeProductRepository, RecordingPublisher


def _product(product_id: str, name: str, price: str, currency: str = "CAD", stock: int = 10) -> Product:
    return Product.create(
        name=name,
        description=f"{name} description",
        sku=f"SKU-{product_id}",
        price=Money.of(price, currency),
        category=ProductCategory("General"),
        stock_quantity=stock,
        product_id=product_id,
    )


def _setup():
    products = FakeProductRepository([
        _product("p1", "Widget", "10.00"),
        _product("p2", "Gadget", "4.50"),
        _product("p3", "Dollar Thing", "1.00", currency="USD"),
        _product("p4", "Sold Out", "2.00", stock=0),
    ])
    carts = FakeCartRepository()
    publisher = RecordingPublisher()
    return carts, products, publisher


def _add(carts, products, publisher, product_id="p1", quantity=1, customer="c1"):
    handler = AddItemToCartHandler(carts, products, publisher)
    return handler.handle(customer, product_id, quantity)


class TestAddItemToCart:

    def test_creates_cart_in_product_currency(self):
        carts, products, publisher = _setup()
        dto = _add(carts, products, publisher, "p1", 2)

        assert dto.customer_id == "c1"
        assert dto.currency == "CAD"
        assert dto.status == "active"
        assert dto.total_amount == "20.00 CAD"
        assert publisher.event_types == ["CartCreated", "ItemAdded"]
        assert carts.find_active_by_customer_id("c1").id == dto.id

    def test_reuses_active_cart(self):
        carts, products, publisher = _setup()
        first = _add(carts, products, publisher, "p1", 2)
        second = _add(carts, products, publisher, "p1", 3)

        assert second.id == first.id
        assert second.items[0].quantity == 5
        assert second.subtotal == "50.00 CAD"
        assert publisher.event_types == ["CartCreated", "ItemAdded", "ItemAdded"]

    def test_padded_customer_id_reuses_active_cart(self):
        carts, products, publisher = _setup()
        first = _add(carts, products, publisher, "p1", 2, customer=" c1 ")
        second = _add(carts, products, publisher, "p1", 3, customer=" c1 ")

        assert second.id == first.id
        assert second.customer_id == "c1"
        assert len(second.items) == 1
        assert second.items[0].quantity == 5
        assert len(carts.find_all_by_customer_id("c1")) == 1
        assert carts.find_active_by_customer_id("c1").id == first.id

    def test_padded_and_plain_customer_ids_share_a_cart(self):
        carts, products, publisher = _setup()
        first = _add(carts, products, publisher, "p1", customer="c1")
        second = _add(carts, products, publisher, "p2", customer="\tc1 ")

        assert second.id == first.id
        assert GetCartHandler(carts).handle(" c1").id == first.id

    def test_events_are_drained_after_publish(self):
        carts, products, publisher = _setup()
        dto = _add(carts, products, publisher)
        assert not carts.get_by_id(dto.id).has_events

    def test_unknown_product(self):
        carts, products, publisher = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            _add(carts, products, publisher, "nope")
        assert publisher.published == []

    def test_unavailable_product(self):
        carts, products, publisher = _setup()
        with pytest.raises(BusinessRuleViolationError, match="'Sold Out' is not available"):
            _add(carts, products, publisher, "p4")

    def test_currency_mismatch_with_existing_cart(self):
        carts, products, publisher = _setup()
        _add(carts, products, publisher, "p1")
        with pytest.raises(ValidationError, match="does not match cart currency"):
            _add(carts, products, publisher, "p3")


class TestCartMaintenance:

    def test_remove_item(self):
        carts, products, publisher = _setup()
        _add(carts, products, publisher, "p1")
        _add(carts, products, publisher, "p2")

        dto = RemoveItemFromCartHandler(carts, publisher).handle("c1", "p1")

        assert [item.product_id for item in dto.items] == ["p2"]
        assert publisher.event_types[-1] == "ItemRemoved"

    def test_update_quantity(self):
        carts, products, publisher = _setup()
        _add(carts, products, publisher, "p2", 1)

        dto = UpdateCartItemHandler(carts, publisher).handle("c1", "p2", 4)

        assert dto.items[0].quantity == 4
        assert dto.total_amount == "18.00 CAD"
        assert publisher.event_types[-1] == "ItemQuantityUpdated"

    def test_clear(self):
        carts, products, publisher = _setup()
        _add(carts, products, publisher, "p1")

        ClearCartHandler(carts, publisher).handle("c1")

        assert carts.find_active_by_customer_id("c1").is_empty
        assert publisher.event_types[-1] == "CartCleared"

    def test_abandon(self):
        carts, products, publisher = _setup()
        dto = _add(carts, products, publisher, "p1")

        AbandonCartHandler(carts, publisher).handle("c1")

        assert carts.get_by_id(dto.id).status == CartStatus.ABANDONED
        assert carts.find_active_by_customer_id("c1") is None
        assert publisher.event_types[-1] == "CartAbandoned"

    def test_new_cart_after_abandon(self):
        carts, products, publisher = _setup()
        first = _add(carts, products, publisher, "p1")
        AbandonCartHandler(carts, publisher).handle("c1")

        second = _add(carts, products, publisher, "p1")

        assert second.id != first.id
        assert len(carts.find_all_by_customer_id("c1")) == 2

    @pytest.mark.parametrize(
        "call",
        [
            lambda carts, pub: RemoveItemFromCartHandler(carts, pub).handle("ghost", "p1"),
            lambda carts, pub: UpdateCartItemHandler(carts, pub).handle("ghost", "p1", 2),
            lambda carts, pub: ClearCartHandler(carts, pub).handle("ghost"),
            lambda carts, pub: AbandonCartHandler(carts, pub).handle("ghost"),
        ],
        ids=["remove", "update", "clear", "abandon"],
    )
    def test_no_active_cart(self, call):
        carts, _, publisher = _setup()
        with pytest.raises(EntityNotFoundError, match="No active cart for customer 'ghost'"):
            call(carts, publisher)


class TestGetCart:

    def test_returns_none_without_cart(self):
        carts, _, _ = _setup()
        assert GetCartHandler(carts).handle("c1") is None

    def test_returns_active_cart(self):
        carts, products, publisher = _setup()
        _add(carts, products, publisher, "p1", 3)
        dto = GetCartHandler(carts).handle("c1")
        assert dto.total_item_count == 3
