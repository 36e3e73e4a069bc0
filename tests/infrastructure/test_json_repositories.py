"""Round-trip tests for the JSON file repositories."""

import json
from decimal import Decimal

from storefront.domain.model.cart import Cart, CartStatus
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.user import User, UserRole
from storefront.domain.model.value_objects import Money, ProductCategory, ShippingAddress
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import JsonProductRepository
from storefront.infrastructure.persistence.json_user_repository import JsonUserRepository


def _product(name: str, sku: str, category: str = "Tools") -> Product:
    return Product.create(
        name=name,
        description=f"{name} for everyday use",
        sku=sku,
        price=Money.of("12.34", "EUR"),
        category=ProductCategory(category),
        stock_quantity=7,
    )


class TestJsonCartRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "carts.json"
        JsonCartRepository(path)
        assert json.loads(path.read_text()) == []

    def test_round_trip(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart.create("c1", "CAD")
        cart.add_item("p1", "Widget", 3, Money.of("9.99", "CAD"))
        cart.items[0].apply_discount(Money.of("1.50", "CAD"))
        repo.save(cart)

        loaded = repo.get_by_id(cart.id)

        assert loaded == cart
        assert loaded.currency == "CAD"
        assert loaded.items[0].quantity.value == 3
        assert loaded.items[0].unit_price == Money.of("9.99", "CAD")
        assert loaded.items[0].discount == Money.of("1.50", "CAD")
        assert loaded.total_amount == Money.of("28.47", "CAD")
        assert loaded.created_at == cart.created_at
        assert not loaded.has_events

    def test_amounts_stored_as_strings(self, tmp_path):
        path = tmp_path / "carts.json"
        repo = JsonCartRepository(path)
        cart = Cart.create("c1")
        cart.add_item("p1", "Widget", 1, Money.of("0.10"))
        repo.save(cart)
        raw = json.loads(path.read_text())
        assert raw[0]["items"][0]["unit_price"] == "0.10"

    def test_save_is_upsert(self, tmp_path):
        path = tmp_path / "carts.json"
        repo = JsonCartRepository(path)
        cart = Cart.create("c1")
        repo.save(cart)
        cart.add_item("p1", "Widget", 1, Money.of("1"))
        repo.save(cart)
        assert len(json.loads(path.read_text())) == 1

    def test_active_cart_lookup(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        old = Cart.create("c1")
        old.mark_as_abandoned()
        current = Cart.create("c1")
        repo.save(old)
        repo.save(current)

        assert repo.find_active_by_customer_id("c1").id == current.id
        assert repo.find_active_by_customer_id("c2") is None
        assert {c.status for c in repo.find_all_by_customer_id("c1")} == {
            CartStatus.ABANDONED,
            CartStatus.ACTIVE,
        }

    def test_delete(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart.create("c1")
        repo.save(cart)
        repo.delete(cart.id)
        repo.delete("unknown")
        assert repo.get_by_id(cart.id) is None


class TestJsonOrderRepository:

    def _order(self, customer: str = "c1") -> Order:
        return Order.create(
            customer,
            [OrderLine.create("p1", "Widget", 2, Money.of("5.25", "USD"), discount=Money.of("0.50", "USD"))],
            ShippingAddress("1 Main St", "Boston", "MA", "02101", "US"),
            "USD",
        )

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        order.confirm()
        order.process()
        order.ship("1Z999")
        repo.save(order)

        loaded = repo.get_by_id(order.id)

        assert loaded.status == OrderStatus.SHIPPED
        assert loaded.tracking_number == "1Z999"
        assert loaded.shipping_address == order.shipping_address
        assert loaded.total_amount == Money.of("10.00", "USD")
        assert loaded.order_lines[0].id == order.order_lines[0].id
        assert loaded.order_lines[0].discount.amount == Decimal("0.50")

    def test_cancellation_reason_persisted(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        order.cancel("out of budget")
        repo.save(order)
        assert repo.get_by_id(order.id).cancellation_reason == "out of budget"

    def test_find_by_customer(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second, other = self._order(), self._order(), self._order("c2")
        for o in (first, second, other):
            repo.save(o)
        assert [o.id for o in repo.find_by_customer_id("c1")] == [first.id, second.id]


class TestJsonProductRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product("Hammer", "HAM-001")
        product.add_image("https://img/hammer.png")
        product.set_metadata("weight", "1kg")
        product.deactivate()
        repo.save(product)

        loaded = repo.get_by_id(product.id)

        assert loaded.name == "Hammer"
        assert loaded.sku == product.sku
        assert loaded.price == Money.of("12.34", "EUR")
        assert loaded.category == ProductCategory("Tools")
        assert loaded.stock_quantity == 7
        assert not loaded.is_active
        assert loaded.image_urls == ["https://img/hammer.png"]
        assert loaded.metadata == {"weight": "1kg"}

    def test_queries(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        hammer = _product("Hammer", "HAM-001")
        lamp = _product("Desk Lamp", "LAM-001", category="Home Office")
        repo.save(hammer)
        repo.save(lamp)

        assert repo.get_by_sku("ham-001").id == hammer.id
        assert repo.get_by_sku("NOPE-1") is None
        assert [p.id for p in repo.find_by_category("home-office")] == [lamp.id]
        assert [p.id for p in repo.search("LAMP")] == [lamp.id]
        assert [p.id for p in repo.list_all(limit=1, offset=1)] == [lamp.id]


class TestJsonUserRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        user = User.register("Ann@Example.com", "secret1", roles=["admin", "customer"])
        repo.save(user)

        loaded = repo.get_by_email("ANN@example.com")

        assert loaded.id == user.id
        assert loaded.roles == [UserRole.ADMIN, UserRole.CUSTOMER]
        assert loaded.verify_password("secret1")
        assert repo.list_all() == [user]
