"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartItem, CartStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonRecordFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_id(self, cart_id: str) -> Cart | None:
        for raw in self._file.load():
            if raw["id"] == cart_id:
                return self._to_domain(raw)
        return None

    def find_active_by_customer_id(self, customer_id: str) -> Cart | None:
        for raw in self._file.load():
            if (
                raw["customer_id"] == customer_id
                and raw["status"] == CartStatus.ACTIVE.value
            ):
                return self._to_domain(raw)
        return None

    def find_all_by_customer_id(self, customer_id: str) -> list[Cart]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["customer_id"] == customer_id
        ]

    def save(self, cart: Cart) -> None:
        # Pending events are never stored; they belong to the unit of work.
        self._file.upsert(self._to_raw(cart))

    def delete(self, cart_id: str) -> None:
        self._file.remove(cart_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "customer_id": cart.customer_id,
            "currency": cart.currency,
            "status": cart.status.value,
            "created_at": cart.created_at.isoformat(),
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "discount": str(item.discount.amount),
                    "created_at": item.created_at.isoformat(),
                    "updated_at": item.updated_at.isoformat(),
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        currency = raw["currency"]
        items = [
            CartItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                discount=Money(Decimal(i.get("discount", "0")), currency),
                created_at=datetime.fromisoformat(i["created_at"]),
                updated_at=datetime.fromisoformat(i["updated_at"]),
            )
            for i in raw["items"]
        ]
        return Cart(
            id=raw["id"],
            customer_id=raw["customer_id"],
            currency=currency,
            items=items,
            status=CartStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
