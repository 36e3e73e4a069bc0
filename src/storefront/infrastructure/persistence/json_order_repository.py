"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonRecordFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find_by_customer_id(self, customer_id: str) -> list[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["customer_id"] == customer_id
        ]
        return sorted(orders, key=lambda o: o.created_at)

    def save(self, order: Order) -> None:
        self._file.upsert(self._to_raw(order))

    def delete(self, order_id: str) -> None:
        self._file.remove(order_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        address = order.shipping_address
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "currency": order.currency,
            "status": order.status.value,
            "tracking_number": order.tracking_number,
            "cancellation_reason": order.cancellation_reason,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "shipping_address": {
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "zip_code": address.zip_code,
                "country": address.country,
            },
            "order_lines": [
                {
                    "id": line.id,
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "discount": str(line.discount.amount),
                    "created_at": line.created_at.isoformat(),
                    "updated_at": line.updated_at.isoformat(),
                }
                for line in order.order_lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw["currency"]
        lines = [
            OrderLine(
                id=line["id"],
                product_id=line["product_id"],
                product_name=line["product_name"],
                quantity=Quantity(line["quantity"]),
                unit_price=Money(Decimal(line["unit_price"]), currency),
                discount=Money(Decimal(line.get("discount", "0")), currency),
                created_at=datetime.fromisoformat(line["created_at"]),
                updated_at=datetime.fromisoformat(line["updated_at"]),
            )
            for line in raw["order_lines"]
        ]
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            order_lines=lines,
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            currency=currency,
            status=OrderStatus(raw["status"]),
            tracking_number=raw.get("tracking_number"),
            cancellation_reason=raw.get("cancellation_reason"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
