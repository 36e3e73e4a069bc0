"""Application service: List Customer Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.repository.order_repository import OrderRepository


class ListCustomerOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, customer_id: str) -> list[OrderDTO]:
        customer_id = customer_id.strip()
        return [
            OrderDTO.from_order(order)
            for order in self._order_repo.find_by_customer_id(customer_id)
        ]
