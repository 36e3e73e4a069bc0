"""Application service: Get Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.domain.repository.cart_repository import CartRepository


class GetCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, customer_id: str) -> CartDTO | None:
        """Return the customer's active cart, or None if they have none."""
        customer_id = customer_id.strip()
        cart = self._cart_repo.find_active_by_customer_id(customer_id)
        if cart is None:
            return None
        return CartDTO.from_cart(cart)
