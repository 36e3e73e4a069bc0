"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Nothing here is
cached: each factory call builds a fresh object from the current
environment, and callers pass what they built into the handlers.
"""

from __future__ import annotations

from storefront.domain.model.value_objects import set_supported_currencies
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.logging import configure_logging, get_logger
from storefront.infrastructure.messaging.event_bus import InMemoryEventBus
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)

logger = get_logger(__name__)


def settings() -> Settings:
    return load_settings()


def init_app() -> Settings:
    """Read settings, configure logging and apply the currency policy."""
    current = settings()
    configure_logging(current)
    set_supported_currencies(current.currencies, default=current.default_currency)
    logger.debug(
        "Application configured",
        environment=current.environment,
        data_dir=str(current.data_dir),
        currencies=current.currencies,
        default_currency=current.default_currency,
    )
    return current


# --- Repositories ---------------------------------------------------------


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().data_dir / "carts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def user_repository() -> JsonUserRepository:
    return JsonUserRepository(settings().data_dir / "users.json")


# --- Messaging ------------------------------------------------------------


def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()
