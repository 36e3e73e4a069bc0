"""In-process event bus.

Subscribers are plain callables registered per event type.  Delivery is
synchronous and in registration order.  A failing subscriber is logged
and skipped; the remaining subscribers still receive the event.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable

from storefront.application.events import EventPublisher
from storefront.domain.model.events import DomainEvent
from storefront.infrastructure.logging import get_logger

logger = get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]

WILDCARD = "*"


class InMemoryEventBus(EventPublisher):

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Register *handler* for *event_type* (``"*"`` receives everything)."""
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        logger.info(
            "Domain event published",
            event_type=event.event_type,
            aggregate_id=event.aggregate_id,
            event_id=event.event_id,
        )
        for handler in [*self._handlers[event.event_type], *self._handlers[WILDCARD]]:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Event handler failed",
                    event_type=event.event_type,
                    event_id=event.event_id,
                    handler=getattr(handler, "__qualname__", repr(handler)),
                )
