"""Domain events raised by the Cart and Order aggregates.

Events are immutable records of something that already happened.  The
aggregate appends them to its pending list; the application layer hands
them to an ``EventPublisher`` once the aggregate has been saved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar

from storefront.domain.model.base import new_id, utcnow


@dataclass(frozen=True)
class DomainEvent:
    aggregate_id: str
    event_data: dict[str, Any] = field(default_factory=dict)
    event_id: str = field(default_factory=new_id)
    occurred_on: datetime = field(default_factory=utcnow)

    event_type: ClassVar[str] = "DomainEvent"

    def to_dict(self) -> dict[str, Any]:
        """Plain record form, suitable for logging or a message bus."""
        return {
            "eventId": self.event_id,
            "occurredOn": self.occurred_on.isoformat(),
            "aggregateId": self.aggregate_id,
            "eventType": self.event_type,
            "eventData": {
                key: str(value) if isinstance(value, Decimal) else value
                for key, value in self.event_data.items()
            },
        }


# --- Cart -----------------------------------------------------------------


class CartCreated(DomainEvent):
    event_type = "CartCreated"


class ItemAdded(DomainEvent):
    event_type = "ItemAdded"


class ItemRemoved(DomainEvent):
    event_type = "ItemRemoved"


class ItemQuantityUpdated(DomainEvent):
    event_type = "ItemQuantityUpdated"


class CartCleared(DomainEvent):
    event_type = "CartCleared"


class CartCheckedOut(DomainEvent):
    event_type = "CartCheckedOut"


class CartAbandoned(DomainEvent):
    event_type = "CartAbandoned"


# --- Order ----------------------------------------------------------------


class OrderCreated(DomainEvent):
    event_type = "OrderCreated"


class OrderConfirmed(DomainEvent):
    event_type = "OrderConfirmed"


class OrderProcessing(DomainEvent):
    event_type = "OrderProcessing"


class OrderShipped(DomainEvent):
    event_type = "OrderShipped"


class OrderDelivered(DomainEvent):
    event_type = "OrderDelivered"


class OrderCancelled(DomainEvent):
    event_type = "OrderCancelled"
