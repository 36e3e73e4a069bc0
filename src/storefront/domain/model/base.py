"""Behaviour shared by entities and aggregate roots.

These are mixins, not dataclasses: every concrete model declares its own
fields (``id``, ``created_at``, ``updated_at`` and, for aggregates,
``_events``) and is decorated with ``@dataclass(eq=False)`` so the
identity-based equality below is not replaced by field comparison.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.domain.model.events import DomainEvent
    from storefront.domain.model.value_objects import Money, Quantity


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Entity:
    """Entities are equal when their ids are equal."""

    id: str
    updated_at: datetime

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def touch(self) -> None:
        self.updated_at = utcnow()


class AggregateRoot(Entity):
    """An entity that collects domain events for the caller to dispatch.

    The aggregate only records events; the application layer drains them
    with ``pull_events()`` after a successful save.
    """

    _events: list[DomainEvent]

    def record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    @property
    def has_events(self) -> bool:
        return bool(self._events)

    def pull_events(self) -> list[DomainEvent]:
        pending, self._events = self._events, []
        return pending

    def clear_events(self) -> None:
        self._events = []


class PricedLine:
    """Money arithmetic for a product line (cart item or order line)."""

    quantity: Quantity
    unit_price: Money
    discount: Money

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def total(self) -> Money:
        return self.subtotal - self.discount
