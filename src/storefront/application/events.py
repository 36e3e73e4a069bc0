"""Outbound port for domain events.

Handlers drain ``aggregate.pull_events()`` only after the repository
save succeeded, then hand the batch to an ``EventPublisher``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from storefront.domain.model.events import DomainEvent


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Deliver one event to its subscribers."""

    def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.publish(event)
