"""
Domain events base classes.

Domain events record something that happened in the domain (a license was
issued, a seat checked in). Publishing them keeps side effects such as audit
logging out of the request path.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Subclasses are frozen dataclasses that add their payload fields and build
    instances from ``envelope()`` plus those fields.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    @classmethod
    def envelope(cls, aggregate_id, occurred_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Build the base constructor arguments for a new event."""
        return {
            "event_id": uuid4(),
            "occurred_at": occurred_at or datetime.now(timezone.utc),
            "aggregate_id": str(aggregate_id),
            "event_type": cls.__name__,
        }

    def payload(self) -> Dict[str, Any]:
        """Event specific attributes, overridden by subclasses."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        data = {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
        }
        data.update(self.payload())
        return data


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
