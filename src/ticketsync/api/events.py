"""Event manager for Server-Sent Events (SSE)."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from ticketsync.tickets import CacheEvent


class EventType(str, Enum):
    """Types of events that can be emitted."""

    ISSUES = "issues"
    COMMENTS = "comments"
    HEARTBEAT = "heartbeat"


_KIND_EVENT_TYPES = {
    "issue": EventType.ISSUES,
    "comment": EventType.COMMENTS,
}


@dataclass
class Event:
    """An event to be sent via SSE."""

    event_type: EventType
    data: dict[str, Any]
    namespace: str | None = None

    def to_sse(self) -> str:
        """Convert to SSE format."""
        return f"event: {self.event_type.value}\ndata: {json.dumps(self.data)}\n\n"


@dataclass
class Subscriber:
    """A subscriber to the event stream."""

    id: str
    queue: asyncio.Queue[Event]
    namespace: str | None = None  # None means subscribe to all namespaces

    @classmethod
    def create(cls, namespace: str | None = None) -> Subscriber:
        """Create a new subscriber."""
        return cls(id=str(uuid4()), queue=asyncio.Queue(), namespace=namespace)

    def accepts(self, event: Event) -> bool:
        return self.namespace is None or self.namespace == event.namespace


@dataclass
class EventManager:
    """Manager for SSE events."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)
    _heartbeat_interval: int = 30  # seconds

    def subscribe(self, namespace: str | None = None) -> Subscriber:
        """Subscribe a client to events.

        Args:
            namespace: Optional namespace to filter events. None means all namespaces.

        Returns:
            Subscriber instance for receiving events.
        """
        subscriber = Subscriber.create(namespace)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        """Unsubscribe a client from events."""
        self._subscribers.pop(subscriber_id, None)

    def emit_sync(self, event: Event) -> None:
        """Emit an event synchronously (for use in non-async contexts)."""
        for subscriber in list(self._subscribers.values()):
            if subscriber.accepts(event):
                subscriber.queue.put_nowait(event)

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)

    def publish_cache_event(self, cache_event: CacheEvent) -> None:
        """Forward a ticket cache change to subscribers.

        Registered as a TicketCache listener.
        """
        event = Event(
            event_type=_KIND_EVENT_TYPES[cache_event.kind],
            namespace=cache_event.namespace,
            data={
                "type": cache_event.type.value,
                "object": cache_event.object.to_dict(),
            },
        )
        self.emit_sync(event)

    def create_heartbeat_event(self) -> Event:
        """Create a heartbeat event."""
        return Event(
            event_type=EventType.HEARTBEAT,
            namespace=None,  # Heartbeat goes to all subscribers
            data={"timestamp": datetime.now(timezone.utc).isoformat()},
        )
