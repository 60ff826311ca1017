"""Event manager for Server-Sent Events (SSE)."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from coursereg.store import Registration


def _now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class EventType(str, Enum):
    """Types of events that can be emitted."""

    REGISTRATION_ACCEPTED = "registration_accepted"
    REGISTRATION_REJECTED = "registration_rejected"
    HEARTBEAT = "heartbeat"


@dataclass
class Event:
    """An event to be sent via SSE."""

    event_type: EventType
    data: dict[str, Any]
    learner_id: str | None = None

    def to_sse(self) -> str:
        """Convert to SSE format."""
        return f"event: {self.event_type.value}\ndata: {json.dumps(self.data)}\n\n"


@dataclass
class Subscriber:
    """A subscriber to the event stream.

    Events may be emitted from worker threads, so delivery goes through the
    loop that owns the queue when one is known.
    """

    id: str
    queue: asyncio.Queue[Event]
    learner_id: str | None = None  # None means subscribe to all learners
    loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    def create(cls, learner_id: str | None = None) -> Subscriber:
        """Create a new subscriber bound to the running loop, if any."""
        try:
            loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        return cls(id=str(uuid4()), queue=asyncio.Queue(), learner_id=learner_id, loop=loop)

    def wants(self, event: Event) -> bool:
        return self.learner_id is None or self.learner_id == event.learner_id

    def deliver(self, event: Event) -> None:
        if self.loop is None or self.loop.is_closed():
            self.queue.put_nowait(event)
        else:
            self.loop.call_soon_threadsafe(self.queue.put_nowait, event)


@dataclass
class EventManager:
    """Manager for SSE events."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)
    _heartbeat_interval: int = 30  # seconds

    def subscribe(self, learner_id: str | None = None) -> Subscriber:
        """Subscribe a client to events.

        Args:
            learner_id: Optional learner ID to filter events. None means all learners.

        Returns:
            Subscriber instance for receiving events.
        """
        subscriber = Subscriber.create(learner_id)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        """Unsubscribe a client from events."""
        self._subscribers.pop(subscriber_id, None)

    def emit_sync(self, event: Event) -> None:
        """Emit an event to all matching subscribers. Safe to call from any thread."""
        for subscriber in list(self._subscribers.values()):
            if subscriber.wants(event):
                subscriber.deliver(event)

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)

    def emit_registration_accepted(self, registration: Registration, new_total: int) -> None:
        """Emit a registration_accepted event.

        Matches the service's accepted-listener signature.
        """
        event = Event(
            event_type=EventType.REGISTRATION_ACCEPTED,
            learner_id=registration.learner_id,
            data={
                "registration_id": registration.registration_id,
                "learner_id": registration.learner_id,
                "course_code": registration.course_code,
                "credit_hours": registration.credit_hours,
                "new_total": new_total,
                "timestamp": _now(),
            },
        )
        self.emit_sync(event)

    def emit_registration_rejected(
        self,
        learner_id: str | None,
        course_code: str,
        error_kind: str,
        message: str,
    ) -> None:
        """Emit a registration_rejected event."""
        event = Event(
            event_type=EventType.REGISTRATION_REJECTED,
            learner_id=learner_id,
            data={
                "learner_id": learner_id,
                "course_code": course_code,
                "error_kind": error_kind,
                "message": message,
                "timestamp": _now(),
            },
        )
        self.emit_sync(event)

    def create_heartbeat_event(self) -> Event:
        """Create a heartbeat event."""
        return Event(
            event_type=EventType.HEARTBEAT,
            learner_id=None,  # Heartbeat goes to all subscribers
            data={"timestamp": _now()},
        )
