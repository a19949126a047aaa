"""
Event publishing for realmaccess.

Surrounding code subscribes to learn when the acting context changes,
for example when the default application is replaced. Delivery is
synchronous and in subscription order.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List


logger = logging.getLogger(__name__)


class EventType(Enum):
    """Typed event types."""

    APPLICATION_CHANGED = "application_changed"


@dataclass
class Event:
    """
    Event structure.

    Attributes:
        type: Event type from EventType enum
        subject: Identifier of the record the event is about
        metadata: Additional event-specific data
        id: Unique event identifier
        timestamp: When the event occurred
        source: Component that generated the event
    """

    type: EventType = EventType.APPLICATION_CHANGED
    subject: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    source: str = "realmaccess"

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary representation."""
        return {
            "id": self.id,
            "type": self.type.value,
            "subject": self.subject,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
            "source": self.source,
        }


Subscriber = Callable[[Event], None]


class EventBus:
    """
    Event bus for publishing and subscribing to events.

    A failing subscriber is logged and skipped; it never prevents the
    remaining subscribers from running.
    """

    def __init__(self):
        self._subscribers: Dict[EventType, List[Subscriber]] = {}

    def subscribe(self, event_type: EventType, callback: Subscriber) -> None:
        """Subscribe a function to an event type. Subscribing twice is a no-op."""
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def unsubscribe(self, event_type: EventType, callback: Subscriber) -> None:
        """Unsubscribe a function from an event type."""
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(callback)
            except ValueError:
                pass

    def unsubscribe_all(self) -> None:
        """Remove every subscriber."""
        self._subscribers = {}

    def subscriber_count(self, event_type: EventType) -> int:
        return len(self._subscribers.get(event_type, []))

    def publish(self, event: Event) -> None:
        """Deliver an event to every subscriber of its type."""
        for callback in list(self._subscribers.get(event.type, [])):
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Error in event subscriber for {event.type.value}: {e}")
