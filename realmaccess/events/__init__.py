"""
Event system for realmaccess.
"""

from .events import (
    Event,
    EventType,
    EventBus,
)

__all__ = [
    "Event",
    "EventType",
    "EventBus",
]
