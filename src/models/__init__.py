"""Domain enums."""

from src.models.event_type import EventType

__all__ = [
    "EventType",
]
