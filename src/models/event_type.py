"""Calendar event categories."""

from enum import Enum
from types import MappingProxyType


class EventType(str, Enum):
    """Category of a calendar event."""

    MEETING = "Meeting"
    EVENT = "Event"
    FESTIVAL = "Festival"
    HOLIDAY_GENERAL = "Holiday (General)"
    HOLIDAY_OPTIONAL = "Holiday (Optional)"
    EXAM = "Exam"
    LAB_SESSION = "Lab Session"
    OTHER = "Other"

    @property
    def color(self) -> str:
        return EVENT_TYPE_COLORS[self]

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_holiday(self) -> bool:
        return "Holiday" in self.value

    @property
    def list_priority(self) -> int:
        """Ordering among untimed items on the same day: holidays, festivals, rest."""
        if self.is_holiday:
            return 1
        if self is EventType.FESTIVAL:
            return 2
        return 3

    @classmethod
    def resolve(cls, value: object, default: "EventType") -> "EventType":
        """Map a raw category to an EventType.

        Missing or blank values take ``default``; unrecognised names fall back to OTHER.
        """
        if isinstance(value, cls):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            return default
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


EVENT_TYPE_COLORS = MappingProxyType(
    {
        EventType.MEETING: "#0077b6",
        EventType.EVENT: "#ff9f1c",
        EventType.FESTIVAL: "#f94144",
        EventType.HOLIDAY_GENERAL: "#e63946",
        EventType.HOLIDAY_OPTIONAL: "#2a9d8f",
        EventType.EXAM: "#9b5de5",
        EventType.LAB_SESSION: "#43aa8b",
        EventType.OTHER: "#577590",
    }
)
