"""Calendar event schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config import get_app_config
from src.models.event_type import EventType
from src.services.date_keys import parse_date_key


def default_event_type() -> EventType:
    """Category given to events that arrive without one."""
    configured = get_app_config().calendar["default_event_type"]
    return EventType.resolve(configured, EventType.MEETING)


class CalendarEventBase(BaseModel):
    """Base calendar event schema."""

    name: str
    type: EventType = Field(default_factory=default_event_type)
    time: str | None = None
    description: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _resolve_type(cls, value: object) -> EventType:
        return EventType.resolve(value, default_event_type())


class CalendarEvent(CalendarEventBase):
    """An event as stored by the backend."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    name: str = Field(min_length=1)
    event_date: str

    @field_validator("event_date")
    @classmethod
    def _check_event_date(cls, value: str) -> str:
        if parse_date_key(value) is None:
            raise ValueError(f"event_date must be a YYYY-MM-DD date, got {value!r}")
        return value


class CalendarEventDraft(CalendarEventBase):
    """Form contents for an event being created or edited."""

    name: str = ""
    time: str = ""
    description: str = ""
    event_date: str | None = None

    @classmethod
    def from_event(cls, event: CalendarEvent) -> "CalendarEventDraft":
        return cls(
            name=event.name,
            type=event.type,
            time=event.time or "",
            description=event.description or "",
            event_date=event.event_date,
        )


class CalendarEventPayload(BaseModel):
    """Request body for POST /api/calendar and PUT /api/calendar/{id}."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    time: str
    description: str
    type: EventType
    event_date: str
    admin_id: int = Field(alias="adminId")

    @classmethod
    def from_draft(cls, draft: CalendarEventDraft, admin_id: int) -> "CalendarEventPayload":
        return cls(
            name=draft.name.strip(),
            time=draft.time.strip(),
            description=draft.description.strip(),
            type=draft.type,
            event_date=draft.event_date,
            admin_id=admin_id,
        )


class WriteResult(BaseModel):
    """Outcome of a successful create/update/delete."""

    message: str | None = None
    event: CalendarEvent | None = None


class CalendarEventFormUpdate(BaseModel):
    """Partial edit of the open event form."""

    name: str | None = None
    time: str | None = None
    description: str | None = None
    type: EventType | None = None
