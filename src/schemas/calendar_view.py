"""Calendar screen view schemas."""

from pydantic import BaseModel

from src.models.event_type import EventType
from src.schemas.calendar_event import CalendarEvent, CalendarEventDraft


class LegendEntry(BaseModel):
    """One category in the colour legend."""

    type: EventType
    display_name: str
    color: str


class EventDot(BaseModel):
    """Coloured marker for an event inside a day cell."""

    id: int | None = None
    color: str


class ViewCell(BaseModel):
    """A rendered grid position; blank cells carry no date."""

    blank: bool = False
    day: int | None = None
    date_key: str | None = None
    is_today: bool = False
    is_sunday: bool = False
    is_holiday: bool = False
    selectable: bool = False
    event_count: int = 0
    dots: list[EventDot] = []


class MonthItem(CalendarEvent):
    """An event listed under the month grid."""

    day: int
    formatted_date: str
    color: str


class MonthView(BaseModel):
    """Everything needed to draw one month of the calendar."""

    year: int
    month: int
    title: str
    month_label: str
    day_names: list[str]
    legend: list[LegendEntry]
    cells: list[ViewCell]
    items: list[MonthItem]


class ScreenView(BaseModel):
    """Calendar screen state as returned to the client."""

    mode: str
    is_loading: bool
    is_admin: bool
    selected_date: str | None = None
    editing_event_id: int | None = None
    pending_delete_id: int | None = None
    form: CalendarEventDraft | None = None
    error: str | None = None
    message: str | None = None
    view: MonthView
