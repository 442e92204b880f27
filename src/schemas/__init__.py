"""Pydantic schemas for request/response validation."""

from src.schemas.calendar_event import (
    CalendarEvent,
    CalendarEventDraft,
    CalendarEventFormUpdate,
    CalendarEventPayload,
    WriteResult,
)
from src.schemas.calendar_view import MonthItem, MonthView, ScreenView, ViewCell

__all__ = [
    "CalendarEvent",
    "CalendarEventDraft",
    "CalendarEventFormUpdate",
    "CalendarEventPayload",
    "MonthItem",
    "MonthView",
    "ScreenView",
    "ViewCell",
    "WriteResult",
]
