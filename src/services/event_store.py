"""In-memory date index over the backend's calendar events."""

import logging
from collections.abc import Iterable
from typing import Any

import pydantic

from src.schemas.calendar_event import (
    CalendarEvent,
    CalendarEventDraft,
    CalendarEventPayload,
    WriteResult,
)
from src.services.calendar_api import CalendarApiClient
from src.services.errors import FetchError

logger = logging.getLogger(__name__)

EventsByDate = dict[str, list[CalendarEvent]]


def _flatten(data: Any) -> Iterable[Any]:
    """Yield raw event rows from either a grouped mapping or a flat list."""
    if isinstance(data, dict):
        for date_key, rows in data.items():
            if not isinstance(rows, list):
                logger.warning(f"Skipping calendar group {date_key!r}: expected a list of events")
                continue
            yield from rows
    elif isinstance(data, list):
        yield from data
    else:
        raise FetchError(f"Unexpected calendar payload of type {type(data).__name__}")


def group_events_by_date(data: Any) -> EventsByDate:
    """Partition raw rows by each event's own ``event_date``.

    Server order is kept within a date. Rows that fail validation, including a
    missing or malformed ``event_date``, are left out of the index.
    """
    grouped: EventsByDate = {}
    for row in _flatten(data):
        try:
            event = CalendarEvent.model_validate(row)
        except pydantic.ValidationError as e:
            row_id = row.get("id") if isinstance(row, dict) else None
            logger.warning(f"Skipping calendar event {row_id!r}: {e.error_count()} invalid field(s)")
            continue
        grouped.setdefault(event.event_date, []).append(event)
    return grouped


class EventStore:
    """Date-keyed index of calendar events, rebuilt from a full fetch.

    Writes never patch the index. Callers refresh with ``load()`` after a
    successful write so the index always mirrors the backend.
    """

    def __init__(self, api: CalendarApiClient | None = None) -> None:
        self.api = api or CalendarApiClient()
        self.events: EventsByDate = {}

    async def load(self) -> EventsByDate:
        """Fetch everything and replace the index.

        Raises FetchError and keeps the previous index if the fetch fails.
        """
        data = await self.api.fetch_events()
        grouped = group_events_by_date(data)
        self.events = grouped
        logger.info(
            f"Loaded {sum(len(v) for v in grouped.values())} calendar events on {len(grouped)} dates"
        )
        return grouped

    def find(self, event_id: int) -> CalendarEvent | None:
        """Look up a loaded event by id."""
        for events in self.events.values():
            for event in events:
                if event.id == event_id:
                    return event
        return None

    async def create(self, draft: CalendarEventDraft, admin_id: int) -> WriteResult:
        payload = CalendarEventPayload.from_draft(draft, admin_id)
        data = await self.api.create_event(payload)
        return self._write_result(data)

    async def update(self, event_id: int, draft: CalendarEventDraft, admin_id: int) -> WriteResult:
        payload = CalendarEventPayload.from_draft(draft, admin_id)
        data = await self.api.update_event(event_id, payload)
        return self._write_result(data)

    async def delete(self, event_id: int) -> WriteResult:
        data = await self.api.delete_event(event_id)
        return self._write_result(data)

    @staticmethod
    def _write_result(data: dict[str, Any]) -> WriteResult:
        message = data.get("message") if isinstance(data.get("message"), str) else None
        event = None
        raw_event = data.get("event") or data.get("data")
        if isinstance(raw_event, dict):
            try:
                event = CalendarEvent.model_validate(raw_event)
            except pydantic.ValidationError:
                logger.debug("Write response carried an event that did not validate")
        return WriteResult(message=message, event=event)
