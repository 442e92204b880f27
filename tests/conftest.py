"""Pytest configuration and fixtures."""

import json
import os
from collections.abc import Generator
from datetime import date
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["CALENDAR_API_URL"] = "http://school.test"
os.environ["VIEWER_ID"] = "7"
os.environ["VIEWER_ROLE"] = "admin"

from src.api.calendar import get_calendar_screen
from src.main import app
from src.services.calendar_api import CalendarApiClient
from src.services.calendar_screen import CalendarScreen, Viewer
from src.services.event_store import EventStore

TODAY = date(2025, 5, 15)


class FakeCalendarBackend:
    """In-memory stand-in for the school backend's /api/calendar routes."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []
        self.next_id = 1
        self.requests: list[httpx.Request] = []
        # HTTP method -> status code to fail with
        self.failures: dict[str, int] = {}
        self.raw_listing: Any = None

    def add(self, name: str, event_date: str, **fields: Any) -> dict[str, Any]:
        event = {
            "id": fields.pop("id", self.next_id),
            "name": name,
            "type": fields.pop("type", "Meeting"),
            "time": fields.pop("time", None),
            "description": fields.pop("description", None),
            "event_date": event_date,
        }
        self.next_id = max(self.next_id, event["id"]) + 1
        self.events.append(event)
        return event

    def calls(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    def _find(self, event_id: int) -> dict[str, Any] | None:
        return next((e for e in self.events if e["id"] == event_id), None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status = self.failures.get(request.method)
        if status:
            return httpx.Response(status, json={"message": f"Error: Could not handle {request.method}."})

        parts = request.url.path.strip("/").split("/")
        if parts[:2] != ["api", "calendar"]:
            return httpx.Response(404, json={"message": "Not found"})
        event_id = int(parts[2]) if len(parts) > 2 else None

        if request.method == "GET":
            if self.raw_listing is not None:
                return httpx.Response(200, json=self.raw_listing)
            grouped: dict[str, list[dict[str, Any]]] = {}
            for event in self.events:
                grouped.setdefault(event["event_date"], []).append(event)
            return httpx.Response(200, json=grouped)

        if request.method == "POST":
            body = json.loads(request.content)
            event = self.add(
                body["name"],
                body["event_date"],
                type=body["type"],
                time=body.get("time") or None,
                description=body.get("description") or None,
            )
            return httpx.Response(201, json={"message": "Event created successfully!", "event": event})

        event = self._find(event_id)
        if event is None:
            return httpx.Response(404, json={"message": "Error: Event not found."})

        if request.method == "PUT":
            body = json.loads(request.content)
            event.update(
                name=body["name"],
                type=body["type"],
                time=body.get("time") or None,
                description=body.get("description") or None,
                event_date=body["event_date"],
            )
            return httpx.Response(200, json={"message": "Event updated successfully!", "event": event})

        if request.method == "DELETE":
            self.events.remove(event)
            return httpx.Response(200, json={"message": "Event deleted successfully."})

        return httpx.Response(405)


@pytest.fixture
def backend() -> FakeCalendarBackend:
    """Fake school backend."""
    return FakeCalendarBackend()


@pytest.fixture
def api(backend: FakeCalendarBackend) -> CalendarApiClient:
    """Calendar API client wired to the fake backend."""
    return CalendarApiClient(transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def store(api: CalendarApiClient) -> EventStore:
    """Event store over the fake backend."""
    return EventStore(api)


@pytest.fixture
def screen(store: EventStore) -> CalendarScreen:
    """Admin calendar screen pinned to TODAY."""
    return CalendarScreen(store, Viewer(id=7, role="admin"), today=lambda: TODAY)


@pytest.fixture
def student_screen(store: EventStore) -> CalendarScreen:
    """Read-only calendar screen pinned to TODAY."""
    return CalendarScreen(store, Viewer(id=21, role="student"), today=lambda: TODAY)


@pytest.fixture
def client(screen: CalendarScreen) -> Generator[TestClient, None, None]:
    """Create a test client with the calendar screen override."""
    app.dependency_overrides[get_calendar_screen] = lambda: screen
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
