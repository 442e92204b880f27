"""Tests for calendar screen endpoints."""

from fastapi.testclient import TestClient

from src.api.calendar import get_calendar_screen
from src.main import app

BASE = "/api/v1/calendar"


def test_get_screen_loads_on_first_call(client: TestClient, backend):
    """The first GET mounts the screen and loads events."""
    backend.add("Exam", "2025-05-02", id=1, type="Exam")

    response = client.get(f"{BASE}/")

    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "viewing"
    assert data["is_loading"] is False
    assert data["view"]["month_label"] == "May 2025"
    day_two = next(c for c in data["view"]["cells"] if c["day"] == 2)
    assert day_two["date_key"] == "2025-05-02"
    assert day_two["dots"][0]["id"] == 1
    assert data["view"]["items"][0]["formatted_date"] == "May 02"

    client.get(f"{BASE}/")
    assert len(backend.calls("GET")) == 1


def test_navigate(client: TestClient):
    """Navigating moves the displayed month across the year boundary."""
    response = client.post(f"{BASE}/navigate", params={"offset": -5})
    assert response.status_code == 200
    data = response.json()
    assert data["view"]["year"] == 2024
    assert data["view"]["month"] == 11


def test_navigate_out_of_range(client: TestClient):
    """A jump past year 9999 is refused and the screen keeps working."""
    response = client.post(f"{BASE}/navigate", params={"offset": 100000})
    assert response.status_code == 400

    response = client.get(f"{BASE}/")
    assert response.status_code == 200
    assert response.json()["view"]["month_label"] == "May 2025"


def test_get_month(client: TestClient, backend):
    """Any month can be rendered against the loaded events."""
    backend.add("Trip", "2025-06-10", id=3)
    client.post(f"{BASE}/refresh")

    response = client.get(f"{BASE}/months/2025/5")

    assert response.status_code == 200
    data = response.json()
    assert data["month_label"] == "June 2025"
    assert [item["id"] for item in data["items"]] == [3]


def test_get_month_out_of_range(client: TestClient):
    """Months are zero-based and bounded."""
    response = client.get(f"{BASE}/months/2025/12")
    assert response.status_code == 400


def test_get_month_year_out_of_range(client: TestClient):
    """Years outside 1..9999 are rejected instead of failing the render."""
    for year in (0, 10000):
        response = client.get(f"{BASE}/months/{year}/0")
        assert response.status_code == 400
    assert client.get(f"{BASE}/months/9999/11").status_code == 200


def test_create_event_flow(client: TestClient, backend):
    """Select a day, fill the form, save, and see the event after reload."""
    client.get(f"{BASE}/")

    response = client.post(f"{BASE}/dates/2025-05-02/select")
    assert response.json()["mode"] == "editing"

    response = client.patch(f"{BASE}/form", json={"name": "PTM", "type": "Meeting", "time": "4 PM"})
    assert response.json()["form"]["name"] == "PTM"

    response = client.post(f"{BASE}/form/save")
    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "viewing"
    assert data["message"] == "Event created successfully!"
    assert [item["name"] for item in data["view"]["items"]] == ["PTM"]
    assert backend.events[0]["event_date"] == "2025-05-02"


def test_select_invalid_date(client: TestClient):
    """Malformed date keys are rejected."""
    response = client.post(f"{BASE}/dates/2025-5-2/select")
    assert response.status_code == 400


def test_save_validation_error(client: TestClient, backend):
    """Saving an empty title keeps the form open with an error."""
    client.post(f"{BASE}/new")

    response = client.post(f"{BASE}/form/save")

    data = response.json()
    assert data["mode"] == "editing"
    assert data["error"] == "Title is required."
    assert backend.calls("POST") == []


def test_edit_unknown_event(client: TestClient):
    """Editing an event that is not loaded is a 404."""
    response = client.post(f"{BASE}/events/99/edit")
    assert response.status_code == 404


def test_delete_flow(client: TestClient, backend):
    """Request, confirm, and the event disappears."""
    backend.add("Exam", "2025-05-02", id=1)
    client.get(f"{BASE}/")

    response = client.post(f"{BASE}/events/1/delete")
    assert response.json()["mode"] == "confirming_delete"
    assert response.json()["pending_delete_id"] == 1

    response = client.post(f"{BASE}/delete/confirm")
    data = response.json()
    assert data["mode"] == "viewing"
    assert data["view"]["items"] == []
    assert backend.events == []


def test_delete_cancel(client: TestClient, backend):
    """Cancelling a delete keeps the event."""
    backend.add("Exam", "2025-05-02", id=1)
    client.get(f"{BASE}/")
    client.post(f"{BASE}/events/1/delete")

    response = client.post(f"{BASE}/delete/cancel")

    assert response.json()["mode"] == "viewing"
    assert len(backend.events) == 1


def test_student_cannot_edit(student_screen, backend):
    """Admin-only routes refuse other roles."""
    app.dependency_overrides[get_calendar_screen] = lambda: student_screen
    try:
        with TestClient(app) as client:
            view = client.get(f"{BASE}/").json()
            assert view["is_admin"] is False
            assert not any(cell["selectable"] for cell in view["view"]["cells"])

            response = client.post(f"{BASE}/dates/2025-05-02/select")
            assert response.status_code == 403
    finally:
        app.dependency_overrides.clear()
