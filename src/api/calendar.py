"""Academic calendar screen endpoints."""

from datetime import MAXYEAR, MINYEAR

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.schemas.calendar_event import CalendarEventFormUpdate
from src.schemas.calendar_view import MonthView, ScreenView
from src.services.calendar_screen import (
    ADMIN_ONLY_MESSAGE,
    Action,
    CalendarScreen,
    CancelDelete,
    CancelEdit,
    ChangeMonth,
    ConfirmDelete,
    EditEvent,
    Mount,
    Refresh,
    RequestDelete,
    Save,
    SelectDate,
    UpdateForm,
)
from src.services.calendar_view import build_month_view
from src.services.date_keys import parse_date_key, shift_month

router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


def get_calendar_screen(request: Request) -> CalendarScreen:
    """Return the screen created at startup."""
    return request.app.state.calendar_screen


def _require_admin(screen: CalendarScreen) -> None:
    if not screen.viewer.is_admin:
        raise HTTPException(status_code=403, detail=ADMIN_ONLY_MESSAGE)


async def _apply(screen: CalendarScreen, action: Action) -> ScreenView:
    await screen.dispatch(action)
    return screen.view()


@router.get("/", response_model=ScreenView)
async def get_screen(screen: CalendarScreen = Depends(get_calendar_screen)) -> ScreenView:
    """Current screen; the first call loads the events."""
    if screen.state.is_loading:
        await screen.dispatch(Mount())
    return screen.view()


@router.get("/months/{year}/{month}", response_model=MonthView)
def get_month(
    year: int,
    month: int,
    screen: CalendarScreen = Depends(get_calendar_screen),
) -> MonthView:
    """Render any month against the loaded events without moving the screen."""
    if not MINYEAR <= year <= MAXYEAR:
        raise HTTPException(status_code=400, detail=f"Year must be between {MINYEAR} and {MAXYEAR}")
    if not 0 <= month <= 11:
        raise HTTPException(status_code=400, detail="Month must be between 0 and 11")
    return build_month_view(
        year, month, screen.state.events, screen.today(), screen.viewer.is_admin
    )


@router.post("/refresh", response_model=ScreenView)
async def refresh(screen: CalendarScreen = Depends(get_calendar_screen)) -> ScreenView:
    """Reload events from the backend."""
    return await _apply(screen, Refresh())


@router.post("/navigate", response_model=ScreenView)
async def navigate(
    offset: int = Query(..., description="Months to move, negative for earlier"),
    screen: CalendarScreen = Depends(get_calendar_screen),
) -> ScreenView:
    """Move the displayed month."""
    year, _ = shift_month(screen.state.year, screen.state.month, offset)
    if not MINYEAR <= year <= MAXYEAR:
        raise HTTPException(status_code=400, detail=f"Year must be between {MINYEAR} and {MAXYEAR}")
    return await _apply(screen, ChangeMonth(offset=offset))


@router.post("/new", response_model=ScreenView)
async def new_event_today(screen: CalendarScreen = Depends(get_calendar_screen)) -> ScreenView:
    """Open the form for a new event today."""
    _require_admin(screen)
    return await _apply(screen, SelectDate())


@router.post("/dates/{date_key}/select", response_model=ScreenView)
async def select_date(
    date_key: str,
    screen: CalendarScreen = Depends(get_calendar_screen),
) -> ScreenView:
    """Open the form for a new event on a date."""
    _require_admin(screen)
    if parse_date_key(date_key) is None:
        raise HTTPException(status_code=400, detail="Date must be in YYYY-MM-DD format")
    return await _apply(screen, SelectDate(date_key=date_key))


@router.post("/events/{event_id}/edit", response_model=ScreenView)
async def edit_event(
    event_id: int,
    screen: CalendarScreen = Depends(get_calendar_screen),
) -> ScreenView:
    """Open the form for an existing event."""
    _require_admin(screen)
    if screen.store.find(event_id) is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return await _apply(screen, EditEvent(event_id=event_id))


@router.patch("/form", response_model=ScreenView)
async def update_form(
    update: CalendarEventFormUpdate,
    screen: CalendarScreen = Depends(get_calendar_screen),
) -> ScreenView:
    """Change fields of the open form."""
    return await _apply(screen, UpdateForm(**update.model_dump()))


@router.post("/form/save", response_model=ScreenView)
async def save_form(screen: CalendarScreen = Depends(get_calendar_screen)) -> ScreenView:
    """Submit the open form."""
    return await _apply(screen, Save())


@router.post("/form/cancel", response_model=ScreenView)
async def cancel_form(screen: CalendarScreen = Depends(get_calendar_screen)) -> ScreenView:
    """Close the form without saving."""
    return await _apply(screen, CancelEdit())


@router.post("/events/{event_id}/delete", response_model=ScreenView)
async def request_delete(
    event_id: int,
    screen: CalendarScreen = Depends(get_calendar_screen),
) -> ScreenView:
    """Ask for confirmation before deleting an event."""
    _require_admin(screen)
    if screen.store.find(event_id) is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return await _apply(screen, RequestDelete(event_id=event_id))


@router.post("/delete/confirm", response_model=ScreenView)
async def confirm_delete(screen: CalendarScreen = Depends(get_calendar_screen)) -> ScreenView:
    """Delete the event awaiting confirmation."""
    return await _apply(screen, ConfirmDelete())


@router.post("/delete/cancel", response_model=ScreenView)
async def cancel_delete(screen: CalendarScreen = Depends(get_calendar_screen)) -> ScreenView:
    """Keep the event awaiting confirmation."""
    return await _apply(screen, CancelDelete())
