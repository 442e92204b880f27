"""Health check endpoints."""

from fastapi import APIRouter, Depends

from src.api.calendar import get_calendar_screen
from src.services.calendar_screen import CalendarScreen
from src.services.errors import FetchError

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/backend")
async def backend_health_check(screen: CalendarScreen = Depends(get_calendar_screen)) -> dict[str, str]:
    """School backend health check endpoint."""
    try:
        await screen.store.api.fetch_events()
        return {"status": "healthy", "backend": "connected"}
    except FetchError as e:
        return {"status": "unhealthy", "backend": str(e)}
