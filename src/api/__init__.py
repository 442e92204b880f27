"""API routers."""

from src.api.calendar import router as calendar_router
from src.api.health import router as health_router

__all__ = [
    "calendar_router",
    "health_router",
]
