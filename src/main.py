"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import calendar_router, health_router
from src.config import get_app_config, get_settings
from src.services.calendar_api import CalendarApiClient
from src.services.calendar_screen import CalendarScreen, Viewer
from src.services.event_store import EventStore

logger = logging.getLogger(__name__)
settings = get_settings()


def configure_logging() -> None:
    """Set up root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_calendar_screen() -> CalendarScreen:
    """Build the calendar screen for the configured viewer."""
    store = EventStore(CalendarApiClient())
    viewer = Viewer(id=settings.viewer_id, role=settings.viewer_role)
    return CalendarScreen(store, viewer)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    configure_logging()
    app.state.calendar_screen = create_calendar_screen()
    logger.info(f"Calendar screen ready for {settings.viewer_role} viewer against {settings.calendar_api_url}")
    yield


app = FastAPI(
    title="Academic Calendar API",
    description="Academic calendar screen for the school dashboards",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for the mobile client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(calendar_router)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "Academic Calendar API",
        "version": "0.1.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    server = get_app_config().server
    uvicorn.run("src.main:app", host=server["host"], port=server["port"])
