"""HTTP client for the school backend's calendar endpoints."""

import logging
from typing import Any

import httpx

from src.config import get_settings
from src.schemas.calendar_event import CalendarEventPayload
from src.services.errors import FetchError, WriteError

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the server's own message out of an error response, if it sent one."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return fallback


class CalendarApiClient:
    """Thin async wrapper around ``/api/calendar`` on the school backend."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.calendar_api_url).rstrip("/")
        self.token = token if token is not None else settings.calendar_api_token
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport

    def _get_url(self, event_id: int | None = None) -> str:
        url = f"{self.base_url}/api/calendar"
        if event_id is not None:
            url = f"{url}/{event_id}"
        return url

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        )

    async def fetch_events(self) -> Any:
        """GET the whole event collection.

        Returns the decoded JSON body, either a ``{date_key: [event, ...]}``
        mapping or a flat list of events.
        """
        try:
            async with self._client() as client:
                response = await client.get(self._get_url())
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach calendar backend: {e}")
            raise FetchError("Failed to fetch calendar data.") from e

        if response.is_error:
            message = _error_message(response, "Failed to fetch calendar data.")
            logger.error(f"Calendar fetch returned {response.status_code}: {message}")
            raise FetchError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Calendar fetch returned an undecodable body: {e}")
            raise FetchError("Calendar data could not be read.", status_code=response.status_code) from e

    async def create_event(self, payload: CalendarEventPayload) -> dict[str, Any]:
        """POST a new event."""
        return await self._write("POST", self._get_url(), payload, "Failed to save event.")

    async def update_event(self, event_id: int, payload: CalendarEventPayload) -> dict[str, Any]:
        """PUT changes to an existing event."""
        return await self._write("PUT", self._get_url(event_id), payload, "Failed to save event.")

    async def delete_event(self, event_id: int) -> dict[str, Any]:
        """DELETE an event."""
        return await self._write("DELETE", self._get_url(event_id), None, "Failed to delete event.")

    async def _write(
        self,
        method: str,
        url: str,
        payload: CalendarEventPayload | None,
        fallback: str,
    ) -> dict[str, Any]:
        body = payload.model_dump(mode="json", by_alias=True) if payload is not None else None
        try:
            async with self._client() as client:
                response = await client.request(method, url, json=body)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise WriteError(fallback) from e

        if response.is_error:
            message = _error_message(response, fallback)
            logger.warning(f"{method} {url} rejected with {response.status_code}: {message}")
            raise WriteError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            data = {}
        logger.info(f"{method} {url} succeeded")
        return data if isinstance(data, dict) else {}
