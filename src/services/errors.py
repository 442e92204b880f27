"""Calendar error types."""


class CalendarError(Exception):
    """Base class for calendar engine failures."""


class ValidationError(CalendarError):
    """Local form check failed; nothing was sent to the backend."""


class FetchError(CalendarError):
    """The event collection could not be loaded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WriteError(CalendarError):
    """The backend rejected or never received a create/update/delete."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
