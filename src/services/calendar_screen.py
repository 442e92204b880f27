"""Academic calendar screen: one explicit state value driven by named actions.

Modes::

    VIEWING --SelectDate/EditEvent--> EDITING --Save--> SUBMITTING --ok--> VIEWING (+ reload)
                                         ^                  |
                                         +------failed------+
    VIEWING --RequestDelete--> CONFIRMING_DELETE --ConfirmDelete--> SUBMITTING --> VIEWING (+ reload)

Every successful write is followed by a full reload of the event store; the
index is never patched locally.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import MAXYEAR, MINYEAR, date
from enum import Enum

from src.models.event_type import EventType
from src.schemas.calendar_event import CalendarEvent, CalendarEventDraft
from src.schemas.calendar_view import ScreenView
from src.services.calendar_view import build_month_view
from src.services.date_keys import date_key_for, parse_date_key, shift_month
from src.services.errors import FetchError, ValidationError, WriteError
from src.services.event_store import EventsByDate, EventStore

logger = logging.getLogger(__name__)

ADMIN_ONLY_MESSAGE = "Only administrators can change the calendar."


class ScreenMode(str, Enum):
    """Mode of the calendar screen."""

    VIEWING = "viewing"
    EDITING = "editing"
    SUBMITTING = "submitting"
    CONFIRMING_DELETE = "confirming_delete"


@dataclass(frozen=True)
class Viewer:
    """The logged-in user looking at the calendar."""

    id: int | None
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(frozen=True)
class ScreenState:
    year: int
    month: int
    mode: ScreenMode = ScreenMode.VIEWING
    is_loading: bool = True
    events: EventsByDate = field(default_factory=dict)
    selected_date: str | None = None
    editing_event: CalendarEvent | None = None
    form: CalendarEventDraft | None = None
    pending_delete_id: int | None = None
    error: str | None = None
    message: str | None = None


# Actions


@dataclass(frozen=True)
class Mount:
    """Screen opened: load everything."""


@dataclass(frozen=True)
class Refresh:
    """Reload events from the backend."""


@dataclass(frozen=True)
class ChangeMonth:
    offset: int


@dataclass(frozen=True)
class SelectDate:
    """Start a new event on a day; None means today."""

    date_key: str | None = None


@dataclass(frozen=True)
class EditEvent:
    event_id: int


@dataclass(frozen=True)
class UpdateForm:
    name: str | None = None
    time: str | None = None
    description: str | None = None
    type: EventType | None = None


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class RequestDelete:
    event_id: int


@dataclass(frozen=True)
class ConfirmDelete:
    pass


@dataclass(frozen=True)
class CancelDelete:
    pass


Action = (
    Mount
    | Refresh
    | ChangeMonth
    | SelectDate
    | EditEvent
    | UpdateForm
    | Save
    | CancelEdit
    | RequestDelete
    | ConfirmDelete
    | CancelDelete
)


def validate_form(form: CalendarEventDraft | None, selected_date: str | None) -> None:
    """Required-field check run before anything is sent to the backend."""
    if form is None or not form.name.strip() or not selected_date:
        raise ValidationError("Title is required.")


class CalendarScreen:
    """Owns the calendar screen state and the event store behind it."""

    def __init__(
        self,
        store: EventStore,
        viewer: Viewer,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.viewer = viewer
        self.today = today
        now = today()
        self.state = ScreenState(year=now.year, month=now.month - 1)
        self._handlers = {
            Mount: self._mount,
            Refresh: self._refresh,
            ChangeMonth: self._change_month,
            SelectDate: self._select_date,
            EditEvent: self._edit_event,
            UpdateForm: self._update_form,
            Save: self._save,
            CancelEdit: self._cancel_edit,
            RequestDelete: self._request_delete,
            ConfirmDelete: self._confirm_delete,
            CancelDelete: self._cancel_delete,
        }

    async def dispatch(self, action: Action) -> ScreenState:
        """Apply one action and return the resulting state."""
        handler = self._handlers[type(action)]
        logger.debug(f"Calendar action {action!r} in mode {self.state.mode.value}")
        await handler(action)
        return self.state

    def view(self) -> ScreenView:
        state = self.state
        return ScreenView(
            mode=state.mode.value,
            is_loading=state.is_loading,
            is_admin=self.viewer.is_admin,
            selected_date=state.selected_date,
            editing_event_id=state.editing_event.id if state.editing_event else None,
            pending_delete_id=state.pending_delete_id,
            form=state.form,
            error=state.error,
            message=state.message,
            view=build_month_view(
                state.year, state.month, state.events, self.today(), self.viewer.is_admin
            ),
        )

    # Loading

    async def _reload(self) -> None:
        """Replace the screen's events from a full fetch; keep them on failure."""
        try:
            events = await self.store.load()
        except FetchError as e:
            logger.error(f"Calendar reload failed: {e}")
            self.state = replace(self.state, is_loading=False, error=str(e))
            return
        self.state = replace(self.state, is_loading=False, events=events)

    async def _mount(self, action: Mount) -> None:
        self.state = replace(self.state, is_loading=True, error=None)
        await self._reload()

    async def _refresh(self, action: Refresh) -> None:
        self.state = replace(self.state, error=None)
        await self._reload()

    # Navigation

    async def _change_month(self, action: ChangeMonth) -> None:
        if self.state.mode is not ScreenMode.VIEWING:
            return
        year, month = shift_month(self.state.year, self.state.month, action.offset)
        if not MINYEAR <= year <= MAXYEAR:
            self.state = replace(self.state, error=f"Year {year} is out of range.")
            return
        self.state = replace(self.state, year=year, month=month, error=None, message=None)

    # Editing

    def _admin_guard(self) -> bool:
        if self.viewer.is_admin:
            return True
        logger.warning(f"Rejected calendar change from non-admin viewer {self.viewer.id}")
        self.state = replace(self.state, error=ADMIN_ONLY_MESSAGE)
        return False

    async def _select_date(self, action: SelectDate) -> None:
        if self.state.mode is not ScreenMode.VIEWING or not self._admin_guard():
            return
        date_key = action.date_key or date_key_for(self.today())
        if parse_date_key(date_key) is None:
            self.state = replace(self.state, error=f"Invalid date {date_key!r}.")
            return
        self.state = replace(
            self.state,
            mode=ScreenMode.EDITING,
            selected_date=date_key,
            editing_event=None,
            form=CalendarEventDraft(event_date=date_key),
            error=None,
            message=None,
        )

    async def _edit_event(self, action: EditEvent) -> None:
        if self.state.mode is not ScreenMode.VIEWING or not self._admin_guard():
            return
        event = self.store.find(action.event_id)
        if event is None:
            self.state = replace(self.state, error="Event not found.")
            return
        self.state = replace(
            self.state,
            mode=ScreenMode.EDITING,
            selected_date=event.event_date,
            editing_event=event,
            form=CalendarEventDraft.from_event(event),
            error=None,
            message=None,
        )

    async def _update_form(self, action: UpdateForm) -> None:
        if self.state.mode is not ScreenMode.EDITING or self.state.form is None:
            return
        changes = {
            name: value
            for name, value in (
                ("name", action.name),
                ("time", action.time),
                ("description", action.description),
                ("type", action.type),
            )
            if value is not None
        }
        self.state = replace(self.state, form=self.state.form.model_copy(update=changes))

    async def _cancel_edit(self, action: CancelEdit) -> None:
        if self.state.mode is not ScreenMode.EDITING:
            return
        self.state = replace(
            self.state,
            mode=ScreenMode.VIEWING,
            selected_date=None,
            editing_event=None,
            form=None,
            error=None,
        )

    async def _save(self, action: Save) -> None:
        state = self.state
        if state.mode is not ScreenMode.EDITING:
            # Submit is disabled while a write is in flight
            logger.debug(f"Ignoring save in mode {state.mode.value}")
            return

        try:
            validate_form(state.form, state.selected_date)
        except ValidationError as e:
            self.state = replace(state, error=str(e))
            return
        if self.viewer.id is None:
            self.state = replace(state, error="Authentication error. Please log in again.")
            return

        form = state.form.model_copy(update={"event_date": state.selected_date})
        editing = state.editing_event
        self.state = replace(state, mode=ScreenMode.SUBMITTING, error=None, message=None)

        try:
            if editing is not None:
                result = await self.store.update(editing.id, form, self.viewer.id)
            else:
                result = await self.store.create(form, self.viewer.id)
        except WriteError as e:
            logger.warning(f"Saving calendar event failed: {e}")
            self.state = replace(self.state, mode=ScreenMode.EDITING, error=str(e))
            return

        verb = "updated" if editing is not None else "created"
        self.state = replace(
            self.state,
            mode=ScreenMode.VIEWING,
            selected_date=None,
            editing_event=None,
            form=None,
            message=result.message or f"Event {verb} successfully!",
        )
        await self._reload()

    # Deleting

    async def _request_delete(self, action: RequestDelete) -> None:
        if self.state.mode is not ScreenMode.VIEWING or not self._admin_guard():
            return
        if self.store.find(action.event_id) is None:
            self.state = replace(self.state, error="Event not found.")
            return
        self.state = replace(
            self.state,
            mode=ScreenMode.CONFIRMING_DELETE,
            pending_delete_id=action.event_id,
            error=None,
            message=None,
        )

    async def _cancel_delete(self, action: CancelDelete) -> None:
        if self.state.mode is not ScreenMode.CONFIRMING_DELETE:
            return
        self.state = replace(self.state, mode=ScreenMode.VIEWING, pending_delete_id=None)

    async def _confirm_delete(self, action: ConfirmDelete) -> None:
        state = self.state
        if state.mode is not ScreenMode.CONFIRMING_DELETE or state.pending_delete_id is None:
            return
        event_id = state.pending_delete_id
        self.state = replace(state, mode=ScreenMode.SUBMITTING)

        try:
            result = await self.store.delete(event_id)
        except WriteError as e:
            logger.warning(f"Deleting calendar event {event_id} failed: {e}")
            self.state = replace(
                self.state, mode=ScreenMode.VIEWING, pending_delete_id=None, error=str(e)
            )
            return

        self.state = replace(
            self.state,
            mode=ScreenMode.VIEWING,
            pending_delete_id=None,
            message=result.message or "Event deleted successfully.",
        )
        await self._reload()
