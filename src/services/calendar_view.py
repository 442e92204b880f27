"""Combine the month grid with the event index into a renderable month."""

from datetime import date

from src.config import get_app_config
from src.models.event_type import EventType
from src.schemas.calendar_event import CalendarEvent
from src.schemas.calendar_view import EventDot, LegendEntry, MonthItem, MonthView, ViewCell
from src.services.date_keys import format_date_key, parse_date_key
from src.services.month_grid import DAY_NAMES, MONTH_NAMES, BlankCell, build_month_grid

EventsByDate = dict[str, list[CalendarEvent]]


def legend() -> list[LegendEntry]:
    return [
        LegendEntry(type=event_type, display_name=event_type.display_name, color=event_type.color)
        for event_type in EventType
    ]


def _month_item_sort_key(item: MonthItem) -> tuple[int, int, str, int]:
    # Timed items come first on a day; untimed ones fall back to category priority
    if item.time:
        return (item.day, 0, item.time, 0)
    return (item.day, 1, "", item.type.list_priority)


def month_items(year: int, month: int, events: EventsByDate) -> list[MonthItem]:
    """List the events whose date key falls inside the displayed month.

    Keys from any other month, or keys that do not parse, are left out.
    """
    short_month = MONTH_NAMES[month][:3]
    items: list[MonthItem] = []
    for date_key, day_events in events.items():
        parsed = parse_date_key(date_key)
        if parsed is None:
            continue
        item_year, item_month, item_day = parsed
        if item_year != year or item_month != month:
            continue
        for event in day_events:
            items.append(
                MonthItem(
                    **event.model_dump(),
                    day=item_day,
                    formatted_date=f"{short_month} {item_day:02d}",
                    color=event.type.color,
                )
            )
    return sorted(items, key=_month_item_sort_key)


def build_month_view(
    year: int,
    month: int,
    events: EventsByDate,
    today: date,
    is_admin: bool = False,
) -> MonthView:
    """Zip the structural grid for ``(year, month)`` with the events on each day."""
    max_dots = get_app_config().calendar["max_event_dots"]

    cells: list[ViewCell] = []
    for index, cell in enumerate(build_month_grid(year, month)):
        if isinstance(cell, BlankCell):
            cells.append(ViewCell(blank=True))
            continue

        date_key = format_date_key(year, month, cell.day)
        day_events = events.get(date_key, [])
        cells.append(
            ViewCell(
                day=cell.day,
                date_key=date_key,
                is_today=(today.year, today.month - 1, today.day) == (year, month, cell.day),
                is_sunday=index % 7 == 0,
                is_holiday=any(event.type.is_holiday for event in day_events),
                selectable=is_admin,
                event_count=len(day_events),
                dots=[EventDot(id=event.id, color=event.type.color) for event in day_events[:max_dots]],
            )
        )

    return MonthView(
        year=year,
        month=month,
        title=f"Calendar - {year}",
        month_label=f"{MONTH_NAMES[month]} {year}",
        day_names=list(DAY_NAMES),
        legend=legend(),
        cells=cells,
        items=month_items(year, month, events),
    )
