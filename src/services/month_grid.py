"""Month grid generation. Pure calendar calculations, no I/O."""

import calendar
from dataclasses import dataclass

DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


@dataclass(frozen=True)
class BlankCell:
    """Padding before the first day of the month."""


@dataclass(frozen=True)
class DayCell:
    """A single day of the month."""

    day: int


GridCell = BlankCell | DayCell


def _check_month(month: int) -> None:
    if isinstance(month, bool) or not isinstance(month, int) or not 0 <= month <= 11:
        raise ValueError(f"month must be an integer in 0..11, got {month!r}")


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a zero-based month."""
    _check_month(month)
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(year: int, month: int) -> int:
    """Return the weekday of the 1st, with 0 = Sunday .. 6 = Saturday."""
    _check_month(month)
    # calendar.weekday counts Monday as 0
    return (calendar.weekday(year, month + 1, 1) + 1) % 7


def build_month_grid(year: int, month: int) -> list[GridCell]:
    """Return the cells for a 7-column, Sunday-first month grid.

    The grid is ``first_weekday`` blanks followed by one DayCell per day.
    No trailing padding is added.
    """
    grid: list[GridCell] = [BlankCell() for _ in range(first_weekday(year, month))]
    for day in range(1, days_in_month(year, month) + 1):
        grid.append(DayCell(day=day))
    return grid
