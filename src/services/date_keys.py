"""DateKey helpers.

A DateKey is the ``YYYY-MM-DD`` string that joins calendar grid cells to the
events scheduled on that day. Months are zero-based (0 = January) everywhere
in the calendar engine.
"""

import re
from datetime import date

DATE_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def format_date_key(year: int, month: int, day: int) -> str:
    """Format a (year, zero-based month, day) triple as ``YYYY-MM-DD``."""
    # Round-trip through date so impossible days fail loudly
    d = date(year, month + 1, day)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def date_key_for(d: date) -> str:
    """Format a ``date`` as a DateKey."""
    return format_date_key(d.year, d.month - 1, d.day)


def parse_date_key(value: object) -> tuple[int, int, int] | None:
    """Parse a DateKey into (year, zero-based month, day).

    Returns None for anything that is not a well-formed, real calendar date.
    """
    if not isinstance(value, str):
        return None
    match = DATE_KEY_PATTERN.match(value)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        date(year, month, day)
    except ValueError:
        return None
    return year, month - 1, day


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Return (year, month) moved by ``offset`` months, carrying the year."""
    total = year * 12 + month + offset
    return total // 12, total % 12
