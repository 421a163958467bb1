"""Calendar-date helpers.

Every comparison in loan-tracker runs on naive ``datetime.date`` values.
Timestamps are reduced to their calendar component as written, with no
time-zone conversion, so a day count can never shift around midnight.
"""

from datetime import date, datetime, timedelta
from typing import Any

from dateutil.relativedelta import relativedelta

MONTH_ABBREVIATIONS = (
    "jan",
    "fev",
    "mar",
    "abr",
    "mai",
    "jun",
    "jul",
    "ago",
    "set",
    "out",
    "nov",
    "dez",
)


def to_calendar_date(value: Any) -> date:
    """Reduce a date, datetime or ISO string to its calendar date.

    Parameters
    ----------
    value : date | datetime | str
        ``2024-01-15``, ``2024-01-15T23:30:00Z`` and ``datetime(2024, 1, 15, 23, 30)``
        all map to ``date(2024, 1, 15)``.

    Returns
    -------
    date
        The year/month/day component.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    return date.fromisoformat(text[:10])


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp into a naive datetime.

    A bare ``YYYY-MM-DD`` becomes midnight of that day. Any offset or ``Z``
    suffix is dropped, keeping the wall-clock fields as written.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if len(text) <= 10:
        return datetime.combine(date.fromisoformat(text), datetime.min.time())
    if text.endswith("Z"):
        text = text[:-1]
    return datetime.fromisoformat(text).replace(tzinfo=None)


def days_between(start: Any, end: Any) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (to_calendar_date(end) - to_calendar_date(start)).days


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of short months."""
    return value + relativedelta(months=months)


def start_of_month(value: date) -> date:
    """First day of the month containing ``value``."""
    return value.replace(day=1)


def start_of_week(value: date) -> date:
    """Monday of the ISO week containing ``value``."""
    return value - timedelta(days=value.weekday())


def is_same_day(a: date, b: date) -> bool:
    return a == b


def is_same_week(a: date, b: date) -> bool:
    """Both dates fall in the same Monday-to-Sunday week."""
    return start_of_week(a) == start_of_week(b)


def is_same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


def is_same_year(a: date, b: date) -> bool:
    return a.year == b.year


def month_label(year: int, month: int) -> str:
    """Short pt-BR month label, e.g. ``jan/24``."""
    return f"{MONTH_ABBREVIATIONS[month - 1]}/{year % 100:02d}"


def format_date(value: Any) -> str:
    """Format as ``dd/mm/yyyy``; empty values render as ``-``.

    Unparseable strings are returned unchanged.
    """
    if value is None or value == "":
        return "-"
    try:
        day = to_calendar_date(value)
    except ValueError:
        return str(value)
    return day.strftime("%d/%m/%Y")
