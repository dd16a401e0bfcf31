# src/sprintcal/date_utils.py
from datetime import date, datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime]

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]

# 0=Sunday, matching weekday_of()
WEEKDAY_NAMES = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']


def to_day(value: DateLike) -> date:
    """Strip any time of day, leaving the plain calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def add_days(value: DateLike, days: int) -> date:
    return to_day(value) + timedelta(days=days)


def is_same_day(a: DateLike, b: DateLike) -> bool:
    a, b = to_day(a), to_day(b)
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def is_today(value: DateLike, today: DateLike) -> bool:
    return is_same_day(value, today)


def weekday_of(value: DateLike) -> int:
    """0=Sunday … 6=Saturday (Python's own weekday() starts on Monday)."""
    return to_day(value).isoweekday() % 7


def first_day_of_month(value: DateLike) -> date:
    return to_day(value).replace(day=1)


def last_day_of_month(value: DateLike) -> date:
    return first_day_of_month(value) + relativedelta(months=1, days=-1)


def days_in_month(value: DateLike) -> int:
    return last_day_of_month(value).day


def add_months(value: DateLike, months: int) -> date:
    """Month arithmetic; the day is clamped to the target month's length."""
    return to_day(value) + relativedelta(months=months)


def format_date(value: DateLike) -> str:
    """YYYY-MM-DD"""
    return to_day(value).isoformat()


def parse_date(text: str) -> date:
    """Parse YYYY-MM-DD, month and day may be unpadded (2025-3-1). Raises ValueError otherwise."""
    parts = text.strip().split('-')
    if len(parts) != 3:
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    year, month, day = (int(p) for p in parts)
    return date(year, month, day)


def format_release_date(value: DateLike) -> str:
    """YYYY/MM/DD, used for sprint ids and labels."""
    d = to_day(value)
    return f"{d.year}/{d.month:02d}/{d.day:02d}"


def month_name(month: int) -> str:
    """month: 1..12"""
    return MONTH_NAMES[month - 1]


def weekday_name(weekday: int) -> str:
    return WEEKDAY_NAMES[weekday]
