from datetime import date
from typing import List, Sequence, Tuple

from .date_utils import DateLike, add_months, days_in_month, is_today, to_day, weekday_of
from .models import CalendarConfig, CalendarDay, CalendarMonth, SprintRange
from .sprint_logic import build_sprint_ranges, classify_date, required_sprint_count


def generate_calendar_month(year: int, month: int, ranges: Sequence[SprintRange],
                            today: DateLike) -> CalendarMonth:
    """
    One month laid out Sunday-first: leading padding cells are None, then
    one CalendarDay per day carrying every sprint that claims it.
    """
    first = date(year, month, 1)
    days: List = [None] * weekday_of(first)

    for day_no in range(1, days_in_month(first) + 1):
        d = date(year, month, day_no)
        days.append(CalendarDay(
            date=d,
            is_today=is_today(d, today),
            periods=classify_date(d, ranges),
        ))

    return CalendarMonth(year=year, month=month, days=days)


def display_start_month(center: DateLike, display_months: int) -> Tuple[int, int]:
    """(year, month) of the first displayed month, half the span before center."""
    first = add_months(to_day(center).replace(day=1), -(display_months // 2))
    return first.year, first.month


def generate_calendar_months(config: CalendarConfig, ranges: Sequence[SprintRange],
                             today: DateLike) -> List[CalendarMonth]:
    center = config.center_date or to_day(today)
    year, month = display_start_month(center, config.display_months)
    first = date(year, month, 1)

    months: List[CalendarMonth] = []
    for i in range(config.display_months):
        current = add_months(first, i)
        months.append(generate_calendar_month(current.year, current.month, ranges, today))
    return months


def build_calendar(config: CalendarConfig, today: DateLike) -> List[CalendarMonth]:
    """Whole pipeline: cadence -> sprint ranges -> month grids."""
    cadence = config.cadence
    reference = config.center_date or to_day(today)
    count = required_sprint_count(cadence, config.display_months)
    ranges = build_sprint_ranges(cadence, reference, count)
    return generate_calendar_months(config, ranges, today)
