"""Sprint period calculations: pure functions, no I/O, no wall clock.

Example with a Tuesday cadence, 7 development days and 7 QA days:

  Sprint released 2025/03/11
    - development 2025-02-25 (Tue) .. 2025-03-03 (Mon)
    - QA          2025-03-04 (Tue) .. 2025-03-10 (Mon)
    - release     2025-03-11 (Tue)
  Sprint released 2025/03/18
    - development 2025-03-04 .. 2025-03-10
    - QA          2025-03-11 .. 2025-03-17
    - release     2025-03-18

Development of the next sprint starts on the QA start of the previous one,
so a day may belong to several sprints at once; see classify_date().
"""
import math
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List

from .date_utils import DateLike, add_days, format_release_date, is_same_day, to_day, weekday_of
from .models import CadenceConfig, PeriodInfo, PeriodType, SprintRange

MAX_PERIODS_PER_DAY = 3


class Direction(Enum):
    BACKWARD = 'backward'
    FORWARD = 'forward'


def nearest_weekday(target_weekday: int, from_date: DateLike, direction: Direction) -> date:
    """
    Nearest date with the given weekday (0=Sunday) relative to from_date.
    BACKWARD counts from_date itself, FORWARD never does (same weekday -> +7),
    so stepping forward always moves.
    """
    if not 0 <= target_weekday <= 6:
        raise ValueError(f"weekday must be 0..6, got {target_weekday}")
    if not isinstance(direction, Direction):
        raise ValueError(f"direction must be a Direction, got {direction!r}")
    base = to_day(from_date)
    current = weekday_of(base)

    if direction is Direction.FORWARD:
        offset = (target_weekday - current + 7) % 7
        return add_days(base, offset or 7)

    offset = (current - target_weekday + 7) % 7
    return add_days(base, -offset)


def sprint_id_for(release_date: DateLike) -> str:
    return f"Sprint-{format_release_date(release_date)}"


def period_label(period_type: PeriodType, release_date: DateLike) -> str:
    return f"Sprint released {format_release_date(release_date)} - {period_type.label}"


def _check_days(dev_days: int, qa_days: int):
    if dev_days < 1 or qa_days < 1:
        raise ValueError(f"development and QA days must be positive, got dev={dev_days}, qa={qa_days}")


def calculate_sprint_period(start_date: DateLike, dev_days: int, qa_days: int) -> SprintRange:
    """Derive development, QA and release dates for the sprint starting on start_date."""
    _check_days(dev_days, qa_days)
    start = to_day(start_date)
    development_end = add_days(start, dev_days - 1)
    qa_start = add_days(development_end, 1)
    qa_end = add_days(qa_start, qa_days - 1)
    # first day after QA that falls on the sprint's start weekday
    release_date = nearest_weekday(weekday_of(start), qa_end, Direction.FORWARD)

    return SprintRange(
        development_start=start,
        development_end=development_end,
        qa_start=qa_start,
        qa_end=qa_end,
        release_date=release_date,
        sprint_id=sprint_id_for(release_date),
    )


def next_sprint_after(sprint: SprintRange) -> date:
    """Development of the following sprint begins when QA of this one begins."""
    return sprint.qa_start


def _check_count(count: int):
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")


def expand_forward(anchor_start: DateLike, dev_days: int, qa_days: int, count: int) -> List[SprintRange]:
    _check_count(count)
    periods: List[SprintRange] = []
    start = to_day(anchor_start)
    for _ in range(count):
        period = calculate_sprint_period(start, dev_days, qa_days)
        periods.append(period)
        start = next_sprint_after(period)
    return periods


def expand_backward(anchor_start: DateLike, dev_days: int, qa_days: int, count: int) -> List[SprintRange]:
    """
    The anchor sprint plus count-1 earlier ones, one week apart.
    Returned earliest first.
    """
    _check_count(count)
    start = to_day(anchor_start)
    periods = [calculate_sprint_period(add_days(start, -7 * i), dev_days, qa_days) for i in range(count)]
    periods.sort(key=lambda p: to_day(p.release_date))
    return periods


def build_sprint_ranges(cadence: CadenceConfig, reference: DateLike, count: int) -> List[SprintRange]:
    """
    Sprints around `reference`: the current sprint starts on the most recent
    anchor weekday (reference included), count sprints are expanded in each
    direction from there.
    """
    anchor = nearest_weekday(cadence.anchor_weekday, reference, Direction.BACKWARD)
    past = expand_backward(anchor, cadence.development_days, cadence.qa_days, count)
    future = expand_forward(anchor, cadence.development_days, cadence.qa_days, count)

    # the anchor sprint shows up in both lists
    by_id: Dict[str, SprintRange] = {}
    for period in past + future:
        by_id.setdefault(period.sprint_id, period)
    return sorted(by_id.values(), key=lambda p: to_day(p.release_date))


def required_sprint_count(cadence: CadenceConfig, display_months: int) -> int:
    """Rough number of sprints per direction needed to fill display_months."""
    return math.ceil(display_months * 31 / cadence.cycle_length) * 2


def period_type_for(when: DateLike, sprint: SprintRange) -> PeriodType:
    day = to_day(when)
    if to_day(sprint.development_start) <= day <= to_day(sprint.development_end):
        return PeriodType.DEVELOPMENT
    if to_day(sprint.qa_start) <= day <= to_day(sprint.qa_end):
        return PeriodType.QA
    if is_same_day(day, sprint.release_date):
        return PeriodType.RELEASE
    return PeriodType.NONE


def classify_date(when: DateLike, ranges: Iterable[SprintRange]) -> List[PeriodInfo]:
    """
    All sprints claiming `when`, at most MAX_PERIODS_PER_DAY of them.

    One entry per sprint id (release beats QA beats development); when more
    sprints match, the ones releasing soonest are kept. Result is ordered by
    release date, then by period precedence.
    """
    day = to_day(when)
    found: Dict[str, PeriodInfo] = {}

    for sprint in ranges:
        period_type = period_type_for(day, sprint)
        if period_type is PeriodType.NONE:
            continue
        existing = found.get(sprint.sprint_id)
        if existing is not None and existing.type.precedence >= period_type.precedence:
            continue
        found[sprint.sprint_id] = PeriodInfo(
            type=period_type,
            sprint_id=sprint.sprint_id,
            release_date=to_day(sprint.release_date),
            label=period_label(period_type, sprint.release_date),
        )

    results = sorted(found.values(), key=lambda p: (p.release_date, p.type.precedence))
    return results[:MAX_PERIODS_PER_DAY]


def period_type_for_date(when: DateLike, ranges: Iterable[SprintRange]) -> PeriodType:
    """Type of the soonest-releasing sprint claiming `when`, or NONE."""
    for sprint in sorted(ranges, key=lambda p: to_day(p.release_date)):
        period_type = period_type_for(when, sprint)
        if period_type is not PeriodType.NONE:
            return period_type
    return PeriodType.NONE
