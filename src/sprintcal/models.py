# src/sprintcal/models.py
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class PeriodType(Enum):
    """Kind of sprint day. The value doubles as display precedence."""
    NONE = 0
    DEVELOPMENT = 1
    QA = 2
    RELEASE = 3

    @property
    def precedence(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]


_PERIOD_LABELS = {
    PeriodType.NONE: '',
    PeriodType.DEVELOPMENT: 'Development',
    PeriodType.QA: 'QA',
    PeriodType.RELEASE: 'Release',
}


@dataclass(frozen=True)
class CadenceConfig:
    """Repeating sprint cycle: weekday anchor plus development/QA lengths."""
    anchor_weekday: int           # 0=Sunday … 6=Saturday
    development_days: int
    qa_days: int

    def __post_init__(self):
        if not 0 <= self.anchor_weekday <= 6:
            raise ValueError(f"anchor_weekday must be 0..6, got {self.anchor_weekday}")
        if self.development_days < 1:
            raise ValueError(f"development_days must be positive, got {self.development_days}")
        if self.qa_days < 1:
            raise ValueError(f"qa_days must be positive, got {self.qa_days}")

    @property
    def cycle_length(self) -> int:
        # development + QA + release day
        return self.development_days + self.qa_days + 1


@dataclass(frozen=True)
class SprintRange:
    """One concrete sprint: development window, QA window and release day."""
    development_start: date
    development_end: date
    qa_start: date
    qa_end: date
    release_date: date
    sprint_id: str


@dataclass(frozen=True)
class PeriodInfo:
    """A single sprint claiming a calendar day."""
    type: PeriodType
    sprint_id: str
    release_date: date
    label: str


@dataclass(frozen=True)
class CalendarConfig:
    start_day_of_week: int
    development_days: int
    qa_days: int
    display_months: int
    center_date: Optional[date] = None

    @property
    def cadence(self) -> CadenceConfig:
        return CadenceConfig(self.start_day_of_week, self.development_days, self.qa_days)


@dataclass
class CalendarDay:
    date: date
    is_today: bool = False
    periods: List[PeriodInfo] = field(default_factory=list)


@dataclass
class CalendarMonth:
    year: int
    month: int                    # 1..12
    days: List[Optional[CalendarDay]] = field(default_factory=list)   # None = padding before the 1st
