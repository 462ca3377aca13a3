"""Data types shared by the optimizer, the strategies and the CLI."""

from __future__ import annotations

import datetime
from enum import Enum
from typing import NamedTuple


class DayOffType(str, Enum):
    """Why a given date inside a holiday period is a day off."""

    PUBLIC_HOLIDAY = "public_holiday"
    COMPANY_HOLIDAY = "company_holiday"
    WEEKEND = "weekend"
    USER_HOLIDAY = "user_holiday"


class Holiday(NamedTuple):
    """A named holiday on a calendar date (public or company)."""

    date: datetime.date
    name: str


class DayOff(NamedTuple):
    """The classification of a single date."""

    date: datetime.date
    type: DayOffType
    name: str | None = None

    @property
    def is_personal(self) -> bool:
        return self.type is DayOffType.USER_HOLIDAY


class Candidate(NamedTuple):
    """A contiguous window under evaluation.

    ``longest_free_run`` is the longest streak of holidays/weekend days
    inside the window, and ``holiday_density`` the summed density of its
    dates when the strategy precomputes one.
    """

    days: tuple[datetime.date, ...]
    personal_days: int
    public_days: int
    company_days: int
    weekend_days: int
    longest_free_run: int = 0
    holiday_density: int = 0
    score: float = 0.0

    @property
    def length(self) -> int:
        return len(self.days)

    @property
    def start_date(self) -> datetime.date:
        return self.days[0]

    @property
    def end_date(self) -> datetime.date:
        return self.days[-1]

    @property
    def holiday_days(self) -> int:
        return self.public_days + self.company_days

    @property
    def efficiency(self) -> float:
        """Share of the window that costs no personal days."""
        return (self.holiday_days + self.weekend_days) / self.length


class HolidayPeriod(NamedTuple):
    """A selected, non-overlapping block of days off."""

    start_date: datetime.date
    end_date: datetime.date
    days: tuple[DayOff, ...]
    strategy: str
    personal_days_used: int
    public_holidays_used: int
    company_holidays_used: int
    weekend_days: int
    total_days: int
    description: str

    @property
    def personal_dates(self) -> list[datetime.date]:
        return [d.date for d in self.days if d.is_personal]


class PlanSummary(NamedTuple):
    """Totals across all periods returned by one run."""

    periods: int
    total_days_off: int
    personal_days_used: int
    public_holidays_used: int
    company_holidays_used: int
    weekend_days: int
