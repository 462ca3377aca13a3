"""Holiday lookup shared by every strategy."""

from __future__ import annotations

import datetime
from collections.abc import Iterable

from daysoff.models import DayOff, DayOffType, Holiday

HolidayIndex = dict[datetime.date, DayOff]
"""Weekday holidays keyed by calendar date."""

HolidayLike = Holiday | tuple[datetime.date, str]


def is_weekend(d: datetime.date) -> bool:
    return d.weekday() >= 5


def as_date(value: datetime.date) -> datetime.date:
    """Drop the time component of *value*, if any."""
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def date_window(start: datetime.date, length: int) -> tuple[datetime.date, ...]:
    """Return the *length* consecutive dates beginning at *start*."""
    return tuple(start + datetime.timedelta(days=i) for i in range(length))


def build_index(
    public_holidays: Iterable[HolidayLike],
    company_holidays: Iterable[HolidayLike],
) -> HolidayIndex:
    """Merge public and company holidays into one index.

    Public holidays go in first; when two share a date the first one
    supplied is kept.  A company holiday always replaces whatever is
    already on its date.  Entries falling on a Saturday or Sunday are
    dropped at the end since weekends are free anyway.
    """
    index: HolidayIndex = {}

    for d, name in public_holidays:
        d = as_date(d)
        index.setdefault(d, DayOff(d, DayOffType.PUBLIC_HOLIDAY, name))

    for d, name in company_holidays:
        d = as_date(d)
        index[d] = DayOff(d, DayOffType.COMPANY_HOLIDAY, name)

    return {d: day for d, day in index.items() if not is_weekend(d)}
