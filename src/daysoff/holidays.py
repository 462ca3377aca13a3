"""Built-in public holiday presets and regional filtering.

Each preset returns ``Holiday(date, name)`` pairs for a given year.
US presets use *observed* dates: a holiday on Saturday is observed the
preceding Friday, one on Sunday the following Monday.  German presets
use the calendar date; nationwide holidays only, regional ones can be
passed through :func:`regional_holidays`.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from dateutil.easter import easter

from daysoff.index import as_date
from daysoff.models import Holiday

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> datetime.date:
    """Return the *n*-th occurrence of *weekday* in *month* of *year*.

    *weekday* follows ``datetime`` convention: 0 = Monday … 6 = Sunday.
    *n* is 1-based (1 = first, 2 = second, …).
    """
    first = datetime.date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    return first + datetime.timedelta(days=delta, weeks=n - 1)


def _last_weekday(year: int, month: int, weekday: int) -> datetime.date:
    """Return the last occurrence of *weekday* in *month* of *year*."""
    if month == 12:
        last = datetime.date(year, 12, 31)
    else:
        last = datetime.date(year, month + 1, 1) - datetime.timedelta(days=1)
    delta = (last.weekday() - weekday) % 7
    return last - datetime.timedelta(days=delta)


def _observed(d: datetime.date) -> datetime.date:
    """Shift a holiday to its *observed* date (Sat→Fri, Sun→Mon)."""
    if d.weekday() == 5:
        return d - datetime.timedelta(days=1)
    if d.weekday() == 6:
        return d + datetime.timedelta(days=1)
    return d


# ---------------------------------------------------------------------------
# Country presets
# ---------------------------------------------------------------------------

PRESETS: dict[str, str] = {
    "de": "Germany nationwide public holidays",
    "us": "United States federal holidays",
}


def us_holidays(year: int) -> list[Holiday]:
    """US federal holidays (observed) for *year*."""
    return sorted(
        [
            Holiday(_observed(datetime.date(year, 1, 1)), "New Year's Day"),
            Holiday(_nth_weekday(year, 1, 0, 3), "Martin Luther King Jr. Day"),
            Holiday(_nth_weekday(year, 2, 0, 3), "Presidents' Day"),
            Holiday(_last_weekday(year, 5, 0), "Memorial Day"),
            Holiday(_observed(datetime.date(year, 6, 19)), "Juneteenth"),
            Holiday(_observed(datetime.date(year, 7, 4)), "Independence Day"),
            Holiday(_nth_weekday(year, 9, 0, 1), "Labor Day"),
            Holiday(_nth_weekday(year, 11, 3, 4), "Thanksgiving"),
            Holiday(_observed(datetime.date(year, 12, 25)), "Christmas Day"),
        ]
    )


def de_holidays(year: int) -> list[Holiday]:
    """German nationwide public holidays for *year*."""
    easter_sunday = easter(year)

    def after_easter(days: int) -> datetime.date:
        return easter_sunday + datetime.timedelta(days=days)

    return sorted(
        [
            Holiday(datetime.date(year, 1, 1), "Neujahr"),
            Holiday(after_easter(-2), "Karfreitag"),
            Holiday(after_easter(1), "Ostermontag"),
            Holiday(datetime.date(year, 5, 1), "Tag der Arbeit"),
            Holiday(after_easter(39), "Christi Himmelfahrt"),
            Holiday(after_easter(50), "Pfingstmontag"),
            Holiday(datetime.date(year, 10, 3), "Tag der Deutschen Einheit"),
            Holiday(datetime.date(year, 12, 25), "1. Weihnachtstag"),
            Holiday(datetime.date(year, 12, 26), "2. Weihnachtstag"),
        ]
    )


_PRESET_FNS: dict[str, Callable[[int], list[Holiday]]] = {
    "de": de_holidays,
    "us": us_holidays,
}


def get_holidays(country: str, year: int) -> list[Holiday]:
    """Return the holidays of the given *country* preset for *year*.

    Raises ``KeyError`` if the country is not supported.
    """
    fn = _PRESET_FNS.get(country.lower())
    if fn is None:
        supported = ", ".join(sorted(PRESETS))
        msg = f"Unknown country preset {country!r}. Supported: {supported}"
        raise KeyError(msg)
    return fn(year)


# ---------------------------------------------------------------------------
# Regional records
# ---------------------------------------------------------------------------


def regional_holidays(
    records: Iterable[Mapping[str, Any]],
    region: str | None = None,
) -> list[Holiday]:
    """Reduce provider records to the holidays that apply in *region*.

    Each record needs ``date`` (a date or ISO string) and ``name``, and
    may carry ``nationwide`` (default ``True``) and ``regions`` (codes
    the holiday applies to).  Nationwide holidays are always kept;
    regional ones only when *region* is listed.  Only the first holiday
    on any given date is kept.
    """
    seen: set[datetime.date] = set()
    result: list[Holiday] = []
    for record in records:
        raw = record["date"]
        d = datetime.date.fromisoformat(raw[:10]) if isinstance(raw, str) else as_date(raw)
        if not record.get("nationwide", True):
            regions = record.get("regions") or ()
            if region is None or region not in regions:
                continue
        if d in seen:
            continue
        seen.add(d)
        result.append(Holiday(d, str(record["name"])))
    return sorted(result)
