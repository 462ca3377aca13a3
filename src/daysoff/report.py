"""Plain-text rendering of a plan."""

from __future__ import annotations

import calendar
import datetime

from daysoff.models import DayOffType, HolidayPeriod
from daysoff.optimizer import summarize

WIDTH = 64

_CELL_MARKS = {
    DayOffType.USER_HOLIDAY: "P",
    DayOffType.PUBLIC_HOLIDAY: "H",
    DayOffType.COMPANY_HOLIDAY: "C",
}


def _date_range(start: datetime.date, end: datetime.date) -> str:
    if start == end:
        return start.strftime("%a, %b %d")
    return f"{start.strftime('%a, %b %d')} -> {end.strftime('%a, %b %d')}"


def format_periods(periods: list[HolidayPeriod], title: str, personal_days: int) -> str:
    """Return a human-readable summary of the periods one strategy produced."""
    lines: list[str] = []

    lines.append("")
    lines.append("=" * WIDTH)
    lines.append(f"  OPTION: {title}")
    lines.append("=" * WIDTH)

    if not periods:
        lines.append("")
        lines.append("  No periods generated.")
        return "\n".join(lines)

    summary = summarize(periods)
    lines.append("")
    lines.append(f"  Total days off:         {summary.total_days_off}")
    lines.append(f"  Personal days used:     {summary.personal_days_used} / {personal_days}")
    lines.append(f"  Public holidays used:   {summary.public_holidays_used}")
    lines.append(f"  Company holidays used:  {summary.company_holidays_used}")
    if summary.personal_days_used > 0:
        lines.append(
            f"  Efficiency: {summary.total_days_off / summary.personal_days_used:.1f}x"
            " (days off per personal day)"
        )
    lines.append("")

    lines.append("  Holiday Periods:")
    lines.append("  " + "-" * (WIDTH - 4))

    for i, period in enumerate(periods, 1):
        lines.append(f"  {i:>2}. {_date_range(period.start_date, period.end_date)}  ({period.description})")

        parts: list[str] = []
        if period.personal_days_used:
            parts.append(f"{period.personal_days_used} personal")
        if period.public_holidays_used:
            parts.append(f"{period.public_holidays_used} public")
        if period.company_holidays_used:
            parts.append(f"{period.company_holidays_used} company")
        if period.weekend_days:
            parts.append(f"{period.weekend_days} weekend")
        lines.append(f"      {' + '.join(parts)}")

        for day in period.days:
            if day.name:
                lines.append(f"      {day.date.strftime('%a, %b %d'):>12}  {day.name}")
        lines.append("")

    lines.append("  Days to request off:")
    for period in periods:
        for d in period.personal_dates:
            lines.append(f"    -> {d.strftime('%A, %B %d, %Y')}")

    return "\n".join(lines)


def format_calendar_view(periods: list[HolidayPeriod], year: int) -> str:
    """Return a month-by-month calendar of the months touched by *periods*."""
    marks: dict[datetime.date, str] = {}
    for period in periods:
        for day in period.days:
            marks[day.date] = _CELL_MARKS.get(day.type, "*")

    active_months = {d.month for d in marks if d.year == year}
    if not active_months:
        return ""

    lines: list[str] = [
        "",
        f"  Calendar View {year}",
        "  Legend: P=Personal  H=Public holiday  C=Company holiday  *=Weekend off",
        "",
    ]

    cal = calendar.Calendar(firstweekday=0)

    for month in sorted(active_months):
        lines.append(f"  {calendar.month_name[month]} {year}")
        lines.append("  Mo  Tu  We  Th  Fr  Sa  Su")

        row = ""
        for day_num, weekday in cal.itermonthdays2(year, month):
            if day_num == 0:
                row += "    "
            else:
                mark = marks.get(datetime.date(year, month, day_num))
                row += f" {day_num:>2}{mark}" if mark else f"  {day_num:>2}"

            if weekday == 6:
                lines.append(row)
                row = ""

        if row.strip():
            lines.append(row)
        lines.append("")

    return "\n".join(lines)
