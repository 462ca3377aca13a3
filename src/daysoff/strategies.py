"""Strategy configurations.

A strategy decides which windows are worth looking at and how good they
are.  The optimizer only talks to the small set of hooks defined on
:class:`Strategy`:

  - ``passes``               ordered groups of window lengths
  - ``is_valid_start/end``   cheap weekday filters on a window's edges
  - ``min_weekend_days``     weekend days a window must contain
  - ``is_personal_count_valid``  personal days vs. remaining budget
  - ``accepts``              structural filter after classification
  - ``precompute``           optional per-run lookup
  - ``density``              holiday density map out of that lookup, if any
  - ``score`` / ``describe`` ranking and the human-readable label

Strategies:
  1. Long Weekend - 3-4 day weekends costing exactly one personal day
  2. Mid-Week     - 5-6 day breaks around a single weekend
  3. Week         - 7-9 day breaks around a single weekend
  4. Extended     - 10-15 day vacations, preferring summer/winter and
                    holiday-dense parts of the year
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from daysoff.index import HolidayIndex, is_weekend
from daysoff.models import Candidate, HolidayPeriod

# datetime weekday numbers
MONDAY, THURSDAY, FRIDAY, SATURDAY = 0, 3, 4, 5

DensityMap = dict[datetime.date, int]


class StrategyType(str, Enum):
    LONG_WEEKEND = "long_weekend"
    MID_WEEK = "mid_week"
    WEEK = "week"
    EXTENDED = "extended"


class Strategy(ABC):
    """Defaults shared by all strategies: no edge filters, no minimums."""

    type: StrategyType
    name: str = ""
    passes: tuple[tuple[int, ...], ...] = ()
    min_personal_days: int = 0

    def is_valid_start(self, d: datetime.date, length: int, pass_index: int) -> bool:
        return True

    def is_valid_end(self, d: datetime.date, length: int, pass_index: int) -> bool:
        return True

    def min_weekend_days(self, length: int, pass_index: int) -> int:
        return 0

    def is_personal_count_valid(self, count: int, budget: int) -> bool:
        return count <= budget

    def accepts(self, candidate: Candidate, pass_index: int) -> bool:
        return True

    def precompute(self, year: int, index: HolidayIndex) -> Any:
        return None

    def density(self, aux: Any) -> DensityMap | None:
        return None

    @abstractmethod
    def score(self, candidate: Candidate, pass_index: int, aux: Any = None) -> float:
        """Rank a classified window; higher is better."""

    def describe(self, period: HolidayPeriod, candidate: Candidate, aux: Any = None) -> str:
        return f"{period.total_days}-day break"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.type.value}>"


# ---------------------------------------------------------------------------
# Long weekend
# ---------------------------------------------------------------------------


class LongWeekend(Strategy):
    """Four-day weekends first, then three-day ones, one personal day each.

    Every valid window in a pass is equally good, so the selection falls
    back to chronological order.
    """

    type = StrategyType.LONG_WEEKEND
    name = "Long Weekend"
    passes = ((4,), (3,))

    def is_valid_start(self, d: datetime.date, length: int, pass_index: int) -> bool:
        return d.weekday() in (THURSDAY, FRIDAY, SATURDAY)

    def min_weekend_days(self, length: int, pass_index: int) -> int:
        return 1 if length == 3 else 2

    def is_personal_count_valid(self, count: int, budget: int) -> bool:
        return count == 1 and count <= budget

    def score(self, candidate: Candidate, pass_index: int, aux: Any = None) -> float:
        return 100 if pass_index == 0 else 50

    def describe(self, period: HolidayPeriod, candidate: Candidate, aux: Any = None) -> str:
        return f"{period.total_days}-day long weekend"


# ---------------------------------------------------------------------------
# Mid-week
# ---------------------------------------------------------------------------


class MidWeek(Strategy):
    type = StrategyType.MID_WEEK
    name = "Mid-Week"
    passes = ((6, 5),)

    def is_valid_start(self, d: datetime.date, length: int, pass_index: int) -> bool:
        return d.weekday() != MONDAY

    def is_valid_end(self, d: datetime.date, length: int, pass_index: int) -> bool:
        return d.weekday() != FRIDAY

    def min_weekend_days(self, length: int, pass_index: int) -> int:
        return 2

    def accepts(self, candidate: Candidate, pass_index: int) -> bool:
        return candidate.weekend_days == 2

    def score(self, candidate: Candidate, pass_index: int, aux: Any = None) -> float:
        return (
            candidate.holiday_days * 10
            + candidate.weekend_days * 5
            - candidate.personal_days * 3
            + (2 if candidate.length == 6 else 0)
        )

    def describe(self, period: HolidayPeriod, candidate: Candidate, aux: Any = None) -> str:
        return f"{period.total_days}-day midweek break"


# ---------------------------------------------------------------------------
# Week
# ---------------------------------------------------------------------------


class Week(Strategy):
    """A week-long break wrapped around exactly one weekend.

    Windows where holidays and the weekend form a run of three or more
    free days in a row get a flat bonus.
    """

    type = StrategyType.WEEK
    name = "Week"
    passes = ((9, 8, 7),)

    def min_weekend_days(self, length: int, pass_index: int) -> int:
        return 2

    def accepts(self, candidate: Candidate, pass_index: int) -> bool:
        return candidate.weekend_days == 2

    def score(self, candidate: Candidate, pass_index: int, aux: Any = None) -> float:
        cluster_bonus = 50 if candidate.longest_free_run >= 3 else 0
        return (
            candidate.efficiency * 100
            + candidate.holiday_days * 10
            + candidate.weekend_days * 5
            + cluster_bonus
            + (candidate.length - 7) * 3
            - candidate.personal_days * 3
        )

    def describe(self, period: HolidayPeriod, candidate: Candidate, aux: Any = None) -> str:
        n = period.total_days
        if candidate.longest_free_run >= 3:
            return f"{n}-day break around public holidays"
        if period.public_holidays_used >= 2:
            return f"{n}-day break with public holidays"
        return f"{n}-day week break"


# ---------------------------------------------------------------------------
# Extended
# ---------------------------------------------------------------------------

DENSITY_RADIUS = 7
HOLIDAY_DENSITY_WEIGHT = 3
WEEKEND_DENSITY_WEIGHT = 1


def holiday_density(year: int, index: HolidayIndex) -> DensityMap:
    """Score every date of *year* by the holidays and weekends around it.

    Each date looks ``DENSITY_RADIUS`` days either way (staying inside
    the year): holidays count 3, weekend days count 1.
    """
    start = datetime.date(year, 1, 1)
    end = datetime.date(year, 12, 31)
    num_days = (end - start).days + 1
    dates = [start + datetime.timedelta(days=i) for i in range(num_days)]
    weights = [
        HOLIDAY_DENSITY_WEIGHT if d in index else WEEKEND_DENSITY_WEIGHT if is_weekend(d) else 0
        for d in dates
    ]

    density: DensityMap = {}
    for i, d in enumerate(dates):
        lo = max(0, i - DENSITY_RADIUS)
        hi = min(num_days, i + DENSITY_RADIUS + 1)
        density[d] = sum(weights[lo:hi])
    return density


def season_of(d: datetime.date) -> str | None:
    """Return ``"summer"`` or ``"winter"`` for popular travel dates."""
    if datetime.date(d.year, 6, 15) <= d <= datetime.date(d.year, 9, 15):
        return "summer"
    if datetime.date(d.year, 12, 15) <= d <= datetime.date(d.year, 12, 31):
        return "winter"
    return None


class Extended(Strategy):
    """Two-week-ish vacations.

    The first pass looks at 13-15 day windows spanning at least two
    weekends; the second falls back to 10-12 day windows around a
    single weekend.  Windows starting in summer (Jun 15 - Sep 15) or
    late December get a season bonus, and the average holiday density
    of the window is rewarded so breaks drift toward holiday clusters.
    """

    type = StrategyType.EXTENDED
    name = "Extended"
    passes = ((15, 14, 13), (12, 11, 10))
    min_personal_days = 5

    def min_weekend_days(self, length: int, pass_index: int) -> int:
        return 4 if pass_index == 0 else 2

    def accepts(self, candidate: Candidate, pass_index: int) -> bool:
        return pass_index == 0 or candidate.weekend_days == 2

    def precompute(self, year: int, index: HolidayIndex) -> DensityMap:
        return holiday_density(year, index)

    def density(self, aux: Any) -> DensityMap | None:
        return aux

    def score(self, candidate: Candidate, pass_index: int, aux: Any = None) -> float:
        season_bonus = 50 if season_of(candidate.start_date) else 0
        avg_density = candidate.holiday_density / candidate.length
        return (
            candidate.efficiency * 150
            + avg_density * 10
            + season_bonus
            + candidate.holiday_days * 15
            + candidate.weekend_days * 7
            + (candidate.length - 10) * 5
            - candidate.personal_days * 2
        )

    def describe(self, period: HolidayPeriod, candidate: Candidate, aux: Any = None) -> str:
        n = period.total_days
        season = season_of(period.start_date)
        if season == "summer":
            return f"{n}-day summer vacation"
        if season == "winter":
            return f"{n}-day winter holiday"
        if candidate.holiday_density / n > 1.0:
            return f"{n}-day extended break around holidays"
        return f"{n}-day extended break"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

STRATEGIES: dict[StrategyType, Strategy] = {
    s.type: s for s in (LongWeekend(), MidWeek(), Week(), Extended())
}


def get_strategy(value: StrategyType | str) -> Strategy | None:
    """Look up a strategy by enum, value (``"mid_week"``) or name (``"MID_WEEK"``).

    Returns ``None`` for anything unrecognized.
    """
    if isinstance(value, StrategyType):
        return STRATEGIES.get(value)
    key = str(value).strip().lower().replace("-", "_")
    for stype, strategy in STRATEGIES.items():
        if key == stype.value:
            return strategy
    return None
