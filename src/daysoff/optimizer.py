"""Days-off optimizer

Place a fixed budget of personal days so that, together with weekends
and public/company holidays, they form the longest possible breaks.

The search runs per strategy, in passes.  Each pass:

  1. enumerates every window of the pass's lengths inside the year,
     skipping windows that start before *today*, fail the strategy's
     weekday filters or touch a date already claimed this run,
  2. classifies each date (holiday > weekend > personal day), applies
     the strategy's validity rules and scores what survives,
  3. greedily takes the best-scoring windows that still fit the
     remaining budget and do not overlap anything taken before.

Ties keep discovery order, which is chronological.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from daysoff.index import HolidayIndex, HolidayLike, build_index, date_window, is_weekend
from daysoff.models import (
    Candidate,
    DayOff,
    DayOffType,
    HolidayPeriod,
    PlanSummary,
)
from daysoff.strategies import Strategy, StrategyType, get_strategy

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100


# ---------------------------------------------------------------------------
# Run context
# ---------------------------------------------------------------------------


class RunContext:
    """Mutable state of one optimization run.

    Holds the remaining personal-day budget, the dates already claimed
    by accepted periods and the periods themselves.  Nothing here is
    shared between runs.
    """

    def __init__(
        self,
        strategy: Strategy,
        index: HolidayIndex,
        year: int,
        budget: int,
        today: datetime.date,
    ):
        self.strategy = strategy
        self.index = index
        self.year = year
        self.budget = budget
        self.today = today

        self.start_date = datetime.date(year, 1, 1)
        self.end_date = datetime.date(year, 12, 31)
        self.used_dates: set[datetime.date] = set()
        self.periods: list[HolidayPeriod] = []
        self.aux: Any = strategy.precompute(year, index)

    @property
    def exhausted(self) -> bool:
        return self.budget <= 0

    def overlaps(self, days: Iterable[datetime.date]) -> bool:
        used = self.used_dates
        return any(d in used for d in days)

    def claim(self, period: HolidayPeriod) -> None:
        """Record an accepted period and charge its personal days."""
        self.periods.append(period)
        self.used_dates.update(d.date for d in period.days)
        self.budget -= period.personal_days_used


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------


def iter_windows(
    ctx: RunContext, length: int, pass_index: int
) -> Iterator[tuple[datetime.date, ...]]:
    """Yield every window of *length* days that passes the cheap filters."""
    strategy = ctx.strategy
    one_day = datetime.timedelta(days=1)
    span = datetime.timedelta(days=length - 1)

    d = ctx.start_date
    while d <= ctx.end_date:
        start = d
        d += one_day

        if not strategy.is_valid_start(start, length, pass_index):
            continue
        if start < ctx.today:
            continue
        end = start + span
        if end > ctx.end_date:
            # Every later start overflows too
            break
        if not strategy.is_valid_end(end, length, pass_index):
            continue

        days = date_window(start, length)
        # Checked last: the claimed set only grows between passes
        if ctx.overlaps(days):
            continue
        yield days


# ---------------------------------------------------------------------------
# Classification and scoring
# ---------------------------------------------------------------------------


def classify_day(d: datetime.date, index: HolidayIndex) -> DayOff:
    """Classify one date: holiday, then weekend, then personal day."""
    holiday = index.get(d)
    if holiday is not None:
        return holiday
    if is_weekend(d):
        return DayOff(d, DayOffType.WEEKEND)
    return DayOff(d, DayOffType.USER_HOLIDAY)


def classify_window(
    days: tuple[datetime.date, ...],
    index: HolidayIndex,
    density: dict[datetime.date, int] | None = None,
) -> Candidate:
    """Count what each date of *days* contributes to the window."""
    personal = public = company = weekend = 0
    streak = longest = 0
    total_density = 0

    for d in days:
        kind = classify_day(d, index).type
        if kind is DayOffType.PUBLIC_HOLIDAY:
            public += 1
        elif kind is DayOffType.COMPANY_HOLIDAY:
            company += 1
        elif kind is DayOffType.WEEKEND:
            weekend += 1
        else:
            personal += 1

        if kind is DayOffType.USER_HOLIDAY:
            streak = 0
        else:
            streak += 1
            longest = max(longest, streak)

        if density is not None:
            total_density += density.get(d, 0)

    return Candidate(
        days=days,
        personal_days=personal,
        public_days=public,
        company_days=company,
        weekend_days=weekend,
        longest_free_run=longest,
        holiday_density=total_density,
    )


def evaluate_window(
    ctx: RunContext, days: tuple[datetime.date, ...], pass_index: int
) -> Candidate | None:
    """Classify and score *days*, or return ``None`` if the strategy rejects it."""
    strategy = ctx.strategy
    density = strategy.density(ctx.aux)
    candidate = classify_window(days, ctx.index, density)

    if not strategy.is_personal_count_valid(candidate.personal_days, ctx.budget):
        return None
    if candidate.weekend_days < strategy.min_weekend_days(candidate.length, pass_index):
        return None
    if not strategy.accepts(candidate, pass_index):
        return None

    return candidate._replace(score=strategy.score(candidate, pass_index, ctx.aux))


def generate_candidates(
    ctx: RunContext, lengths: Iterable[int], pass_index: int
) -> list[Candidate]:
    """Return the scored candidates of one pass, in discovery order."""
    candidates: list[Candidate] = []
    for length in lengths:
        for days in iter_windows(ctx, length, pass_index):
            candidate = evaluate_window(ctx, days, pass_index)
            if candidate is not None:
                candidates.append(candidate)
    return candidates


# ---------------------------------------------------------------------------
# Greedy selection
# ---------------------------------------------------------------------------


def build_period(ctx: RunContext, candidate: Candidate) -> HolidayPeriod | None:
    """Turn *candidate* into a period with a day-by-day breakdown.

    Returns ``None`` (and logs a warning) when the breakdown disagrees
    with the candidate's personal-day count.
    """
    days = tuple(classify_day(d, ctx.index) for d in candidate.days)
    personal = sum(1 for d in days if d.is_personal)
    if personal != candidate.personal_days:
        logger.warning(
            "Personal day mismatch for window starting %s: expected %d, found %d; skipping",
            candidate.start_date.isoformat(),
            candidate.personal_days,
            personal,
        )
        return None

    period = HolidayPeriod(
        start_date=candidate.start_date,
        end_date=candidate.end_date,
        days=days,
        strategy=ctx.strategy.type.value,
        personal_days_used=candidate.personal_days,
        public_holidays_used=candidate.public_days,
        company_holidays_used=candidate.company_days,
        weekend_days=candidate.weekend_days,
        total_days=candidate.length,
        description="",
    )
    return period._replace(description=ctx.strategy.describe(period, candidate, ctx.aux))


def select(ctx: RunContext, candidates: list[Candidate]) -> list[HolidayPeriod]:
    """Greedily accept the best candidates that still fit.

    Candidates are re-checked against the *current* budget and claimed
    dates, since earlier picks in the same pass change both.
    """
    strategy = ctx.strategy
    selected: list[HolidayPeriod] = []

    # sorted() is stable, equal scores stay chronological
    for candidate in sorted(candidates, key=lambda c: c.score, reverse=True):
        if ctx.exhausted:
            break
        if not strategy.is_personal_count_valid(candidate.personal_days, ctx.budget):
            continue
        if ctx.overlaps(candidate.days):
            continue

        period = build_period(ctx, candidate)
        if period is None:
            continue
        ctx.claim(period)
        selected.append(period)

    return selected


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _check_inputs(personal_days: int, year: int) -> None:
    if isinstance(personal_days, bool) or not isinstance(personal_days, int):
        msg = f"personal_days must be an integer, got {personal_days!r}"
        raise TypeError(msg)
    if personal_days < 0:
        msg = f"personal_days must be >= 0, got {personal_days}"
        raise ValueError(msg)
    if not MIN_YEAR <= year <= MAX_YEAR:
        msg = f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}"
        raise ValueError(msg)


def run_strategy(ctx: RunContext) -> list[HolidayPeriod]:
    """Run every pass of the context's strategy and return periods by start date."""
    strategy = ctx.strategy

    if ctx.budget < strategy.min_personal_days:
        logger.info(
            "Skipping %s: needs at least %d personal days, %d available",
            strategy.name,
            strategy.min_personal_days,
            ctx.budget,
        )
        return []

    for pass_index, lengths in enumerate(strategy.passes):
        if ctx.exhausted:
            break
        candidates = generate_candidates(ctx, lengths, pass_index)
        selected = select(ctx, candidates)
        logger.debug(
            "%s pass %d %s: %d candidates, %d selected, %d personal days left",
            strategy.name,
            pass_index + 1,
            list(lengths),
            len(candidates),
            len(selected),
            ctx.budget,
        )

    return sorted(ctx.periods, key=lambda p: p.start_date)


def optimize(
    strategy: StrategyType | str,
    public_holidays: Iterable[HolidayLike],
    company_holidays: Iterable[HolidayLike],
    personal_days: int,
    year: int,
    today: datetime.date | None = None,
) -> list[HolidayPeriod]:
    """Plan *personal_days* across *year* using *strategy*.

    Parameters
    ----------
    strategy : StrategyType or str
        ``long_weekend``, ``mid_week``, ``week`` or ``extended``.  An
        unknown strategy produces an empty plan.
    public_holidays, company_holidays : iterable of (date, name)
        Already resolved holidays.  Company holidays win on shared dates.
    personal_days : int
        Personal days available, ``>= 0``.
    year : int
        Calendar year to plan.
    today : datetime.date, optional
        Windows starting before this date are ignored.  Defaults to the
        current date.

    Returns
    -------
    list of HolidayPeriod, sorted by start date.

    Raises
    ------
    ValueError
        If *personal_days* is negative or *year* is out of range.
    """
    _check_inputs(personal_days, year)

    strat = get_strategy(strategy)
    if strat is None:
        logger.error("Unknown strategy %r, no periods generated", strategy)
        return []

    index = build_index(public_holidays, company_holidays)
    ctx = RunContext(
        strategy=strat,
        index=index,
        year=year,
        budget=personal_days,
        today=today if today is not None else datetime.date.today(),
    )
    return run_strategy(ctx)


def summarize(periods: Iterable[HolidayPeriod]) -> PlanSummary:
    """Total the days off across *periods*."""
    periods = list(periods)
    return PlanSummary(
        periods=len(periods),
        total_days_off=sum(p.total_days for p in periods),
        personal_days_used=sum(p.personal_days_used for p in periods),
        public_holidays_used=sum(p.public_holidays_used for p in periods),
        company_holidays_used=sum(p.company_holidays_used for p in periods),
        weekend_days=sum(p.weekend_days for p in periods),
    )
