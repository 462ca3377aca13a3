"""Days-off optimizer.

Plan personal days around weekends and public/company holidays to get
the longest possible breaks out of a fixed budget.
"""

from daysoff.holidays import get_holidays, regional_holidays
from daysoff.index import build_index
from daysoff.models import (
    Candidate,
    DayOff,
    DayOffType,
    Holiday,
    HolidayPeriod,
    PlanSummary,
)
from daysoff.optimizer import optimize, summarize
from daysoff.strategies import STRATEGIES, Strategy, StrategyType, get_strategy

__all__ = [
    "STRATEGIES",
    "Candidate",
    "DayOff",
    "DayOffType",
    "Holiday",
    "HolidayPeriod",
    "PlanSummary",
    "Strategy",
    "StrategyType",
    "build_index",
    "get_holidays",
    "get_strategy",
    "optimize",
    "regional_holidays",
    "summarize",
]
