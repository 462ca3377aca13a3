from __future__ import annotations

import datetime

import pytest

from daysoff.index import build_index, date_window
from daysoff.models import Candidate, Holiday, HolidayPeriod
from daysoff.optimizer import classify_window
from daysoff.strategies import (
    STRATEGIES,
    Extended,
    LongWeekend,
    MidWeek,
    Strategy,
    StrategyType,
    Week,
    get_strategy,
    holiday_density,
    season_of,
)


def _candidate(start: datetime.date, length: int, holidays: list[Holiday] | None = None) -> Candidate:
    return classify_window(date_window(start, length), build_index(holidays or [], []))


def _period(candidate: Candidate, public: int = 0) -> HolidayPeriod:
    return HolidayPeriod(
        start_date=candidate.start_date,
        end_date=candidate.end_date,
        days=(),
        strategy="test",
        personal_days_used=candidate.personal_days,
        public_holidays_used=public,
        company_holidays_used=0,
        weekend_days=candidate.weekend_days,
        total_days=candidate.length,
        description="",
    )


class TestRegistry:
    def test_all_strategies_registered(self) -> None:
        assert set(STRATEGIES) == set(StrategyType)
        for stype, strategy in STRATEGIES.items():
            assert strategy.type is stype

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (StrategyType.WEEK, StrategyType.WEEK),
            ("long_weekend", StrategyType.LONG_WEEKEND),
            ("MID_WEEK", StrategyType.MID_WEEK),
            ("mid-week", StrategyType.MID_WEEK),
            (" extended ", StrategyType.EXTENDED),
        ],
    )
    def test_get_strategy(self, value: StrategyType | str, expected: StrategyType) -> None:
        strategy = get_strategy(value)
        assert strategy is not None
        assert strategy.type is expected

    def test_unknown_strategy(self) -> None:
        assert get_strategy("fortnight") is None

    def test_base_strategy_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Strategy()  # type: ignore[abstract]

    def test_strategy_without_score_is_abstract(self) -> None:
        class Unscored(Strategy):
            type = StrategyType.WEEK

        with pytest.raises(TypeError):
            Unscored()  # type: ignore[abstract]


class TestLongWeekend:
    def test_passes(self) -> None:
        assert LongWeekend.passes == ((4,), (3,))

    @pytest.mark.parametrize(
        ("day", "valid"),
        [
            (datetime.date(2025, 5, 1), True),  # Thursday
            (datetime.date(2025, 5, 2), True),  # Friday
            (datetime.date(2025, 5, 3), True),  # Saturday
            (datetime.date(2025, 5, 4), False),  # Sunday
            (datetime.date(2025, 5, 5), False),  # Monday
            (datetime.date(2025, 5, 7), False),  # Wednesday
        ],
    )
    def test_start_days(self, day: datetime.date, valid: bool) -> None:
        assert LongWeekend().is_valid_start(day, 4, 0) is valid

    def test_min_weekend_days(self) -> None:
        strategy = LongWeekend()
        assert strategy.min_weekend_days(4, 0) == 2
        assert strategy.min_weekend_days(3, 1) == 1

    def test_exactly_one_personal_day(self) -> None:
        strategy = LongWeekend()
        assert strategy.is_personal_count_valid(1, 5)
        assert not strategy.is_personal_count_valid(0, 5)
        assert not strategy.is_personal_count_valid(2, 5)
        assert not strategy.is_personal_count_valid(1, 0)

    def test_pass_scores(self) -> None:
        cand = _candidate(datetime.date(2025, 1, 3), 3)
        strategy = LongWeekend()
        assert strategy.score(cand, 0) == 100
        assert strategy.score(cand, 1) == 50


class TestMidWeek:
    def test_edge_filters(self) -> None:
        strategy = MidWeek()
        assert not strategy.is_valid_start(datetime.date(2025, 5, 5), 5, 0)  # Monday
        assert strategy.is_valid_start(datetime.date(2025, 5, 6), 5, 0)
        assert not strategy.is_valid_end(datetime.date(2025, 5, 9), 5, 0)  # Friday
        assert strategy.is_valid_end(datetime.date(2025, 5, 11), 5, 0)

    def test_requires_exactly_two_weekend_days(self) -> None:
        strategy = MidWeek()
        # Wed Jan 8 .. Mon Jan 13: one weekend
        assert strategy.accepts(_candidate(datetime.date(2025, 1, 8), 6), 0)
        three = _candidate(datetime.date(2025, 1, 11), 6)._replace(weekend_days=3)
        assert not strategy.accepts(three, 0)

    def test_score(self) -> None:
        holidays = [Holiday(datetime.date(2025, 11, 27), "Thanksgiving")]
        # Wed Nov 26 .. Sun Nov 30: 1 holiday, 2 weekend, 2 personal
        cand = _candidate(datetime.date(2025, 11, 26), 5, holidays)
        assert cand.personal_days == 2
        assert MidWeek().score(cand, 0) == 10 + 10 - 6
        # Six-day window gets the length bonus
        cand6 = _candidate(datetime.date(2025, 11, 25), 6, holidays)
        assert MidWeek().score(cand6, 0) == 10 + 10 - 9 + 2


class TestWeek:
    def test_cluster_bonus(self) -> None:
        holidays = [Holiday(datetime.date(2025, 5, 26), "Memorial Day")]
        with_cluster = _candidate(datetime.date(2025, 5, 20), 7, holidays)
        assert with_cluster.longest_free_run == 3
        expected = 3 / 7 * 100 + 10 + 10 + 50 + 0 - 12
        assert Week().score(with_cluster, 0) == pytest.approx(expected)

    def test_longer_windows_rewarded(self) -> None:
        cand = _candidate(datetime.date(2025, 3, 4), 9)
        # Tue..Wed: 2 weekend days, 7 personal
        expected = 2 / 9 * 100 + 10 + (9 - 7) * 3 - 21
        assert Week().score(cand, 0) == pytest.approx(expected)

    def test_descriptions(self) -> None:
        strategy = Week()
        holidays = [Holiday(datetime.date(2025, 5, 26), "Memorial Day")]
        cluster = _candidate(datetime.date(2025, 5, 20), 7, holidays)
        assert strategy.describe(_period(cluster, public=1), cluster) == (
            "7-day break around public holidays"
        )
        plain = _candidate(datetime.date(2025, 3, 4), 9)
        assert strategy.describe(_period(plain), plain) == "9-day week break"
        assert strategy.describe(_period(plain, public=2), plain) == (
            "9-day break with public holidays"
        )


class TestExtended:
    def test_passes_and_minimum(self) -> None:
        assert Extended.passes == ((15, 14, 13), (12, 11, 10))
        assert Extended.min_personal_days == 5

    def test_weekend_thresholds_by_pass(self) -> None:
        strategy = Extended()
        assert strategy.min_weekend_days(14, 0) == 4
        assert strategy.min_weekend_days(11, 1) == 2
        # Sat Mar 1 .. Wed Mar 12
        four = _candidate(datetime.date(2025, 3, 1), 12)
        assert four.weekend_days == 4
        assert strategy.accepts(four, 0)
        assert not strategy.accepts(four, 1)

    def test_density_counts_weekends_and_holidays(self) -> None:
        index = build_index([Holiday(datetime.date(2025, 7, 14), "Bastille Day")], [])
        density = holiday_density(2025, index)
        assert len(density) == 365
        # Jul 9 .. Jul 23 holds two weekends and one holiday
        assert density[datetime.date(2025, 7, 16)] == 4 + 3
        # Jan 1 only looks forward: Jan 4 and 5
        assert density[datetime.date(2025, 1, 1)] == 2

    def test_density_hook(self) -> None:
        index = build_index([], [])
        strategy = Extended()
        aux = strategy.precompute(2025, index)
        assert strategy.density(aux) is aux
        assert Week().density(Week().precompute(2025, index)) is None
        assert MidWeek().density({datetime.date(2025, 1, 1): 3}) is None

    @pytest.mark.parametrize(
        ("day", "season"),
        [
            (datetime.date(2025, 6, 14), None),
            (datetime.date(2025, 6, 15), "summer"),
            (datetime.date(2025, 9, 15), "summer"),
            (datetime.date(2025, 9, 16), None),
            (datetime.date(2025, 12, 14), None),
            (datetime.date(2025, 12, 15), "winter"),
            (datetime.date(2025, 12, 31), "winter"),
        ],
    )
    def test_season_of(self, day: datetime.date, season: str | None) -> None:
        assert season_of(day) == season

    def test_season_bonus(self) -> None:
        strategy = Extended()
        spring = _candidate(datetime.date(2025, 3, 3), 14)
        summer = _candidate(datetime.date(2025, 7, 7), 14)
        # Same shape (Mon..Sun), only the season differs
        assert strategy.score(summer, 0) - strategy.score(spring, 0) == pytest.approx(50)

    def test_descriptions(self) -> None:
        strategy = Extended()
        summer = _candidate(datetime.date(2025, 7, 7), 14)
        assert strategy.describe(_period(summer), summer) == "14-day summer vacation"
        winter = _candidate(datetime.date(2025, 12, 15), 14)
        assert strategy.describe(_period(winter), winter) == "14-day winter holiday"
        dense = _candidate(datetime.date(2025, 3, 3), 14)._replace(holiday_density=60)
        assert strategy.describe(_period(dense), dense) == "14-day extended break around holidays"
        sparse = _candidate(datetime.date(2025, 3, 3), 14)
        assert strategy.describe(_period(sparse), sparse) == "14-day extended break"
