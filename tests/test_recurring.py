"""Tests for recurring plan expansion.

Test data loaded from: data/fixtures/scenarios/recurring.json
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import load_scenarios

_data = load_scenarios("recurring")


def _window():
    from work_planner.interval import Interval

    start, end = (datetime.fromisoformat(s) for s in _data["window"])
    return Interval(start, end)


def _rules(raw):
    return [(rule, dict(ranges)) for rule, ranges in raw]


class TestBuildPlanSet:

    @pytest.mark.parametrize("case", _data["expansions"], ids=lambda s: s["id"])
    def test_expansion(self, case):
        """Entry count, total blocked hours and first entry match."""
        from work_planner.plans import build_plan_set

        plans = build_plan_set(_rules(case["rules"]), _window(), timezone.utc)
        entries = plans.entries()

        assert len(entries) == case["expected_count"]
        assert sum(e.hours() for e in entries) == pytest.approx(case["expected_hours"])
        if "expected_first" in case:
            start, end = (datetime.fromisoformat(s) for s in case["expected_first"])
            assert (entries[0].start, entries[0].end) == (start, end)

    @pytest.mark.parametrize("case", _data["invalid"], ids=lambda s: s["id"])
    def test_invalid_rules_abort(self, case):
        """Any malformed rule or range aborts the whole build."""
        from work_planner.plans import build_plan_set
        from work_planner.types import PlanError

        with pytest.raises(PlanError):
            build_plan_set(_rules(case["rules"]), _window(), timezone.utc)

    def test_result_is_disjoint(self):
        from work_planner.plans import build_plan_set

        plans = build_plan_set(
            [
                ("* * *", {"00:00-09:00": "sleep", "22:00-24:00": "evening"}),
                ("* * mon-fri", {"08:30-17:00": "office"}),
                ("* * wed", {"12:00-13:00": "lunch", "23:00-07:00": "night shift"}),
            ],
            _window(),
            timezone.utc,
        )
        entries = plans.entries()
        for a, b in zip(entries, entries[1:]):
            assert a.end <= b.start

    def test_overrides_applied_last(self):
        """One-off overrides win over every recurring rule."""
        from work_planner.plans import build_plan_set

        utc = timezone.utc
        override = (
            datetime(2025, 3, 4, 8, 0, tzinfo=utc),
            datetime(2025, 3, 4, 10, 0, tzinfo=utc),
            "dentist",
        )
        plans = build_plan_set(
            [("* * *", {"00:00-09:00": "sleep"})], _window(), utc, [override]
        )
        tuesday = [e for e in plans if e.start.date() == date(2025, 3, 4)]
        assert [(e.start.hour, e.end.hour, e.description) for e in tuesday] == [
            (0, 8, "sleep"),
            (8, 10, "dentist"),
        ]

    def test_ranges_in_reference_zone(self):
        """Clock times are read in the zone passed in, not UTC."""
        from work_planner.plans import build_plan_set

        plus_two = timezone(timedelta(hours=2))
        plans = build_plan_set([("* * wed", {"09:00-10:00": "standup"})], _window(), plus_two)
        (entry,) = plans.entries()
        assert entry.start.astimezone(timezone.utc).hour == 7


class TestRangeOnDate:

    def test_midnight_end_is_next_day(self):
        from work_planner.plans import range_on_date

        iv = range_on_date("22:00-24:00", date(2025, 3, 5), timezone.utc)
        assert iv.end == datetime(2025, 3, 6, tzinfo=timezone.utc)
        assert iv.hours() == 2.0

    def test_whitespace_tolerated(self):
        from work_planner.plans import range_on_date

        iv = range_on_date(" 09:00 - 10:30 ", date(2025, 3, 5), timezone.utc)
        assert iv.hours() == 1.5

    @pytest.mark.parametrize("rule", ["* * *", "0 0 * * *", "15 9 1-7 * mon"])
    def test_cron_expression_forces_midnight(self, rule):
        from work_planner.plans import cron_expression

        assert cron_expression(rule).startswith("0 0 ")
