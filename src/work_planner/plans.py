"""PlanSet: blocked calendar time, built from recurring rules and one-off overrides.

Recurring rules are cron expressions matched at day granularity. Each
matched day expands into concrete intervals from "HH:MM-HH:MM" ranges.
Rules are layered in input order with overriding inserts, so a later rule
(or a one-off override) carves its interval out of whatever it overlaps.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterable, Iterator, Sequence

from croniter import croniter

from work_planner.interval import Interval
from work_planner.precision import f32_sum
from work_planner.types import PlanError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanEntry:
    """A blocked interval and what it is blocked for."""

    start: datetime
    end: datetime
    description: str

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)

    def hours(self) -> float:
        return self.interval.hours()


class PlanSet:
    """Ordered, pairwise non-intersecting collection of PlanEntry.

    Entries are kept sorted by start. The only mutation is
    insert_with_overriding, which preserves the non-intersection invariant.
    """

    def __init__(self, entries: Iterable[PlanEntry] = ()) -> None:
        self._entries: list[PlanEntry] = []
        for entry in entries:
            self.insert_with_overriding(entry.interval, entry.description)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PlanEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlanSet):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"PlanSet({self._entries!r})"

    def entries(self) -> list[PlanEntry]:
        return list(self._entries)

    def intersecting(self, interval: Interval) -> list[PlanEntry]:
        """Entries whose interval intercepts `interval`, in start order."""
        return [e for e in self._entries if e.interval.intercepts(interval)]

    def blocked_hours(self, interval: Interval) -> float:
        """Sum of the full hours of every entry intercepting `interval`.

        Entries are counted whole, not clipped to `interval`. Summed in
        single precision.
        """
        return f32_sum(e.hours() for e in self.intersecting(interval))

    def insert_with_overriding(self, interval: Interval, description: str) -> None:
        """Insert an entry; it wins over any existing entry it overlaps.

        1. Existing entries inside `interval` are removed.
        2. An existing entry enclosing `interval` is split into the parts
           before and after it.
        3. Entries overlapping one side are truncated to the remainder.
        4. The new entry is inserted.
        """
        if interval.is_empty:
            raise ValueError(f"Cannot insert empty plan interval {interval!r}")

        removed: list[PlanEntry] = []
        added: list[PlanEntry] = []

        for entry in self._entries:
            current = entry.interval
            if not current.intercepts(interval):
                continue
            removed.append(entry)
            if interval.contains(current):
                continue
            # Enclosing entries yield both remainders; one-sided overlaps
            # yield only one of them.
            if current.start < interval.start:
                added.append(PlanEntry(current.start, interval.start, entry.description))
            if interval.end < current.end:
                added.append(PlanEntry(interval.end, current.end, entry.description))

        for entry in removed:
            self._entries.remove(entry)
        added.append(PlanEntry(interval.start, interval.end, description))
        for entry in added:
            bisect.insort(self._entries, entry, key=lambda e: (e.start, e.end))


# ---------------------------------------------------------------------------
# Recurring plan expansion
# ---------------------------------------------------------------------------


def cron_expression(rule: str) -> str:
    """Normalise a day rule to a five-field cron expression at midnight.

    Three fields (day-of-month, month, day-of-week) get "0 0" prepended.
    Five-field expressions have their minute and hour replaced, since the
    time of day comes from the ranges.
    """
    fields = rule.split()
    if len(fields) == 3:
        expr = " ".join(["0", "0", *fields])
    elif len(fields) == 5:
        expr = " ".join(["0", "0", *fields[2:]])
    else:
        raise PlanError(rule, f"expected 3 or 5 cron fields, got {len(fields)}")
    if not croniter.is_valid(expr):
        raise PlanError(rule, "invalid cron expression")
    return expr


def _parse_clock(s: str, rule: str) -> time:
    """Parse 'HH:MM' into a time. '24:MM' is handled by the caller."""
    try:
        return datetime.strptime(s, "%H:%M").time()
    except ValueError as e:
        raise PlanError(rule, f"invalid clock time {s!r}") from e


def split_range(time_range: str, rule: str) -> tuple[str, str]:
    parts = [p.strip() for p in time_range.split("-")]
    if len(parts) != 2 or not all(parts):
        raise PlanError(
            rule,
            f"time range {time_range!r} must be two clock times separated by '-'",
        )
    return parts[0], parts[1]


def _at(d: date, t: time, tz: tzinfo) -> datetime:
    return datetime.combine(d, t, tzinfo=tz)


def range_on_date(time_range: str, d: date, tz: tzinfo, rule: str = "") -> Interval:
    """Concrete interval for an "HH:MM-HH:MM" range on date `d` in zone `tz`.

    An end of "24:MM" is midnight of the following day. An end before the
    start is an overnight range that finishes on the following day.
    """
    start_s, end_s = split_range(time_range, rule or time_range)
    start_t = _parse_clock(start_s, rule or time_range)
    start = _at(d, start_t, tz)

    if end_s.startswith("24"):
        _parse_clock("00" + end_s[2:], rule or time_range)
        end = _at(d + timedelta(days=1), time(0, 0), tz)
    else:
        end_t = _parse_clock(end_s, rule or time_range)
        if end_t == start_t:
            raise PlanError(rule or time_range, f"time range {time_range!r} is empty")
        if end_t < start_t:
            end = _at(d + timedelta(days=1), end_t, tz)
        else:
            end = _at(d, end_t, tz)

    return Interval(start, end)


def matching_days(rule: str, window: Interval, tz: tzinfo) -> Iterator[date]:
    """Yield every calendar day overlapping `window` whose midnight matches `rule`."""
    expr = cron_expression(rule)
    d = window.start.astimezone(tz).date()
    while _at(d, time(0, 0), tz) < window.end:
        if croniter.match(expr, _at(d, time(0, 0), tz)):
            yield d
        d += timedelta(days=1)


def build_plan_set(
    rules: Sequence[tuple[str, dict[str, str]]],
    window: Interval,
    tz: tzinfo,
    overrides: Sequence[tuple[datetime, datetime, str]] = (),
) -> PlanSet:
    """Expand recurring rules over the window into a PlanSet.

    Rules are applied strictly in order; later rules override earlier ones
    where they overlap. One-off overrides are applied last. Raises PlanError
    on the first unparsable rule or range; nothing is returned in that case.
    """
    plans = PlanSet()

    for rule, ranges in rules:
        # Parse everything up front so a bad range fails even on days
        # the rule never matches.
        for time_range in ranges:
            range_on_date(time_range, window.start.date(), tz, rule)

        days = list(matching_days(rule, window, tz))
        logger.debug("Rule %r matches %d day(s) in window", rule, len(days))
        for d in days:
            for time_range, description in ranges.items():
                plans.insert_with_overriding(
                    range_on_date(time_range, d, tz, rule), description
                )

    for start, end, description in overrides:
        plans.insert_with_overriding(Interval(start, end), description)

    logger.debug("Built plan set with %d entries", len(plans))
    return plans
