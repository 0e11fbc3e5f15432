"""Schedule rendering: day-grouped reports and ASCII day views."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from itertools import groupby

from work_planner.interval import Interval
from work_planner.scheduler import Scheduler

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _clock(dt: datetime, tz: tzinfo, is_end: bool = False) -> str:
    """'HH:MM' in `tz`. An end falling on midnight is shown as '24:00'."""
    local = dt.astimezone(tz)
    text = local.strftime("%H:%M")
    if is_end and text == "00:00":
        return "24:00"
    return text


def _timeline(scheduler: Scheduler) -> list[tuple[Interval, str]]:
    """Committed task intervals and plan entries, sorted by start."""
    items: list[tuple[Interval, str]] = []
    for task in scheduler.tasks:
        for iv in scheduler.intervals(task.task_id):
            items.append((iv, task.description))
    for entry in scheduler.plans:
        items.append((entry.interval, entry.description))
    items.sort(key=lambda item: (item[0].start, item[0].end))
    return items


def group_by_day(
    scheduler: Scheduler, tz: tzinfo
) -> dict[str, list[tuple[str, str, str]]]:
    """Merge task intervals and plans, grouped by the local day of their start.

    Returns {"YYYY-MM-DD": [(start "HH:MM", end "HH:MM", description), ...]}
    with days in order and entries time-ordered within each day.
    """
    timeline = _timeline(scheduler)
    grouped: dict[str, list[tuple[str, str, str]]] = {}
    for day, items in groupby(timeline, key=lambda item: item[0].start.astimezone(tz).date()):
        grouped[day.isoformat()] = [
            (_clock(iv.start, tz), _clock(iv.end, tz, is_end=True), description)
            for iv, description in items
        ]
    return grouped


def format_schedule(grouped: dict[str, list[tuple[str, str, str]]]) -> str:
    """Text rendering of group_by_day output."""
    lines: list[str] = []
    for day, entries in grouped.items():
        lines.append(f"{day}:")
        for start, end, description in entries:
            lines.append(f"    {start} - {end}: {description}")
    return "\n".join(lines)


def format_missed(scheduler: Scheduler) -> list[str]:
    """One line per missed deadline."""
    return [
        f"Missed deadline: {scheduler.tasks[m.task_id].description}, "
        f"needs {m.shortfall_hours:g} more hour(s)"
        for m in scheduler.missed_deadlines()
    ]


def show_days(scheduler: Scheduler, tz: tzinfo, start: date, end: date) -> str:
    """ASCII view: one row per day, each char = 30 minutes.

    Legend: '.' = free, '#' = plan, 'A'-'Z' = task (by first appearance).
    Days run from `start` (inclusive) to `end` (exclusive).
    """
    chars_per_day = 48
    minutes_per_char = 30

    labels: dict[int, str] = {}
    label_chars = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    for task in scheduler.tasks:
        if scheduler.intervals(task.task_id):
            labels[task.task_id] = label_chars[len(labels) % len(label_chars)]

    blocks: list[tuple[Interval, str]] = [(e.interval, "#") for e in scheduler.plans]
    for task_id, label in labels.items():
        blocks.extend((iv, label) for iv in scheduler.intervals(task_id))

    lines: list[str] = []
    header_hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    lines.append(f"{'':>10s}  {header_hours}")

    current = start
    while current < end:
        row = []
        midnight = datetime.combine(current, time(0, 0), tzinfo=tz)
        for char_idx in range(chars_per_day):
            cell = Interval.from_span(
                midnight + timedelta(minutes=char_idx * minutes_per_char),
                timedelta(minutes=minutes_per_char),
            )
            mark = "."
            for iv, label in blocks:
                if iv.intercepts(cell):
                    mark = label
                    break
            row.append(mark)
        label = f"{DAY_NAMES[current.weekday()]} {current.strftime('%d %b')}"
        lines.append(f"{label:>10s}  {''.join(row)}")
        current += timedelta(days=1)

    if labels:
        legend = ", ".join(
            f"{label}={scheduler.tasks[task_id].description}"
            for task_id, label in labels.items()
        )
        lines.append(f"\nLegend: . = free, # = plan, {legend}")

    return "\n".join(lines)
