"""Shared test fixtures and data loading for work-planner.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference day: Wed 2025-03-05 in UTC.
Epoch: 2025-03-05 00:00 UTC (minute 0); the window covers 24 hours.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
EPOCH = datetime.fromisoformat(_reference["epoch"])
WINDOW_END = EPOCH + timedelta(hours=_reference["window_hours"])
GRANULARITY = timedelta(minutes=_reference["granularity_minutes"])


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def at(label: str) -> datetime:
    """Datetime on the reference day from an 'HH:MM' label.

    >>> at("09:30")
    datetime(2025, 3, 5, 9, 30, tzinfo=timezone.utc)
    >>> at("24:00")
    datetime(2025, 3, 6, 0, 0, tzinfo=timezone.utc)
    """
    hours, minutes = (int(p) for p in label.split(":"))
    return EPOCH + timedelta(hours=hours, minutes=minutes)


def minute(offset: int) -> datetime:
    """Datetime `offset` minutes after the epoch."""
    return EPOCH + timedelta(minutes=offset)


def make_window():
    from work_planner.interval import Interval

    return Interval(EPOCH, WINDOW_END)


def make_task(task_id: int, deadline: str = "19:00", **kwargs):
    """Task on the reference day; deadline is an 'HH:MM' label."""
    from work_planner.tasks import Task

    kwargs.setdefault("description", f"Task {task_id}")
    kwargs["dependencies"] = tuple(kwargs.get("dependencies", ()))
    return Task(task_id=task_id, deadline=at(deadline), **kwargs)


def reference_tasks():
    """The six tasks of the reference scenario."""
    return [
        make_task(
            idx,
            deadline=raw["deadline"],
            description=raw["description"],
            priority=raw["priority"],
            volume=raw["volume"],
            dependencies=raw["dependencies"],
        )
        for idx, raw in enumerate(_reference["tasks"])
    ]


def make_plans(spans=None):
    """PlanSet from [start_minute, end_minute] pairs, or the reference plans."""
    from work_planner.interval import Interval
    from work_planner.plans import PlanSet

    plans = PlanSet()
    if spans is None:
        for p in _reference["plans"]:
            plans.insert_with_overriding(Interval(at(p["start"]), at(p["end"])), p["description"])
    else:
        for start, end in spans:
            plans.insert_with_overriding(Interval(minute(start), minute(end)), "")
    return plans


def make_state(tasks=None, plans=None, granularity=None, current=None):
    from work_planner.state import ScheduleState

    return ScheduleState(
        tasks=tuple(tasks if tasks is not None else reference_tasks()),
        plans=plans if plans is not None else make_plans(),
        window=make_window(),
        granularity=granularity or GRANULARITY,
        current_time=current,
    )


def make_scheduler(heuristics=None, tasks=None, plans=None, granularity=None):
    """Scheduler over the reference day. `heuristics` is a list of names."""
    from work_planner.heuristics import HeuristicRegistry
    from work_planner.scheduler import Scheduler

    registry = HeuristicRegistry.from_names(heuristics) if heuristics is not None else None
    return Scheduler(
        tasks if tasks is not None else reference_tasks(),
        plans if plans is not None else make_plans(),
        make_window(),
        granularity or GRANULARITY,
        registry,
    )


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def epoch() -> datetime:
    return EPOCH


@pytest.fixture
def window():
    return make_window()


@pytest.fixture
def reference_plans():
    return make_plans()


@pytest.fixture
def reference_state():
    return make_state()


@pytest.fixture
def reference_scheduler():
    """Reference scenario with the four core heuristics (no locality)."""
    return make_scheduler(["dependency", "volume", "deadline", "priority"])
