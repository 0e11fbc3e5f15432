"""Config loading: JSON file → validated Scheduler."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path

from work_planner.heuristics import DEFAULT_HEURISTICS, HeuristicRegistry
from work_planner.interval import Interval
from work_planner.plans import build_plan_set
from work_planner.resolution import parse_granularity, parse_timestamp, resolve_tz
from work_planner.scheduler import Scheduler
from work_planner.schema import validate_config
from work_planner.tasks import Task
from work_planner.types import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class LoadedConfig:
    """A ready-to-run scheduler and the reference zone it was built in."""

    scheduler: Scheduler
    tz: tzinfo


def load_config_json(path: str | Path) -> LoadedConfig:
    """Load a planner config from a JSON file.

    The JSON file has the format:
    {
        "timezone": "UTC",
        "start": "2025-03-05 00:00",
        "end": "2025-03-06 00:00",
        "granularity": "1h",
        "heuristics": ["dependency", "volume", "deadline", "priority"],
        "tasks": [{"description": ..., "deadline": ..., "priority": 1.0,
                   "volume": 2.0, "dependencies": [4]}, ...],
        "plans": [{"rule": "* * *", "ranges": {"00:00-09:00": "sleep"}}, ...],
        "overrides": [{"start": ..., "end": ..., "description": ...}, ...]
    }

    Raises ConfigError if validation fails, PlanError if a plan rule cannot
    be expanded, ScheduleError for inconsistent tasks (e.g. cycles).
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    logger.debug("Loaded config from %s", path)
    return build_from_config(data, source=path.name)


def build_from_config(data: dict, source: str = "config") -> LoadedConfig:
    """Validate a config dict and build the scheduler it describes."""
    errors = validate_config(data)
    if errors:
        raise ConfigError(source, errors)

    tz = resolve_tz(data.get("timezone"))
    window = Interval(
        parse_timestamp(data["start"], tz),
        parse_timestamp(data["end"], tz),
    )

    tasks = [
        Task(
            task_id=idx,
            description=str(raw["description"]),
            deadline=parse_timestamp(str(raw["deadline"]), tz),
            priority=float(raw.get("priority", 1.0)),
            volume=float(raw.get("volume", 0.0)),
            dependencies=tuple(raw.get("dependencies", [])),
        )
        for idx, raw in enumerate(data["tasks"])
    ]

    rules = [(str(p["rule"]), dict(p["ranges"])) for p in data.get("plans", [])]
    overrides = [
        (
            parse_timestamp(str(o["start"]), tz),
            parse_timestamp(str(o["end"]), tz),
            str(o.get("description", "")),
        )
        for o in data.get("overrides", [])
    ]
    plans = build_plan_set(rules, window, tz, overrides)

    heuristics = HeuristicRegistry.from_names(data.get("heuristics", DEFAULT_HEURISTICS))
    scheduler = Scheduler(
        tasks,
        plans,
        window,
        parse_granularity(str(data["granularity"])),
        heuristics,
    )
    logger.info(
        "Built scheduler: %d task(s), %d plan entries, heuristics %s",
        len(tasks), len(plans), ", ".join(heuristics.names),
    )
    return LoadedConfig(scheduler=scheduler, tz=tz)
