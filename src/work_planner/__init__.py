"""work-planner: greedy multi-heuristic scheduling of tasks around blocked time."""

from work_planner.allocator import allocate
from work_planner.heuristics import (
    DeadlineHeuristic,
    DependencyHeuristic,
    Heuristic,
    HeuristicRegistry,
    LocalityHeuristic,
    PriorityHeuristic,
    VolumeHeuristic,
    heuristic_by_name,
)
from work_planner.interval import Interval
from work_planner.loaders import build_from_config, load_config_json
from work_planner.plans import PlanEntry, PlanSet, build_plan_set
from work_planner.scheduler import Decision, MissedDeadline, Scheduler
from work_planner.precision import EPSILON, to_f32
from work_planner.state import ScheduleState
from work_planner.tasks import Task
from work_planner.types import (
    ConfigError,
    DependencyCycleError,
    PlanError,
    PlannerError,
    ScheduleError,
)

__all__ = [
    "ConfigError",
    "DeadlineHeuristic",
    "Decision",
    "DependencyCycleError",
    "DependencyHeuristic",
    "EPSILON",
    "Heuristic",
    "HeuristicRegistry",
    "Interval",
    "LocalityHeuristic",
    "MissedDeadline",
    "PlanEntry",
    "PlanError",
    "PlanSet",
    "PlannerError",
    "PriorityHeuristic",
    "ScheduleError",
    "ScheduleState",
    "Scheduler",
    "Task",
    "VolumeHeuristic",
    "allocate",
    "build_from_config",
    "build_plan_set",
    "heuristic_by_name",
    "load_config_json",
    "to_f32",
]
