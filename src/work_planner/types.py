"""Shared types: errors raised while building and validating a schedule."""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for all work-planner errors."""


class PlanError(PlannerError):
    """Raised when a recurrence rule, time range or clock time cannot be parsed."""

    def __init__(self, rule: str, reason: str) -> None:
        self.rule = rule
        self.reason = reason
        super().__init__(f"Invalid plan {rule!r}: {reason}")


class ScheduleError(PlannerError):
    """Raised when a scheduler is constructed from inconsistent inputs."""


class DependencyCycleError(ScheduleError):
    """Raised when task dependencies form a cycle.

    `cycle` lists the task ids along the cycle, first id repeated at the end.
    """

    def __init__(self, cycle: list[int]) -> None:
        self.cycle = cycle
        path = " -> ".join(str(task_id) for task_id in cycle)
        super().__init__(f"Dependency cycle between tasks: {path}")


class ConfigError(PlannerError):
    """Raised when a config file fails validation. Holds every message found."""

    def __init__(self, source: str, errors: list[str]) -> None:
        self.source = source
        self.errors = errors
        super().__init__(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
