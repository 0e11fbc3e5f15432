"""Task records and dependency-graph validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from work_planner.types import DependencyCycleError, ScheduleError


@dataclass(frozen=True)
class Task:
    """A unit of work. Immutable; remaining volume is tracked by ScheduleState.

    Invariants:
        - priority >= 0
        - volume >= 0 (hours of work required)
        - dependencies reference other tasks by task_id (list index)
    """

    task_id: int
    description: str
    deadline: datetime
    priority: float = 1.0
    volume: float = 0.0
    dependencies: tuple[int, ...] = field(default_factory=tuple)


def validate_tasks(tasks: Sequence[Task]) -> None:
    """Reject task lists the scheduler cannot run on.

    Raises ScheduleError for misnumbered ids, negative volume or priority,
    or out-of-range dependencies; DependencyCycleError for cycles.
    """
    for idx, task in enumerate(tasks):
        if task.task_id != idx:
            raise ScheduleError(
                f"Task at position {idx} has task_id {task.task_id}; "
                f"ids must match list positions"
            )
        if task.volume < 0:
            raise ScheduleError(f"Task {idx} has negative volume {task.volume}")
        if task.priority < 0:
            raise ScheduleError(f"Task {idx} has negative priority {task.priority}")
        for dep in task.dependencies:
            if not 0 <= dep < len(tasks):
                raise ScheduleError(
                    f"Task {idx} depends on task {dep}, "
                    f"which is out of range (0..{len(tasks) - 1})"
                )

    cycle = find_dependency_cycle(tasks)
    if cycle is not None:
        raise DependencyCycleError(cycle)


def find_dependency_cycle(tasks: Sequence[Task]) -> list[int] | None:
    """Return one dependency cycle as [a, b, ..., a], or None if acyclic.

    Iterative depth-first search with white/grey/black colouring.
    """
    white, grey, black = 0, 1, 2
    colour = [white] * len(tasks)

    for root in range(len(tasks)):
        if colour[root] != white:
            continue
        path: list[int] = [root]
        stack = [iter(tasks[root].dependencies)]
        colour[root] = grey

        while stack:
            dep = next(stack[-1], None)
            if dep is None:
                colour[path.pop()] = black
                stack.pop()
                continue
            if colour[dep] == grey:
                return path[path.index(dep):] + [dep]
            if colour[dep] == white:
                colour[dep] = grey
                path.append(dep)
                stack.append(iter(tasks[dep].dependencies))

    return None
