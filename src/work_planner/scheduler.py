"""Scheduler driver: the greedy score → pick → allocate → commit loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator, Sequence

from work_planner.allocator import allocate
from work_planner.heuristics import HeuristicRegistry, select_task
from work_planner.interval import Interval
from work_planner.plans import PlanSet
from work_planner.precision import EPSILON
from work_planner.state import ScheduleState
from work_planner.tasks import Task, validate_tasks
from work_planner.types import ScheduleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """One scheduling step: which task got which interval."""

    task_id: int
    start: datetime
    end: datetime

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)


@dataclass(frozen=True)
class MissedDeadline:
    """A task left with unallocated volume when the run ended."""

    task_id: int
    shortfall_hours: float


class Scheduler:
    """Greedy single-timeline scheduler.

    Usage:
        scheduler = Scheduler(tasks, plans, window, timedelta(hours=1))
        scheduler.run()                    # drain to completion
        # or
        while (decision := scheduler.step()) is not None:
            ...                            # one decision at a time

    The outcome depends only on the sequence of decisions, so both styles
    produce identical schedules.
    """

    def __init__(
        self,
        tasks: Sequence[Task],
        plans: PlanSet,
        window: Interval,
        granularity: timedelta,
        heuristics: HeuristicRegistry | None = None,
    ) -> None:
        if granularity <= timedelta(0):
            raise ScheduleError(f"Granularity must be positive, got {granularity}")
        if window.start >= window.end:
            raise ScheduleError(
                f"Scheduling window is empty: {window.start.isoformat()} "
                f">= {window.end.isoformat()}"
            )
        validate_tasks(tasks)

        self.heuristics = heuristics if heuristics is not None else HeuristicRegistry.default()
        self.state = ScheduleState(
            tasks=tuple(tasks),
            plans=plans,
            window=window.copy(),
            granularity=granularity,
        )
        self._terminated = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.state.tasks

    @property
    def plans(self) -> PlanSet:
        return self.state.plans

    @property
    def window(self) -> Interval:
        return self.state.window

    @property
    def current_time(self) -> datetime:
        return self.state.current_time

    @property
    def terminated(self) -> bool:
        return self._terminated

    def intervals(self, task_id: int) -> list[Interval]:
        """Committed intervals for a task, in commit order."""
        return [iv.copy() for iv in self.state.committed[task_id]]

    def committed_hours(self, task_id: int) -> float:
        return self.state.committed_hours(task_id)

    def missed_deadlines(self) -> list[MissedDeadline]:
        """Tasks whose remaining volume exceeds the tolerance, in id order."""
        return [
            MissedDeadline(task.task_id, self.state.remaining_hours(task.task_id))
            for task in self.state.tasks
            if self.state.remaining_hours(task.task_id) > EPSILON
        ]

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    def step(self) -> Decision | None:
        """Make and commit one decision. None once the run has terminated."""
        if self._terminated:
            return None

        state = self.state
        if state.current_time >= state.window.end:
            return self._terminate("window closed")

        scores = self.heuristics.scores(state)
        task_id = select_task(scores)
        if task_id is None:
            return self._terminate("no task can make progress")

        interval = allocate(state, task_id)
        if interval.is_empty:
            # Nothing to commit: either the window has no free time left or
            # the chosen task has no volume left to allocate.
            state.current_time = max(state.current_time, interval.end)
            if state.current_time >= state.window.end:
                return self._terminate("no free time left in window")
            return self._terminate(f"task {task_id} has no volume left to allocate")

        state.commit(task_id, interval)
        logger.debug(
            "Task %d -> %s - %s (score %.6g)",
            task_id, interval.start.isoformat(), interval.end.isoformat(),
            scores[task_id],
        )
        return Decision(task_id, interval.start, interval.end)

    def run(self) -> list[Decision]:
        """Step until termination. Returns every decision made."""
        return list(self)

    def __iter__(self) -> Iterator[Decision]:
        while (decision := self.step()) is not None:
            yield decision

    def _terminate(self, reason: str) -> None:
        self._terminated = True
        logger.info(
            "Scheduling stopped at %s: %s", self.state.current_time.isoformat(), reason
        )
        for missed in self.missed_deadlines():
            logger.warning(
                "Missed deadline: %s, needs %.2f more hour(s)",
                self.state.tasks[missed.task_id].description,
                missed.shortfall_hours,
            )
        return None
