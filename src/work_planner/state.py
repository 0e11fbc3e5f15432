"""ScheduleState: the mutable cursor and committed intervals of one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from work_planner.interval import Interval
from work_planner.plans import PlanSet
from work_planner.precision import EPSILON, f32_sum, to_f32
from work_planner.tasks import Task


@dataclass
class ScheduleState:
    """Everything heuristics and the allocator read at a decision point.

    Tasks, plans, window and granularity are fixed for the run. Only
    current_time and committed change, and only through commit().
    """

    tasks: tuple[Task, ...]
    plans: PlanSet
    window: Interval
    granularity: timedelta
    current_time: datetime = None  # type: ignore[assignment]
    committed: dict[int, list[Interval]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.current_time is None:
            self.current_time = self.window.start
        for task in self.tasks:
            self.committed.setdefault(task.task_id, [])

    @property
    def granularity_hours(self) -> float:
        return to_f32(self.granularity.total_seconds() / 3600.0)

    def committed_hours(self, task_id: int) -> float:
        return f32_sum(iv.hours() for iv in self.committed.get(task_id, ()))

    def remaining_hours(self, task_id: int) -> float:
        """Volume still to allocate, in single precision. May be slightly negative."""
        return to_f32(to_f32(self.tasks[task_id].volume) - self.committed_hours(task_id))

    def is_done(self, task_id: int) -> bool:
        return self.remaining_hours(task_id) <= EPSILON

    def last_task(self) -> int | None:
        """Task owning the committed interval that ends latest.

        Ties go to the lowest task id.
        """
        best: int | None = None
        best_end: datetime | None = None
        for task_id, intervals in self.committed.items():
            if not intervals:
                continue
            end = max(iv.end for iv in intervals)
            if best_end is None or end > best_end:
                best, best_end = task_id, end
        return best

    def commit(self, task_id: int, interval: Interval) -> Interval:
        """Record an allocation and advance the cursor to its end.

        Contiguous with the task's latest interval → that interval is
        extended. Otherwise the interval is appended. Returns the stored
        (possibly extended) interval.
        """
        intervals = self.committed.setdefault(task_id, [])
        if intervals and intervals[-1].end == interval.start:
            intervals[-1].end = interval.end
            stored = intervals[-1]
        else:
            stored = interval.copy()
            intervals.append(stored)
        self.current_time = max(self.current_time, interval.end)
        return stored
