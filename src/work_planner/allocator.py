"""Allocator: carve the next work interval for a task out of free time.

Read-only with respect to ScheduleState; the driver commits the result.
"""

from __future__ import annotations

from datetime import timedelta

from work_planner.interval import Interval
from work_planner.state import ScheduleState


def allocate(state: ScheduleState, task_id: int) -> Interval:
    """Next feasible interval for `task_id` starting at the cursor.

    Guarantees:
        - never intercepts a PlanSet entry
        - never longer than the granularity or the task's remaining volume
        - never extends past the scheduling window

    Returns the empty interval [window.end, window.end) when no time is
    left in the window.
    """
    current_time = state.current_time
    window_end = state.window.end

    remaining_hours = max(0.0, state.remaining_hours(task_id))
    candidate = Interval(current_time, current_time + state.granularity)

    if remaining_hours <= state.granularity_hours:
        # Whole milliseconds; single-precision hours carry sub-millisecond noise.
        candidate.set_span(timedelta(milliseconds=round(remaining_hours * 3_600_000)))

    if candidate.end > window_end:
        candidate.end = max(candidate.start, window_end)

    # Entries are sorted and disjoint, so one forward pass is enough:
    # moving past an entry never brings an earlier entry back into range.
    for entry in state.plans:
        plan = entry.interval
        if not candidate.intercepts(plan):
            continue
        if candidate.start >= plan.start:
            candidate.move_to(plan.end)
        else:
            candidate.end = plan.start

    if candidate.start >= window_end:
        return Interval(window_end, window_end)
    if candidate.end > window_end:
        candidate.end = window_end
    return candidate
