"""Heuristic engine: pure task scores combined multiplicatively.

Each heuristic answers "how much do we want to work on this task right
now" with a non-negative single-precision float. The registry multiplies
them in order, rounding every partial product to single precision; a zero
from any heuristic vetoes the task.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Protocol

from work_planner.interval import Interval, hours_between
from work_planner.precision import EPSILON, to_f32
from work_planner.state import ScheduleState


class Heuristic(Protocol):
    """Capability interface for a scoring function."""

    name: str

    def evaluate(self, state: ScheduleState, task_id: int) -> float:
        ...


class DependencyHeuristic:
    """1.0 when every dependency is finished or already past its deadline."""

    name = "dependency"

    def evaluate(self, state: ScheduleState, task_id: int) -> float:
        for dep_id in state.tasks[task_id].dependencies:
            dep = state.tasks[dep_id]
            if dep.deadline <= state.current_time:
                continue
            if state.remaining_hours(dep_id) <= EPSILON:
                continue
            return 0.0
        return 1.0


class PriorityHeuristic:
    """The task's static priority weight."""

    name = "priority"

    def evaluate(self, state: ScheduleState, task_id: int) -> float:
        return to_f32(state.tasks[task_id].priority)


class DeadlineHeuristic:
    """Inverse of the unblocked hours left before the deadline.

    0.0 once no working time remains before the deadline.
    """

    name = "deadline"

    def evaluate(self, state: ScheduleState, task_id: int) -> float:
        task = state.tasks[task_id]
        total_hours = to_f32(hours_between(state.current_time, task.deadline))
        if total_hours <= 0:
            return 0.0

        blocked_hours = state.plans.blocked_hours(
            Interval(state.current_time, task.deadline)
        )
        working_hours = to_f32(total_hours - blocked_hours)
        if working_hours <= 0:
            return 0.0
        return to_f32(1.0 / working_hours)


class VolumeHeuristic:
    """Remaining work hours; larger tasks are preferred.

    Residue at or below EPSILON scores 0.0.
    """

    name = "volume"

    def evaluate(self, state: ScheduleState, task_id: int) -> float:
        remaining = state.remaining_hours(task_id)
        if remaining <= EPSILON:
            return 0.0
        return remaining


class LocalityHeuristic:
    """2.0 for the task worked on last, to limit task switching."""

    name = "locality"

    def evaluate(self, state: ScheduleState, task_id: int) -> float:
        return 2.0 if state.last_task() == task_id else 1.0


_BY_NAME: dict[str, type] = {
    cls.name: cls
    for cls in (
        DependencyHeuristic,
        PriorityHeuristic,
        DeadlineHeuristic,
        VolumeHeuristic,
        LocalityHeuristic,
    )
}

HEURISTIC_NAMES = tuple(_BY_NAME)
DEFAULT_HEURISTICS = ("dependency", "volume", "deadline", "priority", "locality")


def heuristic_by_name(name: str) -> Heuristic:
    """Instantiate a built-in heuristic. Raises KeyError for unknown names."""
    try:
        return _BY_NAME[name]()
    except KeyError:
        raise KeyError(
            f"Unknown heuristic {name!r}; expected one of {', '.join(HEURISTIC_NAMES)}"
        ) from None


class HeuristicRegistry:
    """Ordered collection of heuristics. The combined score is their product."""

    def __init__(self, heuristics: Iterable[Heuristic] = ()) -> None:
        self._heuristics: list[Heuristic] = list(heuristics)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> HeuristicRegistry:
        return cls(heuristic_by_name(n) for n in names)

    @classmethod
    def default(cls) -> HeuristicRegistry:
        return cls.from_names(DEFAULT_HEURISTICS)

    def register(self, heuristic: Heuristic) -> HeuristicRegistry:
        """Append a heuristic. Returns self so calls can be chained."""
        self._heuristics.append(heuristic)
        return self

    def __iter__(self) -> Iterator[Heuristic]:
        return iter(self._heuristics)

    def __len__(self) -> int:
        return len(self._heuristics)

    @property
    def names(self) -> list[str]:
        return [h.name for h in self._heuristics]

    def score(self, state: ScheduleState, task_id: int) -> float:
        score = 1.0
        for heuristic in self._heuristics:
            score = to_f32(score * to_f32(heuristic.evaluate(state, task_id)))
        return score

    def scores(self, state: ScheduleState) -> list[float]:
        return [self.score(state, task.task_id) for task in state.tasks]


def select_task(scores: list[float]) -> int | None:
    """Index of the strictly maximal score, lowest index on ties.

    None when there is nothing to select (empty list or all zero).
    """
    best: int | None = None
    for idx, score in enumerate(scores):
        if score > 0 and (best is None or score > scores[best]):
            best = idx
    return best
