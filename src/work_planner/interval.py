"""Interval: half-open [start, end) range of timezone-aware instants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_SECONDS_PER_HOUR = 3600.0


def _reject_naive(dt: datetime, name: str) -> None:
    """Intervals compare instants, so every datetime must carry a tzinfo."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise TypeError(
            f"{name} must be a timezone-aware datetime, got naive {dt.isoformat()}"
        )


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours from start to end (negative if end is earlier).

    Computed on UTC instants: subtracting two datetimes that share a
    ZoneInfo gives wall-clock time, which is wrong across DST changes.
    """
    delta = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return delta.total_seconds() / _SECONDS_PER_HOUR


@dataclass
class Interval:
    """Half-open time range. Invariant: start <= end."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        _reject_naive(self.start, "start")
        _reject_naive(self.end, "end")
        if self.end < self.start:
            raise ValueError(
                f"Interval end {self.end.isoformat()} precedes "
                f"start {self.start.isoformat()}"
            )

    @classmethod
    def from_span(cls, start: datetime, span: timedelta) -> Interval:
        return cls(start, start + span)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def hours(self) -> float:
        """Duration expressed in hours."""
        return hours_between(self.start, self.end)

    def intercepts(self, other: Interval) -> bool:
        """Open overlap test. Touching intervals do not intercept."""
        return self.start < other.end and other.start < self.end

    def contains(self, other: Interval) -> bool:
        """True if other lies entirely within self (bounds inclusive)."""
        return self.start <= other.start and other.end <= self.end

    def move_to(self, new_start: datetime) -> None:
        """Translate to begin at new_start, keeping the length."""
        span = self.duration
        self.start = new_start
        self.end = new_start + span

    def set_span(self, span: timedelta) -> None:
        """Keep the start, set the length."""
        if span < timedelta(0):
            raise ValueError(f"Interval span must be non-negative, got {span}")
        self.end = self.start + span

    def copy(self) -> Interval:
        return Interval(self.start, self.end)

    def __repr__(self) -> str:
        return f"Interval({self.start.isoformat()}, {self.end.isoformat()})"
