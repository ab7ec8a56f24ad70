"""Interval and plan types for the Pomodoro timer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from pomodoro_timer.core.errors import ConfigurationError

DEFAULT_TASK = "no description"


class IntervalKind(Enum):
    """Kind of a timed interval."""
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        """Human-readable name."""
        if self is IntervalKind.WORK:
            return "Pomodoro"
        if self is IntervalKind.SHORT_BREAK:
            return "Short Break"
        return "Long Break"


@dataclass(frozen=True)
class Interval:
    """One timed segment of a fixed kind and duration (seconds)."""

    kind: IntervalKind
    duration: int
    task: str | None = None

    def __post_init__(self) -> None:
        _require_positive("duration", self.duration)

    @classmethod
    def work(cls, minutes: int, task: str | None = None) -> Interval:
        _require_positive("work minutes", minutes)
        return cls(IntervalKind.WORK, minutes * 60, task)

    @classmethod
    def short_break(cls, minutes: int) -> Interval:
        _require_positive("short break minutes", minutes)
        return cls(IntervalKind.SHORT_BREAK, minutes * 60)

    @classmethod
    def long_break(cls, minutes: int) -> Interval:
        _require_positive("long break minutes", minutes)
        return cls(IntervalKind.LONG_BREAK, minutes * 60)

    @property
    def task_display(self) -> str:
        """Task label, or the placeholder used in the log."""
        return self.task if self.task else DEFAULT_TASK

    def describe_duration(self) -> str:
        """Format as '25 minute' or '90 second'."""
        if self.duration % 60 == 0:
            return f"{self.duration // 60} minute"
        return f"{self.duration} second"


@dataclass(frozen=True)
class Plan:
    """Ordered sequence of intervals for one invocation."""

    intervals: tuple[Interval, ...]

    def __post_init__(self) -> None:
        if not self.intervals:
            raise ConfigurationError("A plan needs at least one interval")

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    @property
    def work_sessions(self) -> int:
        """Number of work intervals in the plan."""
        return sum(1 for i in self.intervals if i.kind is IntervalKind.WORK)

    @property
    def is_schedule(self) -> bool:
        return len(self.intervals) > 1


def single_work(minutes: int, task: str | None = None) -> Plan:
    """Plan for one ``start`` invocation."""
    return Plan((Interval.work(minutes, task),))


def single_break(minutes: int, long: bool = False) -> Plan:
    """Plan for one ``break`` invocation."""
    interval = Interval.long_break(minutes) if long else Interval.short_break(minutes)
    return Plan((interval,))


def build_schedule(
    sessions: int,
    work_minutes: int,
    short_break_minutes: int,
    long_break_minutes: int,
    task: str | None = None,
) -> Plan:
    """Expand a session count into work/break pairs ending with a long break.

    Every session is (WORK, SHORT_BREAK) except the last, whose break is a
    LONG_BREAK, so the plan has ``2 * sessions`` intervals.
    """
    _require_positive("sessions", sessions)
    work = Interval.work(work_minutes, task)
    short = Interval.short_break(short_break_minutes)
    long = Interval.long_break(long_break_minutes)

    intervals: list[Interval] = []
    for i in range(1, sessions + 1):
        intervals.append(work)
        intervals.append(short if i < sessions else long)

    return Plan(tuple(intervals))


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be greater than zero, got {value}")
