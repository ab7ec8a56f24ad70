"""Interval scheduling and countdown engine."""

from pomodoro_timer.focus.clock import Clock, MonotonicClock
from pomodoro_timer.focus.countdown import CountdownEngine, CountdownResult, CountdownState, CountdownStatus
from pomodoro_timer.focus.intervals import Interval, IntervalKind, Plan, build_schedule, single_break, single_work
from pomodoro_timer.focus.render import Renderer
from pomodoro_timer.focus.scheduler import LoopState, Prompter, ScheduleOutcome, SessionScheduler

__all__ = [
    "Clock",
    "MonotonicClock",
    "CountdownEngine",
    "CountdownResult",
    "CountdownState",
    "CountdownStatus",
    "Interval",
    "IntervalKind",
    "Plan",
    "build_schedule",
    "single_break",
    "single_work",
    "Renderer",
    "LoopState",
    "Prompter",
    "ScheduleOutcome",
    "SessionScheduler",
]
