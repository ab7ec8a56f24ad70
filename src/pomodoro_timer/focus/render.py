"""Presentation hooks for countdowns and plans.

The base class renders nothing; the CLI subclasses it with a rich
progress display and tests subclass it to record what was shown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pomodoro_timer.focus.countdown import CountdownState
    from pomodoro_timer.focus.intervals import Plan
    from pomodoro_timer.focus.scheduler import ScheduleOutcome


class Renderer:
    """No-op renderer. Override the hooks you need."""

    # Countdown hooks

    def interval_started(self, state: CountdownState) -> None:
        pass

    def tick(self, state: CountdownState) -> None:
        pass

    def interval_finished(self, state: CountdownState) -> None:
        pass

    # Scheduler hooks

    def plan_started(self, plan: Plan) -> None:
        pass

    def session_started(self, index: int, total: int) -> None:
        pass

    def long_break_reached(self, total: int) -> None:
        pass

    def plan_finished(self, plan: Plan, outcome: ScheduleOutcome) -> None:
        pass

    def interactive_started(self, work_minutes: int, break_minutes: int) -> None:
        pass

    def interactive_finished(self, outcome: ScheduleOutcome) -> None:
        pass
