"""Session scheduler: runs plans and the interactive Pomodoro loop."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pomodoro_timer.focus.countdown import CountdownEngine, CountdownResult
from pomodoro_timer.focus.intervals import Interval, IntervalKind, Plan

if TYPE_CHECKING:
    from pomodoro_timer.core.runtime import CancellationView

logger = logging.getLogger(__name__)

INTERACTIVE_DEFAULT_TASK = "Focused work"


class ScheduleOutcome(Enum):
    """How a plan or interactive run ended."""
    FINISHED_ALL = "finished_all"
    STOPPED_EARLY = "stopped_early"


class LoopState(Enum):
    """States of the interactive default-mode loop."""
    ASK_TASK = "ask_task"
    WORKING = "working"
    ON_BREAK = "on_break"
    ASK_CONTINUE = "ask_continue"
    STOPPED = "stopped"


class Prompter(Protocol):
    """User interaction needed by the interactive loop."""

    def ask_task(self) -> str:
        """Return the task label; empty for none."""
        ...

    def confirm_continue(self) -> bool: ...


class SessionScheduler:
    """Drives the countdown engine across intervals, strictly one at a time.

    Usage:
        scheduler = SessionScheduler(engine, flag)
        outcome = await scheduler.execute(build_schedule(4, 25, 5, 15))

        # Or the open-ended ask/work/break/continue loop
        outcome = await scheduler.run_interactive(prompter)
    """

    def __init__(self, engine: CountdownEngine, cancellation: CancellationView):
        self._engine = engine
        self._cancellation = cancellation

    @property
    def renderer(self):
        return self._engine.renderer

    async def execute(self, plan: Plan) -> ScheduleOutcome:
        """Run every interval of ``plan`` in order.

        Stops at the first cancelled interval; nothing after it runs.
        """
        logger.info(f"Executing plan of {len(plan)} interval(s)")
        if plan.is_schedule:
            self.renderer.plan_started(plan)

        total_sessions = plan.work_sessions
        session = 0
        outcome = ScheduleOutcome.FINISHED_ALL

        for interval in plan:
            if self._cancellation.is_set():
                outcome = ScheduleOutcome.STOPPED_EARLY
                break

            if plan.is_schedule:
                if interval.kind is IntervalKind.WORK:
                    session += 1
                    self.renderer.session_started(session, total_sessions)
                elif interval.kind is IntervalKind.LONG_BREAK:
                    self.renderer.long_break_reached(total_sessions)

            result = await self._engine.run(interval)
            if result is CountdownResult.CANCELLED:
                outcome = ScheduleOutcome.STOPPED_EARLY
                break

        logger.info(f"Plan finished: {outcome.value}")
        if plan.is_schedule:
            self.renderer.plan_finished(plan, outcome)
        return outcome

    async def run_interactive(
        self,
        prompter: Prompter,
        work_minutes: int = 25,
        break_minutes: int = 5,
    ) -> ScheduleOutcome:
        """Repeat ask-task, work, break, ask-continue until the user stops.

        Cancellation in any state ends the whole run with STOPPED_EARLY;
        declining to continue ends it with FINISHED_ALL.
        """
        # Validate up front so a bad length fails before the first prompt
        break_interval = Interval.short_break(break_minutes)
        Interval.work(work_minutes)

        self.renderer.interactive_started(work_minutes, break_minutes)

        state = LoopState.ASK_TASK
        outcome = ScheduleOutcome.FINISHED_ALL
        task = INTERACTIVE_DEFAULT_TASK
        cycles = 0

        while state is not LoopState.STOPPED:
            if self._cancellation.is_set():
                outcome = ScheduleOutcome.STOPPED_EARLY
                state = LoopState.STOPPED
                continue

            logger.debug(f"Interactive loop state: {state.value}")

            if state is LoopState.ASK_TASK:
                answer = prompter.ask_task().strip()
                task = answer or INTERACTIVE_DEFAULT_TASK
                state = LoopState.WORKING

            elif state is LoopState.WORKING:
                result = await self._engine.run(Interval.work(work_minutes, task))
                state = self._after(result, LoopState.ON_BREAK)
                if result is CountdownResult.COMPLETED:
                    cycles += 1

            elif state is LoopState.ON_BREAK:
                result = await self._engine.run(break_interval)
                state = self._after(result, LoopState.ASK_CONTINUE)

            elif state is LoopState.ASK_CONTINUE:
                if prompter.confirm_continue():
                    state = LoopState.ASK_TASK
                else:
                    state = LoopState.STOPPED

            if state is LoopState.STOPPED and self._cancellation.is_set():
                outcome = ScheduleOutcome.STOPPED_EARLY

        logger.info(f"Interactive run finished after {cycles} pomodoro(s): {outcome.value}")
        self.renderer.interactive_finished(outcome)
        return outcome

    @staticmethod
    def _after(result: CountdownResult, next_state: LoopState) -> LoopState:
        if result is CountdownResult.CANCELLED:
            return LoopState.STOPPED
        return next_state
