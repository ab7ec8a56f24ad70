"""Countdown engine: drives one interval from its full duration to zero."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pomodoro_timer.core.errors import ConfigurationError
from pomodoro_timer.focus.clock import Clock, MonotonicClock
from pomodoro_timer.focus.intervals import Interval, IntervalKind
from pomodoro_timer.focus.render import Renderer

if TYPE_CHECKING:
    from pomodoro_timer.alerts.notifier import Notifier
    from pomodoro_timer.core.runtime import CancellationView

logger = logging.getLogger(__name__)


class CountdownStatus(Enum):
    """Lifecycle of a single countdown."""
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CountdownResult(Enum):
    """How a countdown ended."""
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class CountdownState:
    """State of the interval currently counting down."""
    interval: Interval
    remaining: int
    status: CountdownStatus = CountdownStatus.RUNNING

    @property
    def elapsed(self) -> int:
        return self.interval.duration - self.remaining

    @property
    def remaining_display(self) -> str:
        """Format time remaining as MM:SS."""
        minutes, seconds = divmod(self.remaining, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def progress_percent(self) -> float:
        """Progress through the interval (0-100)."""
        total = self.interval.duration
        return min(100, max(0, (self.elapsed / total) * 100))


class CompletionSink(Protocol):
    """Where finished work intervals are recorded."""

    def record(self, interval: Interval) -> object: ...


class CountdownEngine:
    """Runs one interval with cooperative, tick-based cancellation.

    Each tick sleeps, checks the cancellation flag and re-renders. When the
    interval runs out naturally, work intervals are recorded and the notifier
    is called. Failures of either only produce a warning.

    Usage:
        engine = CountdownEngine(flag, notifier=notifier, completion_log=log)
        result = await engine.run(Interval.work(25, "write docs"))
    """

    def __init__(
        self,
        cancellation: CancellationView,
        notifier: Notifier | None = None,
        completion_log: CompletionSink | None = None,
        renderer: Renderer | None = None,
        clock: Clock | None = None,
        tick_seconds: float = 1.0,
    ):
        if tick_seconds <= 0:
            raise ConfigurationError(f"tick must be positive, got {tick_seconds}")

        self._cancellation = cancellation
        self._notifier = notifier
        self._completion_log = completion_log
        self.renderer = renderer or Renderer()
        self._clock = clock or MonotonicClock()
        self._tick_seconds = tick_seconds

    async def run(self, interval: Interval) -> CountdownResult:
        """Count ``interval`` down to zero unless cancelled first."""
        if interval.duration <= 0:
            raise ConfigurationError(f"duration must be greater than zero, got {interval.duration}")

        state = CountdownState(interval=interval, remaining=interval.duration)
        deadline = self._clock.now() + interval.duration

        logger.info(f"{interval.kind.label} started: {interval.describe_duration()}s")
        self._render("interval_started", state)

        while state.remaining > 0:
            if self._cancellation.is_set():
                break

            await self._clock.sleep(min(self._tick_seconds, state.remaining))

            if self._cancellation.is_set():
                break

            state.remaining = self._remaining_until(deadline)
            logger.debug(f"Tick: {state.remaining_display} remaining")
            self._render("tick", state)

        if state.remaining > 0:
            state.status = CountdownStatus.CANCELLED
            logger.info(f"{interval.kind.label} cancelled with {state.remaining_display} left")
            self._render("interval_finished", state)
            return CountdownResult.CANCELLED

        state.status = CountdownStatus.COMPLETED
        logger.info(f"{interval.kind.label} complete")
        self._render("interval_finished", state)
        self._complete(interval)
        return CountdownResult.COMPLETED

    def _remaining_until(self, deadline: float) -> int:
        # Rounding keeps float noise from turning 0.0000001s into a whole second
        left = round(deadline - self._clock.now(), 6)
        return max(0, math.ceil(left))

    def _complete(self, interval: Interval) -> None:
        """Fire completion side effects; none of them may fail the countdown."""
        if interval.kind is IntervalKind.WORK and self._completion_log is not None:
            try:
                self._completion_log.record(interval)
            except Exception as e:
                logger.warning(f"Could not record completed task: {e}")

        if self._notifier is not None:
            try:
                self._notifier.announce(interval)
            except Exception as e:
                logger.warning(f"Completion alert failed: {e}")

    def _render(self, hook: str, state: CountdownState) -> None:
        try:
            getattr(self.renderer, hook)(state)
        except Exception as e:
            logger.error(f"Error in {hook} renderer: {e}")
