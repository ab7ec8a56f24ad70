"""Shared fakes and fixtures."""

from __future__ import annotations

import asyncio
import os
from datetime import datetime, timedelta, timezone

import pytest

from pomodoro_timer.core.config import get_config
from pomodoro_timer.core.runtime import CancellationFlag
from pomodoro_timer.focus.countdown import CountdownEngine, CountdownState
from pomodoro_timer.focus.intervals import Interval
from pomodoro_timer.focus.render import Renderer
from pomodoro_timer.storage.completion_log import CompletionLogger


class FakeClock:
    """Clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds
        await asyncio.sleep(0)

    @property
    def slept(self) -> float:
        return sum(self.sleeps)


class RecordingNotifier:
    """Notifier fake that remembers what it announced."""

    def __init__(self, error: Exception | None = None):
        self.announced: list[Interval] = []
        self._error = error

    def announce(self, interval: Interval) -> None:
        self.announced.append(interval)
        if self._error is not None:
            raise self._error


class RecordingRenderer(Renderer):
    """Renderer fake that records every hook call.

    ``on_render`` is called with each rendered state, which lets tests
    trigger cancellation at a chosen tick.
    """

    def __init__(self):
        self.events: list[tuple] = []
        self.remaining: list[int] = []
        self.started: list[Interval] = []
        self.finished: list[CountdownState] = []
        self.on_render = None

    def _seen(self, state: CountdownState) -> None:
        self.remaining.append(state.remaining)
        if self.on_render is not None:
            self.on_render(state)

    def interval_started(self, state):
        self.events.append(("interval_started", state.interval.kind))
        self.started.append(state.interval)
        self._seen(state)

    def tick(self, state):
        self._seen(state)

    def interval_finished(self, state):
        self.events.append(("interval_finished", state.status))
        self.finished.append(state)

    def plan_started(self, plan):
        self.events.append(("plan_started", len(plan)))

    def session_started(self, index, total):
        self.events.append(("session_started", index, total))

    def long_break_reached(self, total):
        self.events.append(("long_break_reached", total))

    def plan_finished(self, plan, outcome):
        self.events.append(("plan_finished", outcome))

    def interactive_started(self, work_minutes, break_minutes):
        self.events.append(("interactive_started", work_minutes, break_minutes))

    def interactive_finished(self, outcome):
        self.events.append(("interactive_finished", outcome))

    def cancel_at(self, flag: CancellationFlag, elapsed: int, kind=None) -> None:
        """Set ``flag`` once an interval (optionally of ``kind``) reaches ``elapsed``."""

        def hook(state: CountdownState) -> None:
            if state.elapsed == elapsed and (kind is None or state.interval.kind is kind):
                flag.set()

        self.on_render = hook


class ScriptedPrompter:
    """Prompter that replays canned answers."""

    def __init__(self, tasks=(), answers=()):
        self.tasks = list(tasks)
        self.answers = list(answers)
        self.calls: list[str] = []

    def ask_task(self) -> str:
        self.calls.append("ask_task")
        return self.tasks.pop(0)

    def confirm_continue(self) -> bool:
        self.calls.append("confirm_continue")
        return self.answers.pop(0)


class TickingTimestamps:
    """Wall-clock stand-in for the completion log, one minute per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep the user's environment and config file out of every test."""
    for name in list(os.environ):
        if name.upper().startswith("POMODORO_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("pomodoro_timer.core.config.DEFAULT_CONFIG_DIR", tmp_path / "config")
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def flag() -> CancellationFlag:
    return CancellationFlag()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "completed" / "completed.log"


@pytest.fixture
def completion_log(log_path) -> CompletionLogger:
    return CompletionLogger(log_path, clock=TickingTimestamps())


@pytest.fixture
def engine(flag, notifier, completion_log, renderer, clock) -> CountdownEngine:
    return CountdownEngine(
        flag,
        notifier=notifier,
        completion_log=completion_log,
        renderer=renderer,
        clock=clock,
    )
