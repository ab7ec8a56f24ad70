"""Rich terminal rendering for countdowns and schedules."""

from __future__ import annotations

from datetime import datetime, timedelta

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskID, TaskProgressColumn, TextColumn

from pomodoro_timer.focus.countdown import CountdownState, CountdownStatus
from pomodoro_timer.focus.intervals import IntervalKind, Plan
from pomodoro_timer.focus.render import Renderer
from pomodoro_timer.focus.scheduler import ScheduleOutcome

# Emoji and color per interval kind
THEMES: dict[IntervalKind, tuple[str, str]] = {
    IntervalKind.WORK: ("🍅", "bright_red"),
    IntervalKind.SHORT_BREAK: ("☕", "bright_blue"),
    IntervalKind.LONG_BREAK: ("🌴", "magenta"),
}


class ConsoleRenderer(Renderer):
    """Shows a live progress bar per interval plus schedule milestones."""

    def __init__(self, console: Console):
        self.console = console
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def interval_started(self, state: CountdownState) -> None:
        emoji, color = THEMES[state.interval.kind]
        label = state.interval.task_display if state.interval.kind is IntervalKind.WORK else "Time to relax"

        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("[bold yellow]{task.fields[remaining]}"),
            TextColumn("[cyan]ends {task.fields[ends_at]}"),
            TextColumn("[green]{task.fields[label]}"),
            console=self.console,
        )
        self._progress.start()
        self._task_id = self._progress.add_task(
            f"{emoji} [{color}]{state.interval.kind.label}[/{color}]",
            total=state.interval.duration,
            completed=state.elapsed,
            remaining=state.remaining_display,
            ends_at=_ends_at(state.remaining),
            label=escape(label),
        )

    def tick(self, state: CountdownState) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id,
            completed=state.elapsed,
            remaining=state.remaining_display,
            ends_at=_ends_at(state.remaining),
        )

    def interval_finished(self, state: CountdownState) -> None:
        self.tick(state)
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

        kind = state.interval.kind
        if state.status is CountdownStatus.CANCELLED:
            self.console.print(f"[yellow]{kind.label} stopped with {state.remaining_display} left[/yellow]")
        elif kind is IntervalKind.WORK:
            self.console.print(
                f"✅ [bright_green]Pomodoro complete:[/bright_green] {escape(state.interval.task_display)}"
            )
        else:
            self.console.print("✅ [bright_green]Break's over! Ready to dive back in?[/bright_green]")

    def show_notification(self, title: str, body: str) -> None:
        """Console stand-in when the desktop notification fails."""
        self.console.print(f"[bright_yellow]{escape(title)}[/bright_yellow]: [bright_green]{escape(body)}[/bright_green]")

    def plan_started(self, plan: Plan) -> None:
        first = {}
        for interval in plan:
            first.setdefault(interval.kind, interval)

        parts = [f"🍅 Scheduling [bright_yellow]{plan.work_sessions}[/bright_yellow] work sessions"]
        if IntervalKind.WORK in first:
            parts.append(f"([bright_green]{_minutes(first[IntervalKind.WORK].duration)}[/bright_green] min)")
        if IntervalKind.SHORT_BREAK in first:
            minutes = _minutes(first[IntervalKind.SHORT_BREAK].duration)
            parts.append(f"with short breaks ([bright_blue]{minutes}[/bright_blue] min)")
        if IntervalKind.LONG_BREAK in first:
            minutes = _minutes(first[IntervalKind.LONG_BREAK].duration)
            parts.append(f"and a long break ([magenta]{minutes}[/magenta] min)")
        self.console.print(" ".join(parts))

    def session_started(self, index: int, total: int) -> None:
        self.console.print(f"\n🔄 [bright_yellow]=== Session {index}/{total} ===[/bright_yellow]")

    def long_break_reached(self, total: int) -> None:
        self.console.print("\n🎉 All sessions completed! Time for a well-deserved long break!")

    def plan_finished(self, plan: Plan, outcome: ScheduleOutcome) -> None:
        if outcome is ScheduleOutcome.FINISHED_ALL:
            self.console.print(
                f"\n🏆 Great job completing all [bright_yellow]{plan.work_sessions}[/bright_yellow] Pomodoros!"
            )

    def interactive_started(self, work_minutes: int, break_minutes: int) -> None:
        self.console.print(
            f"🍅 Starting default Pomodoro cycle ({work_minutes}min work, {break_minutes}min break)\n"
        )
        self.console.print("[yellow]Press Ctrl+C at any time to exit.[/yellow]")

    def interactive_finished(self, outcome: ScheduleOutcome) -> None:
        if outcome is ScheduleOutcome.FINISHED_ALL:
            self.console.print("\n🌟 Thanks for using the Pomodoro timer! Have a productive day!\n")


def _ends_at(remaining: int) -> str:
    return (datetime.now() + timedelta(seconds=remaining)).strftime("%H:%M:%S")


def _minutes(seconds: int) -> str:
    minutes = seconds / 60
    return f"{minutes:g}"
