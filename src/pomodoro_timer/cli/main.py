"""CLI commands for the Pomodoro timer using Typer."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Awaitable, Callable, Iterator

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from pomodoro_timer import __version__
from pomodoro_timer.alerts.notifier import DesktopNotifier
from pomodoro_timer.cli.prompts import RichPrompter
from pomodoro_timer.cli.render import THEMES, ConsoleRenderer
from pomodoro_timer.cli.tips import random_tip
from pomodoro_timer.core.config import Config, get_config
from pomodoro_timer.core.errors import CompletionLogError, ConfigurationError
from pomodoro_timer.core.runtime import CancellationFlag
from pomodoro_timer.focus.clock import MonotonicClock
from pomodoro_timer.focus.countdown import CountdownEngine
from pomodoro_timer.focus.intervals import Plan, build_schedule, single_break, single_work
from pomodoro_timer.focus.scheduler import ScheduleOutcome, SessionScheduler
from pomodoro_timer.storage.completion_log import CompletionLogger

logger = logging.getLogger(__name__)

# Exit codes
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

# Initialize Typer app
app = typer.Typer(
    name="pomodoro",
    help="A friendly Pomodoro timer for the terminal.",
    add_completion=False,
)

console = Console()


def setup_logging(log_level: str, log_file: Path | None = None) -> None:
    """Configure logging for the application."""
    level = getattr(logging, log_level.upper(), logging.WARNING)

    # Rich handler shares the console so log lines print above progress bars
    handlers: list[logging.Handler] = [
        RichHandler(console=console, show_path=False, rich_tracebacks=True)
    ]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
    )


@contextmanager
def configuration_errors() -> Iterator[None]:
    """Turn invalid settings into a message and exit code 2."""
    try:
        yield
    except ConfigurationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_CONFIG_ERROR)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red]\n{escape(str(e))}")
        raise typer.Exit(EXIT_CONFIG_ERROR)


def build_scheduler(config: Config, cancellation: CancellationFlag) -> SessionScheduler:
    """Wire the countdown engine and its collaborators from configuration."""
    renderer = ConsoleRenderer(console)
    notifier = DesktopNotifier(
        sound_enabled=config.sound.enabled,
        sound_file=config.sound.file_name,
        sound_dirs=config.sound.search_dirs,
        notifications_enabled=config.notifications.enabled,
        timeout_seconds=config.notifications.timeout_seconds,
        fallback=renderer.show_notification,
    )
    engine = CountdownEngine(
        cancellation,
        notifier=notifier,
        completion_log=CompletionLogger(config.completed_log),
        renderer=renderer,
        clock=MonotonicClock(),
        tick_seconds=config.timer.tick_seconds,
    )
    return SessionScheduler(engine, cancellation)


def run_scheduler(
    config: Config,
    job: Callable[[SessionScheduler, CancellationFlag], Awaitable[ScheduleOutcome]],
) -> None:
    """Run ``job`` with SIGINT/SIGTERM wired to the cancellation flag."""
    cancellation = CancellationFlag()
    with configuration_errors():
        scheduler = build_scheduler(config, cancellation)

    with cancellation.installed(), configuration_errors():
        outcome = asyncio.run(job(scheduler, cancellation))

    if outcome is ScheduleOutcome.STOPPED_EARLY:
        console.print("\n[yellow]Timer stopped. Nothing was logged for the unfinished interval.[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED)


def run_plan(config: Config, plan: Plan) -> None:
    """Execute a prebuilt plan."""

    async def job(scheduler: SessionScheduler, cancellation: CancellationFlag) -> ScheduleOutcome:
        return await scheduler.execute(plan)

    run_scheduler(config, job)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"pomodoro {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-L",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Run the default Pomodoro cycle when no command is given."""
    with configuration_errors():
        config = get_config()

    setup_logging(log_level or config.log_level, config.log_file)
    ctx.obj = config

    if ctx.invoked_subcommand is not None:
        return

    timer = config.timer

    async def job(scheduler: SessionScheduler, cancellation: CancellationFlag) -> ScheduleOutcome:
        prompter = RichPrompter(console, cancellation)
        return await scheduler.run_interactive(
            prompter,
            work_minutes=timer.work_minutes,
            break_minutes=timer.short_break_minutes,
        )

    run_scheduler(config, job)


@app.command()
def start(
    ctx: typer.Context,
    duration: int = typer.Option(
        None,
        "--duration",
        "-d",
        help="Work duration in minutes (default 25)",
    ),
    task: str = typer.Option(
        None,
        "--task",
        "-t",
        help="Task description",
    ),
) -> None:
    """Start a Pomodoro work interval."""
    config: Config = ctx.obj
    minutes = duration if duration is not None else config.timer.work_minutes

    with configuration_errors():
        plan = single_work(minutes, task)

    run_plan(config, plan)


@app.command(name="break")
def break_(
    ctx: typer.Context,
    duration: int = typer.Option(
        None,
        "--duration",
        "-d",
        help="Break duration in minutes (default 5, or 15 with --long)",
    ),
    long: bool = typer.Option(
        False,
        "--long",
        "-l",
        help="Whether this is a long break",
    ),
) -> None:
    """Start a break."""
    config: Config = ctx.obj
    if duration is None:
        duration = config.timer.long_break_minutes if long else config.timer.short_break_minutes

    with configuration_errors():
        plan = single_break(duration, long=long)

    run_plan(config, plan)


@app.command()
def schedule(
    ctx: typer.Context,
    sessions: int = typer.Option(
        None,
        "--sessions",
        "-s",
        help="Number of Pomodoro sessions (default 4)",
    ),
    work: int = typer.Option(
        None,
        "--work",
        "-w",
        help="Work duration in minutes (default 25)",
    ),
    short_break: int = typer.Option(
        None,
        "--short-break",
        "-b",
        help="Short break duration in minutes (default 5)",
    ),
    long_break: int = typer.Option(
        None,
        "--long-break",
        "-l",
        help="Long break duration in minutes (default 15)",
    ),
    task: str = typer.Option(
        None,
        "--task",
        "-t",
        help="Task description",
    ),
) -> None:
    """Schedule a sequence of Pomodoros ending with a long break.

    Examples:
        pomodoro schedule -s 4 -w 25 -b 5 -l 15 -t "Write docs"
        pomodoro schedule --sessions 2
    """
    config: Config = ctx.obj
    timer = config.timer

    with configuration_errors():
        plan = build_schedule(
            sessions=sessions if sessions is not None else timer.sessions,
            work_minutes=work if work is not None else timer.work_minutes,
            short_break_minutes=short_break if short_break is not None else timer.short_break_minutes,
            long_break_minutes=long_break if long_break is not None else timer.long_break_minutes,
            task=task,
        )

    run_plan(config, plan)


@app.command()
def history(
    ctx: typer.Context,
    show_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Show every entry instead of only today's",
    ),
) -> None:
    """Show completed Pomodoros from the log."""
    config: Config = ctx.obj
    completion_log = CompletionLogger(config.completed_log)

    try:
        records = completion_log.read(None if show_all else date.today())
    except CompletionLogError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not records:
        scope = "in the log" if show_all else "today"
        console.print(f"[dim]No completed Pomodoros {scope}[/dim]")
        return

    table = Table(title="Completed Pomodoros")
    table.add_column("When")
    table.add_column("Task")
    table.add_column("Kind")

    for entry in records:
        emoji, color = THEMES[entry.kind]
        when = entry.timestamp.strftime("%H:%M:%S" if not show_all else "%Y-%m-%d %H:%M")
        table.add_row(when, escape(entry.task), f"{emoji} [{color}]{entry.kind.label}[/{color}]")

    console.print(table)
    console.print(f"\n🍅 {len(records)} completed")


@app.command()
def tip() -> None:
    """Show a random productivity tip."""
    console.print("\n🍅 [bright_yellow]Productivity Tip:[/bright_yellow]")
    console.print(f"💡 [bright_green]{random_tip()}[/bright_green]\n")


if __name__ == "__main__":
    app()
