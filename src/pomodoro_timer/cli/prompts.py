"""Interactive prompts for the default Pomodoro loop."""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Confirm, Prompt

from pomodoro_timer.core.runtime import CancellationFlag


class RichPrompter:
    """Asks for the task label and whether to continue, using rich prompts.

    Ctrl+C or end of input while a prompt is open counts as "no answer";
    the cancellation flag tells the scheduler whether to stop early.
    """

    def __init__(self, console: Console, cancellation: CancellationFlag):
        self.console = console
        self._cancellation = cancellation

    def ask_task(self) -> str:
        try:
            with self._cancellation.interruptible():
                return Prompt.ask(
                    "What are you working on? (optional)",
                    default="",
                    show_default=False,
                    console=self.console,
                )
        except KeyboardInterrupt:
            self._cancellation.set()
            self.console.print()
            return ""
        except EOFError:
            self.console.print()
            return ""

    def confirm_continue(self) -> bool:
        try:
            with self._cancellation.interruptible():
                return Confirm.ask("Start another Pomodoro cycle?", default=True, console=self.console)
        except KeyboardInterrupt:
            self._cancellation.set()
            self.console.print()
            return False
        except EOFError:
            self.console.print()
            return False
