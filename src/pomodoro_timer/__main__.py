"""Allow running as ``python -m pomodoro_timer``."""

from pomodoro_timer.cli.main import app

if __name__ == "__main__":
    app()
