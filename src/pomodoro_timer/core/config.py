"""Configuration management with Pydantic and YAML support."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pomodoro_timer.core.errors import ConfigurationError

DEFAULT_CONFIG_DIR = Path.home() / ".config/pomodoro-timer"


class TimerConfig(BaseModel):
    """Interval lengths and tick granularity."""

    work_minutes: int = Field(default=25, ge=1, description="Work interval length")
    short_break_minutes: int = Field(default=5, ge=1)
    long_break_minutes: int = Field(default=15, ge=1)
    sessions: int = Field(default=4, ge=1, description="Work sessions per schedule")
    tick_seconds: float = Field(default=1.0, gt=0, le=60, description="Countdown tick")


class SoundConfig(BaseModel):
    """Completion sound configuration."""

    enabled: bool = True
    file_name: str = Field(default="alert.wav")
    search_dirs: list[Path] = Field(
        default_factory=list,
        description="Extra directories searched before the built-in locations",
    )


class NotificationConfig(BaseModel):
    """Desktop notification configuration."""

    enabled: bool = True
    timeout_seconds: float = Field(default=2.0, gt=0, description="Give up on the notifier after this")


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="POMODORO_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Paths
    config_dir: Path = Field(default_factory=lambda: DEFAULT_CONFIG_DIR)
    completed_log: Path = Field(
        default_factory=lambda: Path.home() / ".completed_tasks" / "completed.log"
    )
    log_file: Path | None = Field(default=None, description="Also write diagnostics here")

    # Log level
    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Sub-configurations
    timer: TimerConfig = Field(default_factory=TimerConfig)
    sound: SoundConfig = Field(default_factory=SoundConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)

    @property
    def config_file(self) -> Path:
        """Path to YAML config file."""
        return self.config_dir / "config.yaml"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from YAML file, environment variables, and defaults.

        Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values
        """
        config_path = config_path or cls._default_config_dir() / "config.yaml"

        yaml_config: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path) as f:
                yaml_config = yaml.safe_load(f) or {}

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(
                f"{config_path} must contain a mapping of settings, "
                f"got {type(yaml_config).__name__}"
            )

        # Init kwargs outrank env vars in pydantic-settings, so drop the
        # YAML values that the environment already sets.
        for path in cls._env_override_paths():
            _drop_path(yaml_config, path)

        return cls(**yaml_config)

    @classmethod
    def _env_override_paths(cls) -> list[tuple[str, ...]]:
        """Field paths set through POMODORO_* variables."""
        prefix = cls.model_config.get("env_prefix", "").upper()
        delimiter = cls.model_config.get("env_nested_delimiter") or "__"
        paths = []
        for name in os.environ:
            upper = name.upper()
            if not upper.startswith(prefix):
                continue
            parts = tuple(p.lower() for p in upper[len(prefix):].split(delimiter))
            if parts[0] in cls.model_fields:
                paths.append(parts)
        return paths

    @classmethod
    def _default_config_dir(cls) -> Path:
        """Directory holding config.yaml, honouring POMODORO_CONFIG_DIR."""
        name = f"{cls.model_config.get('env_prefix', '')}config_dir".upper()
        for key, value in os.environ.items():
            if key.upper() == name and value:
                return Path(value).expanduser()
        return DEFAULT_CONFIG_DIR


def _drop_path(data: dict[str, Any], path: tuple[str, ...]) -> None:
    """Remove a nested key from a YAML mapping if present."""
    node: Any = data
    for key in path[:-1]:
        node = node.get(key) if isinstance(node, dict) else None
        if node is None:
            return
    if isinstance(node, dict):
        node.pop(path[-1], None)


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.load()
