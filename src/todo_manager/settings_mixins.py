"""Settings mixins for the todo manager.

AppSettingsMixin: Application identity and disk layout (app_name, workspace, paths).
StoreSettingsMixin: Which task store backend to talk to and how.
ClockSettingsMixin: Greeting/clock refresh cadence.
CLISettingsMixin: Logging configuration for the terminal front end.

These modules live outside cli/ so that config.py can compose Settings
without importing the cli package.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Should be composed with pydantic-settings BaseSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="todo_manager",
        title="App Name",
        description="Application name, also used for the JSON config directory",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".todo_manager",
        title="Workspace Directory",
        description="Directory for the file-backed task store",
    )

    @field_validator("workspace_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ and environment variables in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    def ensure_workspace_exists(self) -> None:
        """Create workspace directory if it doesn't exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)

    @property
    def tasks_dir(self) -> Path:
        """Directory for task storage."""
        return self.workspace_dir / "tasks"

    @property
    def tasks_file(self) -> Path:
        """JSON file used by the file-backed store."""
        return self.tasks_dir / "tasks.json"


class StoreSettingsMixin:
    """Settings for the external task store."""

    store_backend: Literal["memory", "file", "http"] = Field(
        default="memory",
        title="Store Backend",
        description="Where tasks live: in-process memory, a local JSON file, or a remote HTTP service",
    )
    store_url: str | None = Field(
        default=None,
        title="Store URL",
        description="Base URL of the remote task service (http backend only)",
    )
    store_timeout: float = Field(
        default=10.0,
        gt=0,
        title="Store Timeout",
        description="Request timeout in seconds for the remote task service",
    )
    seed_demo: bool = Field(
        default=True,
        title="Seed Demo Tasks",
        description="Start the in-memory store with a few example tasks",
    )


class ClockSettingsMixin:
    """Settings for the greeting clock."""

    clock_interval_seconds: float = Field(
        default=60.0,
        gt=0,
        title="Clock Interval",
        description="Seconds between greeting/clock recomputations",
    )


class CLISettingsMixin:
    """Settings for CLI/UI configuration.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )
