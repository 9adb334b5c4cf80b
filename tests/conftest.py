"""Shared test fixtures and utilities for todo manager tests.

Provides:
- MockContext for isolating tests from global settings and TODO_* env vars
- A recording store seeded with the demo page tasks
"""

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest

from todo_manager.config import (
    Settings,
    reload_settings,
    set_settings,
)
from tests.fakes import RecordingTaskService, seed_tasks


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting global settings singleton
    - Providing a temporary workspace directory
    - Clearing TODO_* environment variables for the duration

    Usage:
        with MockContext(store_backend="file") as ctx:
            settings = ctx.settings
            workspace = ctx.workspace_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: Settings | None = None
        self._original_env: dict[str, str] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        for var in [k for k in os.environ if k.startswith("TODO_")]:
            self._original_env[var] = os.environ.pop(var)

        self._settings = Settings(
            workspace_dir=workspace_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)

        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        os.environ.update(self._original_env)
        reload_settings()

        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def seeded_service() -> RecordingTaskService:
    return RecordingTaskService(seed_tasks())


@pytest.fixture
def fixed_now():
    """Wall clock frozen at 20:05."""
    return lambda: datetime(2020, 8, 20, 20, 5)
