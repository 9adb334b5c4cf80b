"""Todo manager - a small task list with a greeting clock.

The package is split into:

- models / clock / views: task records, the 12-hour clock and greeting,
  and the upcoming/completed partitions of a snapshot
- state: observable container holding the current snapshot
- controller: TaskListController, the parent list component
- item: TaskItemView, the per-task toggle/delete surface
- services: the TaskService contract and its memory, file and http stores
- cli: a prompt_toolkit + rich terminal front end

Example:
    from todo_manager import InMemoryTaskService, TaskListController, demo_tasks

    controller = TaskListController(InMemoryTaskService(demo_tasks()))
    async with controller:
        print([t.name for t in controller.upcoming_tasks])
"""

from todo_manager.clock import ClockState, compute_clock, greeting_for
from todo_manager.config import (
    Settings,
    SettingsValidationError,
    get_settings,
    reload_settings,
    set_settings,
    validate_settings,
)
from todo_manager.controller import TaskListController
from todo_manager.item import TaskItemView
from todo_manager.models import ItemEvent, ItemState, Task, demo_tasks
from todo_manager.services import (
    HttpTaskService,
    InMemoryTaskService,
    JsonFileTaskService,
    StoreError,
    TaskService,
    create_task_service,
)
from todo_manager.state import Snapshot, TaskListState
from todo_manager.views import completed_tasks, upcoming_tasks

__version__ = "0.1.0"

__all__ = [
    "ClockState",
    "compute_clock",
    "greeting_for",
    "Settings",
    "SettingsValidationError",
    "get_settings",
    "reload_settings",
    "set_settings",
    "validate_settings",
    "TaskListController",
    "TaskItemView",
    "ItemEvent",
    "ItemState",
    "Task",
    "demo_tasks",
    "HttpTaskService",
    "InMemoryTaskService",
    "JsonFileTaskService",
    "StoreError",
    "TaskService",
    "create_task_service",
    "Snapshot",
    "TaskListState",
    "completed_tasks",
    "upcoming_tasks",
]
