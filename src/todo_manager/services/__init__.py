"""Task store adapters.

The controller and item views only know the TaskService contract; which
backend sits behind it is picked from settings:

- memory: in-process, optionally seeded with demo tasks
- file:   JSON file under the workspace directory
- http:   remote JSON-over-HTTP service
"""

from todo_manager.config import Settings
from todo_manager.models import demo_tasks
from todo_manager.services.base import StoreError, TaskService
from todo_manager.services.http import HttpTaskService
from todo_manager.services.json_file import JsonFileTaskService
from todo_manager.services.memory import InMemoryTaskService


def create_task_service(settings: Settings) -> TaskService:
    """Build the task store selected by ``settings.store_backend``.

    Args:
        settings: Application settings.

    Returns:
        A TaskService instance.

    Raises:
        ValueError: If the http backend is selected without a store URL.
    """
    backend = settings.store_backend

    if backend == "http":
        if not settings.store_url:
            raise ValueError("store_url is required for the http store backend")
        return HttpTaskService(settings.store_url, timeout=settings.store_timeout)

    if backend == "file":
        return JsonFileTaskService(settings.tasks_file)

    return InMemoryTaskService(demo_tasks() if settings.seed_demo else ())


__all__ = [
    "StoreError",
    "TaskService",
    "InMemoryTaskService",
    "JsonFileTaskService",
    "HttpTaskService",
    "create_task_service",
]
