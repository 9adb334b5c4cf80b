"""File-backed task store.

Persists the task list as a JSON file in the workspace directory with
atomic writes, so a crash mid-write never leaves a truncated file behind.
"""

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from todo_manager.logging import Loggers
from todo_manager.models import Task, TaskId
from todo_manager.services.base import StoreError, TaskService

logger = Loggers.store()


def atomic_write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON to a temporary sibling file, then rename it over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(data, indent=indent), encoding="utf-8")
    tmp_path.replace(path)


class JsonFileTaskService(TaskService):
    """Persistent task store.

    File layout: ``{"items": [{"id", "name", "done", "created_at"}, ...]}``.
    The file is re-read on every call so that edits made by another
    process show up on the next refresh.

    Example:
        >>> service = JsonFileTaskService(settings.tasks_file)
        >>> task = await service.create_task("Buy milk")
        >>> await service.update_task(task.id, task.name, True)
    """

    def __init__(self, storage_path: Path) -> None:
        self._storage_path = storage_path

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    def _load(self, operation: str) -> dict[TaskId, Task]:
        if not self._storage_path.exists():
            return {}
        try:
            data = json.loads(self._storage_path.read_text(encoding="utf-8"))
            return {item.id: item for item in map(Task.from_dict, data.get("items", []))}
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StoreError(
                f"Cannot read task file {self._storage_path}: {e}",
                operation=operation,
            ) from e

    def _save(self, items: dict[TaskId, Task], operation: str, payload: str | None = None) -> None:
        data = {"items": [item.to_dict() for item in items.values()]}
        try:
            atomic_write_json(self._storage_path, data)
            logger.debug("task_file_written", path=str(self._storage_path), count=len(items))
        except OSError as e:
            raise StoreError(
                f"Cannot write task file {self._storage_path}: {e}",
                operation=operation,
                payload=payload,
            ) from e

    async def list_tasks(self) -> list[Task]:
        return list(self._load("list").values())

    async def create_task(self, name: str) -> Task:
        items = self._load("create")
        task = Task(
            id=uuid.uuid4().hex[:8],
            name=name,
            done=False,
            created_at=datetime.now().isoformat(),
        )
        items[task.id] = task
        self._save(items, "create", task.to_payload())
        return task

    async def update_task(self, task_id: TaskId, name: str, done: bool) -> None:
        items = self._load("update")
        item = items.get(task_id)
        payload = Task(id=task_id, name=name, done=done).to_payload()
        if item is None:
            raise StoreError(f"Task {task_id!r} not found", operation="update", payload=payload)
        items[task_id] = Task(id=task_id, name=name, done=done, created_at=item.created_at)
        self._save(items, "update", payload)

    async def delete_task(self, task_id: TaskId) -> None:
        items = self._load("delete")
        if task_id not in items:
            raise StoreError(f"Task {task_id!r} not found", operation="delete")
        del items[task_id]
        self._save(items, "delete")
