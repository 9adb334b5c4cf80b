"""In-process task store.

Tasks are ephemeral within a session; nothing is written to disk.

Example:
    >>> service = InMemoryTaskService(demo_tasks())
    >>> task = await service.create_task("Buy milk")
    >>> task.id
    3
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from todo_manager.models import Task, TaskId
from todo_manager.services.base import StoreError, TaskService


class InMemoryTaskService(TaskService):
    """Task store backed by a dict, ids assigned sequentially."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._items: dict[TaskId, Task] = {}
        for task in tasks:
            if task.id is None:
                raise ValueError("seed tasks need an id")
            self._items[task.id] = task
        int_ids = [tid for tid in self._items if isinstance(tid, int)]
        self._next_id = max(int_ids) + 1 if int_ids else 0

    async def list_tasks(self) -> list[Task]:
        return list(self._items.values())

    async def create_task(self, name: str) -> Task:
        task = Task(
            id=self._next_id,
            name=name,
            done=False,
            created_at=datetime.now().isoformat(),
        )
        self._next_id += 1
        self._items[task.id] = task
        return task

    async def update_task(self, task_id: TaskId, name: str, done: bool) -> None:
        item = self._items.get(task_id)
        if item is None:
            raise StoreError(f"Task {task_id!r} not found", operation="update")
        self._items[task_id] = replace(item, name=name, done=done)

    async def delete_task(self, task_id: TaskId) -> None:
        if task_id not in self._items:
            raise StoreError(f"Task {task_id!r} not found", operation="delete")
        del self._items[task_id]
