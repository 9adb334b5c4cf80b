"""Abstract contract for the external task store."""

from abc import ABC, abstractmethod

from todo_manager.models import Task, TaskId


class StoreError(Exception):
    """Any failure reported by a task store.

    Network, validation and not-found failures all share this one kind.

    Attributes:
        operation: Store operation that failed (list, create, update, delete)
        payload: Textual payload of the attempted call, when there was one
    """

    def __init__(self, message: str, operation: str = "", payload: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.payload = payload


class TaskService(ABC):
    """Asynchronous task store.

    Implementations translate every backend failure into StoreError.
    The store owns id assignment and list order.
    """

    @abstractmethod
    async def list_tasks(self) -> list[Task]:
        """Return the full current set of tasks in store order."""
        pass

    @abstractmethod
    async def create_task(self, name: str) -> Task:
        """Create a not-done task and return it with its store-assigned id."""
        pass

    @abstractmethod
    async def update_task(self, task_id: TaskId, name: str, done: bool) -> None:
        """Overwrite name and done flag of an existing task."""
        pass

    @abstractmethod
    async def delete_task(self, task_id: TaskId) -> None:
        """Remove a task."""
        pass

    async def aclose(self) -> None:
        """Release any resources held by the store."""
        return None
