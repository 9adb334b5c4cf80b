"""Single task item with toggle-done and delete actions.

An item never changes its own display state. It asks the store for the
change and, once the store confirms, tells its parent list to refresh.
"""

from collections.abc import Awaitable, Callable

from todo_manager.logging import Loggers
from todo_manager.models import ItemEvent, ItemState, Task, TaskId
from todo_manager.services.base import StoreError, TaskService
from todo_manager.views import container_class, icon_name

logger = Loggers.items()

Notify = Callable[[ItemEvent], Awaitable[None]]


class TaskItemView:
    """Command surface for one task.

    Args:
        task: The task as it appears in the parent's current snapshot.
        service: Task store used for update/delete commands.
        notify: Parent notification channel; receives only the event kind.
    """

    def __init__(self, task: Task, service: TaskService, notify: Notify | None = None) -> None:
        self._task = task
        self._service = service
        self._notify = notify

    @property
    def task(self) -> Task:
        return self._task

    @property
    def task_id(self) -> TaskId | None:
        return self._task.id

    @property
    def name(self) -> str:
        return self._task.name

    @property
    def done(self) -> bool:
        return self._task.done

    @property
    def state(self) -> ItemState:
        return ItemState.for_done(self._task.done)

    @property
    def container_class(self) -> str:
        return container_class(self._task.done)

    @property
    def icon_name(self) -> str:
        return icon_name(self._task.done)

    async def toggle_done(self) -> bool:
        """Ask the store to flip the done flag.

        Returns:
            True if the store confirmed the update.
        """
        toggled = self._task.toggled()
        try:
            await self._service.update_task(toggled.id, toggled.name, toggled.done)
        except StoreError as e:
            logger.error(
                "item_update_failed",
                payload=toggled.to_payload(),
                error=str(e),
            )
            return False

        logger.info("item_updated", task_id=toggled.id, done=toggled.done)
        await self._emit(ItemEvent.UPDATED)
        return True

    async def delete_self(self) -> bool:
        """Ask the store to delete this task.

        Returns:
            True if the store confirmed the delete.
        """
        try:
            await self._service.delete_task(self._task.id)
        except StoreError as e:
            logger.error("item_delete_failed", task_id=self._task.id, error=str(e))
            return False

        logger.info("item_deleted", task_id=self._task.id)
        await self._emit(ItemEvent.DELETED)
        return True

    async def _emit(self, event: ItemEvent) -> None:
        if self._notify is not None:
            await self._notify(event)

    def __repr__(self) -> str:
        return f"TaskItemView(id={self._task.id!r}, name={self._task.name!r}, done={self._task.done})"
