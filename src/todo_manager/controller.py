"""Task list controller.

Owns the authoritative task snapshot, the greeting clock and the
create/list traffic to the task store. Children (TaskItemView) report
successful updates and deletes back through ``handle_item_event`` and the
controller answers every one of them by re-fetching the full list; the
snapshot is never patched locally.

Example:
    controller = TaskListController(service)
    async with controller:
        await controller.add_task("Buy milk")
        for task in controller.upcoming_tasks:
            print(task.name)
"""

import asyncio
import contextlib
from collections.abc import Callable, Iterable
from datetime import datetime

from todo_manager.clock import CLOCK_INTERVAL_SECONDS, ClockState, compute_clock
from todo_manager.item import TaskItemView
from todo_manager.logging import Loggers
from todo_manager.models import ItemEvent, Task
from todo_manager.services.base import StoreError, TaskService
from todo_manager.state import Listener, Snapshot, TaskListState
from todo_manager.views import completed_tasks, upcoming_tasks

logger = Loggers.controller()


class TaskListController:
    """Parent component of the task list.

    Args:
        service: Task store.
        clock_interval: Seconds between clock recomputations.
        now: Wall clock source, replaceable in tests.
        placeholder: Tasks shown until the first successful load.
    """

    def __init__(
        self,
        service: TaskService,
        *,
        clock_interval: float = CLOCK_INTERVAL_SECONDS,
        now: Callable[[], datetime] = datetime.now,
        placeholder: Iterable[Task] = (),
    ) -> None:
        if clock_interval <= 0:
            raise ValueError("clock_interval must be positive")
        self._service = service
        self._clock_interval = clock_interval
        self._now = now
        self._state = TaskListState(placeholder)
        self._clock_task: asyncio.Task[None] | None = None
        self.draft = ""

    # --- lifecycle ---

    async def initialize(self) -> None:
        """Compute the clock, load the task list and start the clock timer."""
        self.tick()
        await self.refresh()
        if self._clock_task is None or self._clock_task.done():
            self._clock_task = asyncio.create_task(self._run_clock(), name="todo-clock")

    async def dispose(self) -> None:
        """Stop the clock timer. Safe to call more than once."""
        task, self._clock_task = self._clock_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def __aenter__(self) -> "TaskListController":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.dispose()

    @property
    def clock_running(self) -> bool:
        return self._clock_task is not None and not self._clock_task.done()

    async def _run_clock(self) -> None:
        while True:
            await asyncio.sleep(self._clock_interval)
            self.tick()

    # --- clock ---

    def tick(self) -> ClockState:
        """Recompute the clock display from the current time and publish it."""
        clock = compute_clock(self._now())
        self._state.set_clock(clock)
        logger.debug("clock_tick", time=clock.time_text, greeting=clock.greeting)
        return clock

    @property
    def clock(self) -> ClockState | None:
        return self._state.clock

    @property
    def greeting(self) -> str | None:
        return self._state.clock.greeting if self._state.clock else None

    @property
    def time_text(self) -> str | None:
        return self._state.clock.time_text if self._state.clock else None

    # --- snapshot and derived views ---

    @property
    def snapshot(self) -> Snapshot:
        return self._state.snapshot

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    @property
    def upcoming_tasks(self) -> tuple[Task, ...]:
        return upcoming_tasks(self._state.tasks)

    @property
    def completed_tasks(self) -> tuple[Task, ...]:
        return completed_tasks(self._state.tasks)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Be told about every snapshot replacement (tasks or clock)."""
        return self._state.subscribe(listener)

    # --- store commands ---

    async def refresh(self) -> bool:
        """Re-fetch the full task list and replace the snapshot.

        Returns:
            True if the snapshot was replaced, False if the store failed.
        """
        try:
            tasks = await self._service.list_tasks()
        except StoreError as e:
            logger.error("list_retrieve_failed", error=str(e))
            return False

        self._state.replace_tasks(tasks)
        logger.info("list_retrieved", count=len(tasks))
        return True

    async def add_task(self, name: str | None = None) -> bool:
        """Create a task from ``name`` (or the current draft) and refresh.

        The draft is cleared before the store answers, whatever the outcome.
        No validation is done, so an empty name is submitted as is.

        Returns:
            True if the store created the task.
        """
        if name is None:
            name = self.draft
        draft = Task(id=None, name=name, done=False)
        self.draft = ""

        try:
            created = await self._service.create_task(draft.name)
        except StoreError as e:
            logger.error("item_insert_failed", payload=draft.to_payload(), error=str(e))
            return False

        logger.info("item_inserted", task_id=created.id)
        await self.refresh()
        return True

    # --- child notifications ---

    async def handle_child_update(self) -> None:
        await self.refresh()

    async def handle_child_delete(self) -> None:
        await self.refresh()

    async def handle_item_event(self, event: ItemEvent) -> None:
        """Notification channel handed to every TaskItemView."""
        if event is ItemEvent.UPDATED:
            await self.handle_child_update()
        elif event is ItemEvent.DELETED:
            await self.handle_child_delete()

    def item_view(self, task: Task) -> TaskItemView:
        """Build a child view wired to this controller."""
        return TaskItemView(task, self._service, self.handle_item_event)

    def item_views(self) -> list[TaskItemView]:
        return [self.item_view(task) for task in self._state.tasks]

    def find_item(self, task_id: object) -> TaskItemView | None:
        """Look up a task in the snapshot by id (compared as text)."""
        wanted = str(task_id)
        for task in self._state.tasks:
            if str(task.id) == wanted:
                return self.item_view(task)
        return None
