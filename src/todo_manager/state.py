"""Observable container for the task list snapshot.

Consumers subscribe once and are handed every new Snapshot; nothing
mutates a Snapshot in place.

Example:
    state = TaskListState()
    unsubscribe = state.subscribe(lambda snap: print(len(snap.tasks)))
    state.replace_tasks(tasks)
    unsubscribe()
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from todo_manager.clock import ClockState
from todo_manager.logging import Loggers
from todo_manager.models import Task

logger = Loggers.controller()

Listener = Callable[["Snapshot"], None]


@dataclass(frozen=True)
class Snapshot:
    """Task list and clock display at one point in time."""

    tasks: tuple[Task, ...] = ()
    clock: ClockState | None = None


class TaskListState:
    """Holds the current Snapshot and notifies listeners on replacement."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._snapshot = Snapshot(tasks=tuple(tasks))
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._snapshot.tasks

    @property
    def clock(self) -> ClockState | None:
        return self._snapshot.clock

    def replace_tasks(self, tasks: Iterable[Task]) -> None:
        """Replace the whole task list."""
        self._publish(replace(self._snapshot, tasks=tuple(tasks)))

    def set_clock(self, clock: ClockState) -> None:
        self._publish(replace(self._snapshot, clock=clock))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("snapshot_listener_failed", listener=repr(listener))
