"""Derived views over a task snapshot.

Views are recomputed on demand and never cached, so they always agree with
the snapshot they were given.
"""

from collections.abc import Sequence

from todo_manager.models import Task

COMPLETED_CLASS = "todo completed"
UPCOMING_CLASS = "todo upcoming"

CHECK_ICON = "utility:check"
ADD_ICON = "utility:add"


def upcoming_tasks(tasks: Sequence[Task] | None) -> tuple[Task, ...]:
    """Tasks not yet done, in snapshot order."""
    if not tasks:
        return ()
    return tuple(task for task in tasks if not task.done)


def completed_tasks(tasks: Sequence[Task] | None) -> tuple[Task, ...]:
    """Tasks marked done, in snapshot order."""
    if not tasks:
        return ()
    return tuple(task for task in tasks if task.done)


def container_class(done: bool) -> str:
    return COMPLETED_CLASS if done else UPCOMING_CLASS


def icon_name(done: bool) -> str:
    return CHECK_ICON if done else ADD_ICON
