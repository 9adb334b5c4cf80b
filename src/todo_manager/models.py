"""Task records exchanged with the task store."""

import json
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

TaskId = int | str


@dataclass(frozen=True)
class Task:
    """A single to-do entry.

    ``id`` is assigned by the store and is ``None`` only on a draft that has
    not been created yet. ``created_at`` is informational and never used for
    ordering.
    """

    id: TaskId | None
    name: str
    done: bool = False
    created_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "done": self.done,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from a store record.

        Raises:
            KeyError: The record has no ``id``.
            TypeError: ``id`` is not an int or str, or ``done`` is not a bool.
        """
        task_id = data["id"]
        if isinstance(task_id, bool) or not isinstance(task_id, (int, str)):
            raise TypeError(f"task id must be an int or str, got {task_id!r}")
        done = data.get("done")
        if done is None:
            done = False
        if not isinstance(done, bool):
            raise TypeError(f"task done flag must be a bool, got {done!r}")
        return cls(
            id=task_id,
            name=data.get("name") or "",
            done=done,
            created_at=data.get("created_at"),
        )

    def to_payload(self) -> str:
        """Textual encoding of the fields a store call carries."""
        return json.dumps({"id": self.id, "name": self.name, "done": self.done})

    def toggled(self) -> "Task":
        """Copy of this task with the done flag inverted."""
        return replace(self, done=not self.done)


class ItemEvent(Enum):
    """Notifications a task item sends to its parent list."""

    UPDATED = "updated"
    DELETED = "deleted"


class ItemState(Enum):
    """Client-visible state of a single task item."""

    UPCOMING = "upcoming"
    COMPLETED = "completed"

    @classmethod
    def for_done(cls, done: bool) -> "ItemState":
        return cls.COMPLETED if done else cls.UPCOMING


def demo_tasks() -> list[Task]:
    """Placeholder tasks shown before the first load and used to seed demos."""
    now = datetime.now().isoformat()
    return [
        Task(id=0, name="Feed the dog", done=False, created_at=now),
        Task(id=1, name="Wash the car", done=False, created_at=now),
        Task(id=2, name="Send email to manager", done=True, created_at=now),
    ]
