"""Rich renderables for the task board."""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todo_manager.clock import PLACEHOLDER_GREETING, PLACEHOLDER_TIME_TEXT, ClockState
from todo_manager.item import TaskItemView
from todo_manager.views import ADD_ICON, CHECK_ICON, COMPLETED_CLASS, UPCOMING_CLASS

if TYPE_CHECKING:
    from todo_manager.controller import TaskListController

ICON_GLYPHS = {
    CHECK_ICON: "✓",
    ADD_ICON: "+",
}

CLASS_STYLES = {
    COMPLETED_CLASS: "dim strike",
    UPCOMING_CLASS: "bold",
}


def render_header(clock: ClockState | None) -> Panel:
    """Greeting and time, or the placeholder before the first tick."""
    if clock is None:
        greeting, time_text = PLACEHOLDER_GREETING, PLACEHOLDER_TIME_TEXT
    else:
        greeting, time_text = clock.greeting, clock.time_text

    text = Text()
    text.append(time_text, style="bold cyan")
    text.append("  ")
    text.append(greeting, style="bold")
    return Panel(text, border_style="cyan")


def render_tasks(title: str, views: Iterable[TaskItemView]) -> Table:
    table = Table(title=title, title_justify="left", show_header=False, box=None, padding=(0, 2, 0, 0))
    table.add_column("Icon", no_wrap=True)
    table.add_column("Id", style="dim", no_wrap=True)
    table.add_column("Name")

    for view in views:
        style = CLASS_STYLES.get(view.container_class, "")
        table.add_row(
            ICON_GLYPHS.get(view.icon_name, "?"),
            str(view.task_id),
            Text(view.name, style=style),
        )
    return table


def render_board(controller: "TaskListController") -> Group:
    """Header plus the upcoming and completed lists."""
    upcoming = [controller.item_view(task) for task in controller.upcoming_tasks]
    completed = [controller.item_view(task) for task in controller.completed_tasks]
    return Group(
        render_header(controller.clock),
        render_tasks(f"Upcoming ({len(upcoming)})", upcoming),
        render_tasks(f"Completed ({len(completed)})", completed),
    )
