"""Built-in slash commands for the CLI."""

from typing import Any

from rich.panel import Panel
from rich.table import Table

from todo_manager.cli.commands import Command, CommandCategory


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands and usage information",
            usage="/help [command]",
            examples=["/help", "/help add"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: Any) -> None:
        """Display help information."""
        name = args.strip().lstrip("/")
        if name:
            cmd = app.command_registry.get(name)
            if cmd is None:
                app.add_error(f"Unknown command: /{name}")
            else:
                app.add_message(cmd.get_help())
            return

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Command", style="bold cyan", no_wrap=True)
        table.add_column("Aliases", style="dim", no_wrap=True)
        table.add_column("Description")

        for category in CommandCategory:
            commands = sorted(app.command_registry.by_category(category), key=lambda c: c.name)
            if not commands:
                continue
            table.add_row(f"[bold]{category.value.title()}[/bold]", "", "")
            for cmd in commands:
                aliases = ", ".join(f"/{a}" for a in cmd.aliases) if cmd.aliases else ""
                table.add_row(f"/{cmd.name}", aliases, cmd.description)

        panel = Panel(table, title="[bold]Available Commands[/bold]", border_style="cyan")
        app.console.print(panel)


class ExitCommand(Command):
    """Exit the application."""

    def __init__(self) -> None:
        super().__init__(
            name="exit",
            description="Exit the application",
            aliases=["quit"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.stop()


class AddCommand(Command):
    """Create a task from the rest of the line."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add a task (the name may be empty)",
            aliases=["a"],
            usage="/add <name>",
            examples=["/add Buy milk", "/add Call the plumber"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.controller.draft = args
        if not await app.controller.add_task():
            app.add_error("Could not add the task; the list was left unchanged")


class ToggleCommand(Command):
    """Flip a task between upcoming and completed."""

    def __init__(self) -> None:
        super().__init__(
            name="done",
            description="Toggle a task between upcoming and completed",
            aliases=["toggle", "d"],
            usage="/done <id>",
            examples=["/done 2"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        task_id = args.strip()
        view = app.controller.find_item(task_id)
        if view is None:
            app.add_error(f"No task with id {task_id!r}")
            return
        if not await view.toggle_done():
            app.add_error(f"Could not update task {task_id}")


class DeleteCommand(Command):
    """Delete a task."""

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete a task",
            aliases=["rm", "del"],
            usage="/delete <id>",
            examples=["/delete 0"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        task_id = args.strip()
        view = app.controller.find_item(task_id)
        if view is None:
            app.add_error(f"No task with id {task_id!r}")
            return
        if not await view.delete_self():
            app.add_error(f"Could not delete task {task_id}")


class RefreshCommand(Command):
    """Re-fetch the task list from the store."""

    def __init__(self) -> None:
        super().__init__(
            name="refresh",
            description="Reload the task list from the store",
            aliases=["r"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        if not await app.controller.refresh():
            app.add_error("Could not reach the task store; showing the last known list")


class ListCommand(Command):
    """Redraw the board."""

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description="Show upcoming and completed tasks",
            aliases=["ls"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.show_board()
