"""Slash command registry and base command class.

Example of creating a custom command:

    from todo_manager.cli.commands import Command, CommandCategory

    class ClearDoneCommand(Command):
        '''Delete every completed task.'''

        def __init__(self):
            super().__init__(
                name="clear-done",
                description="Delete every completed task",
                usage="/clear-done",
                category=CommandCategory.TASKS,
            )

        async def execute(self, args: str, app: Any) -> None:
            for task in app.controller.completed_tasks:
                await app.controller.item_view(task).delete_self()
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class CommandCategory(Enum):
    """Command groups, listed by /help in this order."""

    GENERAL = "general"
    TASKS = "tasks"


class Command(ABC):
    """Base class for slash commands.

    Subclass this and override execute() to implement command behavior.
    """

    def __init__(
        self,
        name: str,
        description: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
        examples: list[str] | None = None,
        category: CommandCategory = CommandCategory.GENERAL,
    ) -> None:
        self.name = name
        self.description = description
        self.aliases = aliases or []
        self.usage = usage or f"/{name}"
        self.examples = examples or []
        self.category = category

    @abstractmethod
    async def execute(self, args: str, app: Any) -> None:
        """Run the command.

        Args:
            args: Everything after the command name
            app: The TodoApp instance
        """

    def get_help(self) -> str:
        """Detailed help text for ``/help <command>``."""
        lines = [f"/{self.name}", f"  {self.description}", "", f"Usage: {self.usage}"]
        if self.aliases:
            lines.append(f"Aliases: {', '.join(f'/{a}' for a in self.aliases)}")
        if self.examples:
            lines.extend(["", "Examples:", *(f"  {example}" for example in self.examples)])
        return "\n".join(lines)


class CommandRegistry:
    """Slash commands looked up by name or alias."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._categories: dict[CommandCategory, list[Command]] = {
            cat: [] for cat in CommandCategory
        }

    def register(self, command: Command) -> None:
        """Register a command and its aliases."""
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

        if command not in self._categories[command.category]:
            self._categories[command.category].append(command)

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        return self._commands.get(name)

    def all_commands(self) -> list[Command]:
        """Every registered command once, aliases excluded."""
        return [cmd for cmds in self._categories.values() for cmd in cmds]

    def by_category(self, category: CommandCategory) -> list[Command]:
        return self._categories[category]

    def get_completions(self) -> list[str]:
        """Command names and aliases for the prompt completer."""
        return list(self._commands.keys())
