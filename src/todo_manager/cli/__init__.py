"""Terminal front end: prompt loop, slash commands and rich rendering."""

from todo_manager.cli.app import SlashCommandCompleter, TodoApp
from todo_manager.cli.commands import Command, CommandCategory, CommandRegistry

__all__ = [
    "TodoApp",
    "SlashCommandCompleter",
    "Command",
    "CommandCategory",
    "CommandRegistry",
]
