"""Terminal front end for the task list.

This module provides the CLI application that:
1. Builds the task store and the TaskListController from settings
2. Reads commands with a prompt_toolkit session (slash-command completion,
   a bottom toolbar showing the greeting clock)
3. Redraws the board with rich whenever the snapshot changed
"""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from todo_manager.cli.commands import CommandRegistry
from todo_manager.cli.render import render_board
from todo_manager.clock import PLACEHOLDER_GREETING, PLACEHOLDER_TIME_TEXT
from todo_manager.config import Settings, get_settings
from todo_manager.controller import TaskListController
from todo_manager.logging import Loggers, bind_context, configure_logging
from todo_manager.models import demo_tasks
from todo_manager.services import TaskService, create_task_service
from todo_manager.state import Snapshot

logger = Loggers.cli()


class SlashCommandCompleter(Completer):
    """Completer that only triggers for slash commands."""

    def __init__(self, commands: list[str]) -> None:
        self.commands = sorted(commands)

    def get_completions(self, document: Document, complete_event):
        """Yield completions only when text starts with /."""
        text = document.text_before_cursor

        if not text.startswith("/"):
            return

        partial = text[1:].lower()

        for cmd in self.commands:
            if cmd.lower().startswith(partial):
                yield Completion(
                    text=f"/{cmd}",
                    start_position=-len(text),
                    display=f"/{cmd}",
                )


class TodoApp:
    """Interactive task list.

    Plain input (no leading slash) is treated as the name of a new task,
    the same as typing into the input box and pressing "+".

    Args:
        settings: Application settings (defaults to get_settings()).
        service: Task store override; built from settings when omitted.
        console: rich Console to draw on.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        service: TaskService | None = None,
        console: Console | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.service = service or create_task_service(self._settings)
        self.console = console or Console()
        self.controller = TaskListController(
            self.service,
            clock_interval=self._settings.clock_interval_seconds,
            placeholder=demo_tasks() if self._settings.seed_demo else (),
        )
        self.command_registry = CommandRegistry()
        self._register_builtin_commands()
        self.should_exit = False
        self._dirty = True
        self._session: PromptSession | None = None
        self.controller.subscribe(self._on_snapshot)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def session(self) -> PromptSession:
        """Prompt session, created on first use so no terminal is needed before run()."""
        if self._session is None:
            self._session = PromptSession(
                history=InMemoryHistory(),
                completer=SlashCommandCompleter(self.command_registry.get_completions()),
                bottom_toolbar=self._toolbar,
                refresh_interval=1.0,
            )
        return self._session

    def _register_builtin_commands(self) -> None:
        from todo_manager.cli.builtin_commands import (
            AddCommand,
            DeleteCommand,
            ExitCommand,
            HelpCommand,
            ListCommand,
            RefreshCommand,
            ToggleCommand,
        )

        for command in (
            HelpCommand(),
            ExitCommand(),
            AddCommand(),
            ToggleCommand(),
            DeleteCommand(),
            RefreshCommand(),
            ListCommand(),
        ):
            self.command_registry.register(command)

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self._dirty = True

    def _toolbar(self) -> str:
        greeting = self.controller.greeting or PLACEHOLDER_GREETING
        time_text = self.controller.time_text or PLACEHOLDER_TIME_TEXT
        return f" {time_text}  {greeting}  |  /help for commands"

    # --- output ---

    def add_message(self, text: str, style: str = "") -> None:
        self.console.print(text, style=style or None, markup=False, highlight=False)

    def add_error(self, text: str) -> None:
        self.add_message(text, style="bold red")

    def show_board(self) -> None:
        self.console.print(render_board(self.controller))
        self._dirty = False

    def stop(self) -> None:
        """Stop the application after the current command."""
        self.should_exit = True

    # --- input ---

    async def process_input(self, user_input: str) -> None:
        """Route one line of input to a command or to add_task.

        Plain text becomes the task name exactly as typed; whitespace-only
        input is ignored.
        """
        stripped = user_input.strip()

        if stripped.startswith("/"):
            await self._handle_command(user_input.lstrip())
        elif stripped:
            self.controller.draft = user_input
            if not await self.controller.add_task():
                self.add_error("Could not add the task; the list was left unchanged")

    async def _handle_command(self, user_input: str) -> None:
        parts = user_input[1:].split(maxsplit=1)
        command_name = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        command = self.command_registry.get(command_name)
        if command is None:
            self.add_error(f"Unknown command: /{command_name}")
            self.add_message("Type /help to see available commands", style="dim")
            return

        logger.debug("executing_command", command=command.name, args=args)
        try:
            await command.execute(args, self)
            logger.debug("command_completed", command=command.name)
        except Exception as e:
            logger.exception("command_failed", command=command.name)
            self.add_error(f"Error executing command: {e}")

    async def run(self) -> None:
        """Run the main application loop."""
        configure_logging(self._settings)
        bind_context(store_backend=self._settings.store_backend)
        logger.info("app_starting")

        try:
            await self.controller.initialize()
            self.show_board()

            while not self.should_exit:
                try:
                    text = await self.session.prompt_async("todo> ")
                except (EOFError, KeyboardInterrupt):
                    break
                await self.process_input(text)
                if self._dirty and not self.should_exit:
                    self.show_board()
        finally:
            await self.controller.dispose()
            await self.service.aclose()
            logger.info("app_ending")

        self.add_message("Goodbye!", style="dim")
