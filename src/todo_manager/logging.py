"""structlog setup for the todo manager.

Log lines go to stderr so they never interleave with the board drawn on
stdout. Components get their logger from ``Loggers``; the app binds the
store backend once so every event carries it.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from todo_manager.config import Settings

# Client libraries whose request logs would drown the prompt
_QUIET_LIBRARIES = ("httpx", "httpcore")


def _renderer(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(settings: "Settings | None" = None) -> None:
    """Configure structlog from ``log_level`` / ``log_format``.

    Without settings only warnings and errors are shown, on the console.
    """
    level_name = settings.log_level if settings is not None else "warning"
    log_format = settings.log_format if settings is not None else "console"
    level = getattr(logging, level_name.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level, stream=sys.stderr)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs: object) -> None:
    """Attach key/values to every later event in this context.

    Example:
        bind_context(store_backend="http")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


class Loggers:
    """Named loggers, one per component."""

    @staticmethod
    def controller() -> structlog.stdlib.BoundLogger:
        """Task list controller and its state."""
        return get_logger("todo_manager.controller")

    @staticmethod
    def items() -> structlog.stdlib.BoundLogger:
        """Per-task item views."""
        return get_logger("todo_manager.items")

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        """Task store adapters."""
        return get_logger("todo_manager.store")

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        return get_logger("todo_manager.cli")
