"""Entry point: python -m todo_manager"""

import asyncio
import sys

from todo_manager.config import SettingsValidationError, get_settings, validate_settings


def main() -> int:
    settings = get_settings()
    try:
        validate_settings(settings)
    except SettingsValidationError as e:
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return 2

    from todo_manager.cli.app import TodoApp

    asyncio.run(TodoApp(settings).run())
    return 0


if __name__ == "__main__":
    sys.exit(main())
