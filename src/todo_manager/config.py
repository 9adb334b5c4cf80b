"""Configuration for the todo manager.

Settings are read once and shared through get_settings(); set_settings()
swaps them (tests, command-line overrides) and reload_settings() re-reads
every source.

Settings Loading Priority (highest to lowest):
    1. Environment variables (TODO_* prefix)
    2. Project config (./.{app_name}/settings.json)
    3. User config (~/.{app_name}/settings.json)
    4. .env file
    5. Default values
"""

from pathlib import Path
from typing import Tuple, Type

from pydantic_settings import (
    BaseSettings as PydanticBaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)

from todo_manager.settings_mixins import (
    AppSettingsMixin,
    CLISettingsMixin,
    ClockSettingsMixin,
    StoreSettingsMixin,
)

__all__ = [
    "Settings",
    "SettingsValidationError",
    "get_settings",
    "set_settings",
    "validate_settings",
    "reload_settings",
]


def _get_json_config_source(
    settings_cls: Type[PydanticBaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists.

    Args:
        settings_cls: The settings class
        json_file: Path to JSON config file

    Returns:
        JsonConfigSettingsSource if file exists, None otherwise
    """
    if not json_file.exists():
        return None

    from pydantic_settings import JsonConfigSettingsSource

    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class Settings(
    StoreSettingsMixin,
    ClockSettingsMixin,
    AppSettingsMixin,
    CLISettingsMixin,
    PydanticBaseSettings,
):
    """Settings for the todo manager.

    Settings are loaded from (in order of precedence):
    1. Environment variables (TODO_ prefix)
    2. Project config (./.todo_manager/settings.json)
    3. User config (~/.todo_manager/settings.json)
    4. .env file
    5. Default values

    Mixins provide organized settings:
    - StoreSettingsMixin: Store backend, URL, timeout, demo seeding
    - ClockSettingsMixin: Greeting/clock refresh interval
    - AppSettingsMixin: Application identity and disk layout
    - CLISettingsMixin: Logging settings
    """

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources for layered JSON configuration.

        Priority (highest to lowest):
            1. init_settings (constructor arguments)
            2. env_settings (environment variables)
            3. project_json (./.app_name/settings.json)
            4. user_json (~/.app_name/settings.json)
            5. dotenv_settings (.env file)

        Note: JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
        ]

        app_name = "todo_manager"
        if "app_name" in cls.model_fields:
            field_info = cls.model_fields["app_name"]
            if field_info.default:
                app_name = field_info.default

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / f".{app_name}" / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / f".{app_name}" / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)

        return tuple(sources)


# Process-wide settings, built on first access
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get the current settings, loading them from the sources on first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def set_settings(settings: Settings) -> None:
    """Replace the process-wide settings (CLI overrides, tests)."""
    global _settings_instance
    _settings_instance = settings


def reload_settings() -> Settings:
    """Drop the cached settings and load them again from the sources."""
    global _settings_instance
    _settings_instance = None
    return get_settings()


class SettingsValidationError(Exception):
    """Raised when settings validation fails."""

    pass


def validate_settings(settings: Settings) -> None:
    """Validate settings for runtime use.

    Performs validation that can only be done once the backend is known:
    - The http backend needs a store URL
    - The store URL must be an http(s) URL

    Args:
        settings: Settings to validate

    Raises:
        SettingsValidationError: If validation fails
    """
    errors = []

    if settings.store_backend == "http":
        if not settings.store_url:
            errors.append(
                "The http store backend needs a URL. Set TODO_STORE_URL."
            )
        elif not settings.store_url.startswith(("http://", "https://")):
            errors.append(
                f"Store URL '{settings.store_url}' must start with http:// or https://"
            )

    if errors:
        raise SettingsValidationError("\n".join(errors))
