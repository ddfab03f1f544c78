"""Configuration storage for todoapp.

Settings live in ``~/.todoapp/config.json`` (or ``$TODOAPP_CONFIG_DIR``).
Environment variables named ``TODOAPP_<FIELD>`` override the file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "TODOAPP_"


class Settings(BaseSettings):
    """Runtime settings for the service, CLI and storage adapters.

    Keyword arguments are the config-file layer: ``TODOAPP_*`` environment
    variables take precedence over them.
    """

    data_dir: str = Field(
        default_factory=lambda: str(Path.home() / ".todoapp" / "data"),
        description="Directory holding todos.json",
    )
    storage: Literal["json", "memory"] = "json"
    environment: Literal["development", "production"] = "development"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8090

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources win
        return (env_settings, init_settings)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def get_config_dir() -> Path:
    """Get the todoapp config directory, creating it if needed."""
    override = os.environ.get(f"{ENV_PREFIX}CONFIG_DIR")
    config_dir = Path(override) if override else Path.home() / ".todoapp"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_settings() -> Settings:
    """Load settings from the config file, with env overrides applied.

    An unreadable or invalid config file, or an invalid environment value,
    falls back to defaults.
    """
    data: dict = {}
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {config_file}: {e}")
            data = {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {config_file}: expected a JSON object")
        data = {}

    try:
        return Settings(**data)
    except ValidationError as e:
        logger.warning(f"Invalid settings, using defaults: {e}")
        # Bypasses every source, the environment included
        return Settings.model_construct()


def save_settings(settings: Settings) -> None:
    """Save settings to the config file."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(), indent=2),
        encoding="utf-8",
    )
