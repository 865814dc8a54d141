"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (APPDIRECTORY__DIRECTORY__URL=https://...)
  2. appdirectory.yaml      (searched in cwd, then ~/.config/appdirectory/)
  3. Hardcoded defaults

The config file is optional. The directory source URL is read from here
before the directory is constructed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("appdirectory")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "store.db")


def _find_config_file() -> str | None:
    """Return the path of the first appdirectory.yaml found, or None."""
    candidates = [
        Path("appdirectory.yaml"),
        Path.home() / ".config" / "appdirectory" / "appdirectory.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class DirectorySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = "http://localhost:3923/provider/sample-app-directory.json"


class StoreSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    db_path: str = _DEFAULT_DB_PATH


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = 30.0
    follow_redirects: bool = True
    user_agent: str = "appdirectory"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: APPDIRECTORY__STORE__DB_PATH=/tmp/x.db
        env_prefix="APPDIRECTORY__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    directory: DirectorySettings = DirectorySettings()
    store: StoreSettings = StoreSettings()
    fetcher: FetcherSettings = FetcherSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
