"""Connection configuration model and its JSON-backed store."""

from __future__ import annotations

from collections.abc import Mapping
import json
import logging
import os
from pathlib import Path
from typing import Any

from platformdirs import user_config_path
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

LOGGER = logging.getLogger(__name__)

APP_NAME = "mahoraga"
CONFIG_FILENAME = "config.json"
CONFIG_PATH_ENV = "MAHORAGA_CONFIG_PATH"

DEFAULT_API_VERSION = "2024-02-15-preview"
VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Config(BaseModel):
    """Azure OpenAI connection settings, persisted wholesale."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = ""
    api_key: str = Field(default="", alias="apiKey")
    deployment: str = ""
    api_version: str = Field(default=DEFAULT_API_VERSION, alias="apiVersion")

    @field_validator("url", "api_key", "deployment", "api_version", mode="before")
    @classmethod
    def _normalize_string(cls, value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("Expected a string value.")
        return value.strip()

    def to_json_dict(self) -> dict[str, str]:
        """Return the on-disk representation (camelCase keys)."""
        return self.model_dump(by_alias=True)


class LoggingConfig(BaseModel):
    """Logging behavior and output destinations."""

    level: str = "INFO"
    structured: bool = True
    log_to_file: bool = False
    log_file_path: str = "~/.local/state/mahoraga/app.log"

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Logging level must be a string.")
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported log level {normalized!r}.")
        return normalized

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _validate_log_file_path(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("log_file_path must be a string.")
        normalized = value.strip()
        if not normalized:
            raise ValueError("log_file_path must not be empty.")
        return normalized


_LOGGING_ENV_KEYS = {
    "MAHORAGA_LOG_LEVEL": "level",
    "MAHORAGA_LOG_STRUCTURED": "structured",
    "MAHORAGA_LOG_TO_FILE": "log_to_file",
    "MAHORAGA_LOG_FILE": "log_file_path",
}


def default_config() -> Config:
    """Return a fresh default config: empty connection fields, fixed API version."""
    return Config()


def is_configured(config: Config | None) -> bool:
    """Return True when every connection field holds a non-empty value."""
    if config is None:
        return False
    return all(
        (config.url, config.api_key, config.deployment, config.api_version)
    )


def default_config_path() -> Path:
    """Resolve the per-user config file location."""
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return user_config_path(APP_NAME) / CONFIG_FILENAME


def load_logging_config(environ: Mapping[str, str] | None = None) -> LoggingConfig:
    """Build logging settings from ``MAHORAGA_LOG_*`` environment variables."""
    source = os.environ if environ is None else environ
    raw = {
        field: source[key]
        for key, field in _LOGGING_ENV_KEYS.items()
        if source.get(key, "").strip()
    }
    try:
        return LoggingConfig.model_validate(raw)
    except ValidationError as exc:
        LOGGER.warning("Logging configuration invalid, using defaults: %s", exc)
        return LoggingConfig()


def _enforce_private_permissions(path: Path) -> None:
    """Best-effort enforcement of private file permissions on POSIX systems."""
    if os.name != "posix" or not path.exists():
        return
    try:
        path.chmod(0o600)
    except OSError as exc:
        LOGGER.warning("Unable to enforce 0600 permissions for %s: %s", path, exc)


class ConfigStore:
    """Load and save the connection config as a single JSON object."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_config_path()

    def load(self) -> Config:
        """Return the persisted config, or the default when absent or unreadable.

        Never raises: any read, parse or validation problem is logged and
        treated as "no config saved yet".
        """
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return default_config()
        except (OSError, ValueError) as exc:
            LOGGER.warning("Failed to read config at %s: %s", self.path, exc)
            return default_config()
        if not isinstance(raw, dict):
            LOGGER.warning("Config at %s is not a JSON object, ignoring.", self.path)
            return default_config()
        try:
            return Config.model_validate(raw)
        except ValidationError as exc:
            LOGGER.warning("Configuration validation failed, using defaults: %s", exc)
            return default_config()

    def save(self, config: Config) -> None:
        """Persist ``config`` wholesale, creating the parent directory if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(config.to_json_dict(), indent=2) + "\n", encoding="utf-8"
        )
        _enforce_private_permissions(self.path)
        LOGGER.info(
            "config.saved",
            extra={
                "event": "config.saved",
                "path": str(self.path),
                "configured": is_configured(config),
            },
        )

    def reset(self) -> Config:
        """Overwrite the stored config with defaults and return them."""
        config = default_config()
        self.save(config)
        return config
