"""Configuration management for jsonapi-spec using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .messages import MESSAGES, Translator

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".jsonapi-spec.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class MessageOverride(BaseModel):
    """Replacement title/detail/code for one message template."""
    title: str | None = None
    detail: str | None = None
    code: str | None = None

    model_config = ConfigDict(extra="forbid")


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class SpecConfig(BaseModel):
    """Complete jsonapi-spec configuration model."""
    schema_path: str | None = Field(alias="schemaPath", default=None)
    messages: dict[str, MessageOverride] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("messages")
    @classmethod
    def validate_message_keys(cls, v):
        unknown = sorted(set(v) - set(MESSAGES))
        if unknown:
            raise ValueError(f"unknown message keys: {', '.join(unknown)}")
        return v

    def message_overrides(self) -> dict[str, dict[str, str]]:
        return {
            key: override.model_dump(exclude_none=True)
            for key, override in self.messages.items()
        }

    def translator(self) -> Translator:
        """Translator with this configuration's message overrides applied."""
        return Translator(self.message_overrides())


def load_config(config_path: str | Path | None = None) -> SpecConfig:
    """Load the validator configuration.

    An explicit ``config_path`` must exist. Without one, the nearest
    .jsonapi-spec.json above the working directory is used, and the
    defaults apply when there is none.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist
        ValueError: If the file is not valid JSON or not a valid configuration
    """
    if config_path is None:
        path = find_config_file()
        if path is None:
            logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
            return create_default_config()
    else:
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

    try:
        config_data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    try:
        config = SpecConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {path}: {e}") from e

    logger.debug(f"Loaded config from {path}")
    return config


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .jsonapi-spec.json in ``start_dir`` or its parents."""
    start = Path(start_dir or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    return None


def create_default_config() -> SpecConfig:
    """Create default configuration."""
    return SpecConfig()
