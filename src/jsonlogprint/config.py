"""Configuration via pydantic-settings — 12-factor app style.

Every option has a default, so no configuration is needed. Values come from,
in increasing precedence: defaults, ``JSONLOGPRINT_*`` environment variables
(or a ``.env`` file), and command-line options.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError
from rich.errors import StyleSyntaxError
from rich.style import Style

from .classify.fields import DEFAULT_LEVEL_KEYS, DEFAULT_MESSAGE_KEYS, DEFAULT_TIMESTAMP_KEYS
from .render.segments import Role
from .render.styles import ColorMode
from .render.timestamps import TimestampFormat

_COLOR_ALIASES = {
    "on": ColorMode.ALWAYS,
    "yes": ColorMode.ALWAYS,
    "true": ColorMode.ALWAYS,
    "off": ColorMode.NEVER,
    "no": ColorMode.NEVER,
    "false": ColorMode.NEVER,
}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


class Settings(BaseSettings):
    """jsonlogprint configuration, loaded from env vars / .env file."""

    model_config = SettingsConfigDict(env_prefix="JSONLOGPRINT_", env_file=".env", extra="ignore")

    color: ColorMode = Field(default=ColorMode.AUTO, description="Color output: always|auto|never (on/off accepted)")
    timestamp_format: TimestampFormat = Field(
        default=TimestampFormat.AUTO, description="Numeric timestamp display: auto|seconds|millis|raw"
    )
    timestamp_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TIMESTAMP_KEYS), description="Timestamp candidate keys, in priority order"
    )
    level_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LEVEL_KEYS), description="Level candidate keys, in priority order"
    )
    message_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MESSAGE_KEYS), description="Message candidate keys, in priority order"
    )
    indent: int = Field(default=2, ge=0, le=16, description="Spaces per nesting level in nested blocks")
    log_level: str = Field(default="WARNING", description="Diagnostic log level (written to stderr)")
    styles: dict[str, str] = Field(default_factory=dict, description="Role name -> rich style overrides")

    @field_validator("color", mode="before")
    @classmethod
    def _color_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _COLOR_ALIASES.get(lowered, lowered)
        return value

    @field_validator("timestamp_format", mode="before")
    @classmethod
    def _lower_format(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("timestamp_keys", "level_keys", "message_keys", mode="before")
    @classmethod
    def _split_keys(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [k.strip() for k in value.split(",") if k.strip()]
        return value

    @field_validator("timestamp_keys", "level_keys", "message_keys")
    @classmethod
    def _non_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one key is required")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("styles")
    @classmethod
    def _valid_styles(cls, value: dict[str, str]) -> dict[str, str]:
        known = {role.value for role in Role}
        for name, definition in value.items():
            if name not in known:
                raise ValueError(f"unknown style role {name!r}; expected one of {', '.join(sorted(known))}")
            try:
                Style.parse(definition)
            except StyleSyntaxError as exc:
                raise ValueError(f"invalid style for {name!r}: {exc}") from exc
        return value

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def role_overrides(styles: dict[str, str]) -> dict[Role, str]:
    return {Role(name): definition for name, definition in styles.items()}


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "settings"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def load_settings(**overrides: Any) -> Settings:
    """Build ``Settings`` from the environment plus explicit overrides.

    ``None`` overrides are ignored so unset CLI options fall through to the
    environment and defaults.

    Raises:
        ConfigError: if any value is invalid.
    """
    given = {name: value for name, value in overrides.items() if value is not None}
    try:
        return Settings(**given)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {_describe(exc)}") from exc
    except SettingsError as exc:
        # Environment values for list/dict options that are not valid JSON.
        raise ConfigError(f"invalid configuration: {exc}") from exc
