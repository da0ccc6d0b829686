"""Configuration settings and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dectable.errors import ConfigValidationError, ErrorContext

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class DecTableConfig(BaseSettings):
    """Configuration for the dectable tools.

    The table algorithms themselves take no configuration; these
    settings only affect logging, reporting and the CLI's guard against
    enumerating huge state spaces.
    """

    model_config = SettingsConfigDict(
        env_prefix="DECTABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    json_logs: bool = False
    max_state_space: int = Field(
        default=1_000_000, description="Largest state space the CLI will enumerate"
    )
    report_dir: str | None = Field(
        default=None, description="Where to write documentation (default: beside the table)"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                message=f"Invalid log level: {v}. Valid: {sorted(VALID_LOG_LEVELS)}",
                field="log_level",
                value=v,
                context=ErrorContext(extra={"valid_levels": sorted(VALID_LOG_LEVELS)}),
            )
        return level

    @field_validator("max_state_space")
    @classmethod
    def validate_max_state_space(cls, v: int) -> int:
        if v < 1:
            raise ConfigValidationError(
                message="max_state_space must be a positive integer",
                field="max_state_space",
                value=v,
            )
        return v


def load_config(config_path: str | Path | None = None) -> DecTableConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults

    Raises:
        ConfigValidationError: If the file is not a YAML mapping or a
            value from the file or environment is invalid.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigValidationError(
                    message=f"Invalid YAML in config file {config_path}: {e}",
                    context=ErrorContext(source=str(config_path)),
                    cause=e,
                ) from e
            if not isinstance(config_data, dict):
                raise ConfigValidationError(
                    message=f"Config file {config_path} must contain a mapping",
                    context=ErrorContext(source=str(config_path)),
                )

    config_data.update(_get_env_overrides())

    try:
        return DecTableConfig(**config_data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ()))
        raise ConfigValidationError(
            message=f"Invalid configuration value for {field}: {first.get('msg')}",
            field=field or None,
            value=first.get("input"),
            context=ErrorContext(
                source=str(config_path) if config_path is not None else None
            ),
            cause=e,
        ) from e


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables.

    Raises:
        ConfigValidationError: If a value cannot be converted.
    """
    overrides: dict[str, Any] = {}

    env_mappings = {
        "DECTABLE_LOG_LEVEL": "log_level",
        "DECTABLE_JSON_LOGS": ("json_logs", lambda x: x.lower() in ("true", "1", "yes")),
        "DECTABLE_MAX_STATE_SPACE": ("max_state_space", int),
        "DECTABLE_REPORT_DIR": "report_dir",
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            if isinstance(config_key, tuple):
                key, converter = config_key
                try:
                    overrides[key] = converter(value)
                except ValueError as e:
                    raise ConfigValidationError(
                        message=f"Invalid value for {env_key}: {value!r}",
                        field=key,
                        value=value,
                        context=ErrorContext(source=env_key),
                        cause=e,
                    ) from e
            else:
                overrides[config_key] = value

    return overrides
