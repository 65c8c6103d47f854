"""Configuration management for eventemitter."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from eventemitter.core.exceptions import ConfigurationError

ENV_PREFIX = "EVENTEMITTER_"


class EmitterConfig(BaseSettings):
    """
    Configuration shared by emitters.

    Can be loaded from:
    - Environment variables (prefix: EVENTEMITTER_)
    - YAML file
    - Direct initialization

    Example:
        >>> config = EmitterConfig(context_match="identity")
        >>> config = EmitterConfig.from_yaml("emitter.yaml")
        >>> config = EmitterConfig()
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        validate_default=True,
    )

    context_match: Literal["equal", "identity"] = Field(
        default="equal",
        description="How removal compares contexts (equal: ==, identity: is)",
    )
    max_listeners: int = Field(
        default=0,
        ge=0,
        description="Warn when one event exceeds this many listeners (0=unlimited)",
    )
    trace_dispatch: bool = Field(
        default=False,
        description="Record dispatch trace markers (True=tests/debug, False=production)",
    )
    max_traces: int = Field(
        default=10000,
        ge=0,
        description="Max trace markers kept per emitter (0=unlimited)",
    )
    log_level: str = Field(
        default="WARNING",
        description="Level applied to the eventemitter logger by configure_logging()",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard level names in any case."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def load(cls, **values: Any) -> EmitterConfig:
        """
        Build a config, reporting bad values as ConfigurationError.

        Raises:
            ConfigurationError: If any value fails validation
        """
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid emitter configuration: {e}") from e

    @classmethod
    def from_yaml(cls, path: Path | str) -> EmitterConfig:
        """
        Load configuration from YAML file.

        Environment variables take precedence over values from the file.

        Args:
            path: Path to YAML configuration file

        Returns:
            EmitterConfig instance

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the file holds invalid values
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file must hold a mapping: {path}")

        result_data = {}

        for key, value in yaml_data.items():
            if not isinstance(key, str):
                raise ConfigurationError(f"Config keys must be strings, got {key!r}: {path}")
            env_key = f"{ENV_PREFIX}{key.upper()}"
            if env_key in os.environ:
                continue
            result_data[key] = value

        return cls.load(**result_data)

    def to_yaml(self, path: Path | str) -> None:
        """
        Save configuration to YAML file.

        Example:
            >>> config.to_yaml("emitter.yaml")
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def __repr__(self) -> str:
        return (
            f"EmitterConfig(context_match={self.context_match!r}, "
            f"max_listeners={self.max_listeners}, trace_dispatch={self.trace_dispatch})"
        )


_default_config: EmitterConfig | None = None


def get_default_config() -> EmitterConfig:
    """
    Get the process-wide default config.

    Built from the environment on first call.
    Can be overridden for testing via set_default_config().
    """
    global _default_config
    if _default_config is None:
        _default_config = EmitterConfig.load()
    return _default_config


def set_default_config(config: EmitterConfig | None) -> None:
    """
    Set the process-wide default config.

    Args:
        config: Config to use for new emitters, or None to re-read the environment
    """
    global _default_config
    _default_config = config


def configure_logging(config: EmitterConfig | None = None) -> logging.Logger:
    """
    Apply log_level to the package logger.

    No handlers are installed; the application owns logging output.

    Returns:
        The eventemitter logger
    """
    config = config or get_default_config()
    package_logger = logging.getLogger("eventemitter")
    package_logger.setLevel(config.log_level)
    return package_logger


__all__ = [
    "EmitterConfig",
    "configure_logging",
    "get_default_config",
    "set_default_config",
]
