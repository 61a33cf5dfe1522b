"""Configuration loading for the ``ev`` command.

Settings come from ``evexpr.yaml`` (or an explicit path), merged over
``DEFAULT_CONFIG``.  Unknown keys are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from evexpr.expr.errors import ConfigError

CONFIG_FILENAME = "evexpr.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "precision": 17,
    "output": "double",
    "logging_path": None,
    "logging_fsync": False,
    "log_level": "WARNING",
}

OutputMode = Literal["double", "float", "int", "uint", "hex"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EvexprConfig(BaseModel):
    """Validated settings."""

    precision: int = 17
    output: OutputMode = "double"
    logging_path: str | None = None
    logging_fsync: bool = False
    log_level: str = "WARNING"

    @field_validator("precision")
    @classmethod
    def _check_precision(cls, v: int) -> int:
        if v < 0:
            raise ValueError("precision must be non-negative")
        return v

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_config(path: Path | None = None) -> EvexprConfig:
    """Load configuration, with defaults.

    Args:
        path: Explicit config file.  When ``None``, ``evexpr.yaml`` in the
            current directory is used if it exists.

    Returns:
        The merged, validated configuration.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config = dict(DEFAULT_CONFIG)

    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        path = candidate if candidate.exists() else None
    elif not path.exists():
        raise ConfigError(f"config file not found: {path}")

    if path is not None:
        try:
            user_config = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
        if not isinstance(user_config, dict):
            raise ConfigError(f"{path} must contain a mapping")
        config.update({k: v for k, v in user_config.items() if k in DEFAULT_CONFIG})

    try:
        return EvexprConfig(**config)
    except ValidationError as exc:
        first = exc.errors()[0]
        key = str(first["loc"][0]) if first.get("loc") else None
        raise ConfigError(first["msg"], key=key) from exc
