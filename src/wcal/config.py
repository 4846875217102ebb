"""
Calculator configuration for wcal.

Configuration is loaded from the [wcal] section of wcal.toml:

    [wcal]
    mode = "f64"
    max_depth = 256
    log_level = "INFO"
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wcal.core.calculator import Mode
from wcal.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "wcal.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CalculatorConfig(BaseModel):
    """Complete calculator configuration."""

    mode: Mode = Mode.INTEGER
    max_depth: int | None = Field(default=None, ge=1)
    log_level: str = "WARNING"

    model_config = ConfigDict(extra="forbid")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept logging level names in any case."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(_LOG_LEVELS)}")
        return level


# =============================================================================
# Configuration Loading
# =============================================================================


def load_config(toml_path: Path) -> CalculatorConfig:
    """
    Load calculator configuration from a TOML file.

    Args:
        toml_path: Path to wcal.toml

    Returns:
        CalculatorConfig with values from file or defaults

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    if not toml_path.exists():
        logger.debug("No config file at %s, using defaults", toml_path)
        return CalculatorConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

    section = data.get("wcal", {})
    if not section:
        return CalculatorConfig()

    return _parse_config(section, toml_path)


def _parse_config(data: dict[str, Any], source: Path) -> CalculatorConfig:
    """Parse the [wcal] table into CalculatorConfig."""
    try:
        return CalculatorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def apply_overrides(config: CalculatorConfig, **overrides: Any) -> CalculatorConfig:
    """Return a copy of config with command-line values validated like file values."""
    try:
        return CalculatorConfig.model_validate({**config.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigError(f"Invalid command-line option: {e}") from e


def find_config(explicit: Path | None = None, cwd: Path | None = None) -> Path:
    """Return the explicit config path, or wcal.toml in the working directory."""
    if explicit is not None:
        return explicit
    return (cwd or Path.cwd()) / DEFAULT_CONFIG_FILE
