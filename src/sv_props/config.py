"""Configuration file support for sv-props."""

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigValidationError

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class PropsConfig:
    """Output formatting options."""

    delimiter: str = "\t"
    float_precision: int = 6
    na_value: str = "NA"
    log_level: str | None = None


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    if "delimiter" in config_dict:
        delimiter = config_dict["delimiter"]
        if not isinstance(delimiter, str) or not delimiter:
            raise ConfigValidationError(f"delimiter must be a non-empty string, got {delimiter!r}")
        if "\n" in delimiter:
            raise ConfigValidationError("delimiter must not contain a newline")

    if "float_precision" in config_dict:
        precision = config_dict["float_precision"]
        if not isinstance(precision, int) or isinstance(precision, bool):
            raise ConfigValidationError(
                f"float_precision must be an integer, got {type(precision).__name__}"
            )
        if precision <= 0:
            raise ConfigValidationError(f"float_precision must be positive, got {precision}")

    if "na_value" in config_dict:
        na_value = config_dict["na_value"]
        if not isinstance(na_value, str):
            raise ConfigValidationError(
                f"na_value must be a string, got {type(na_value).__name__}"
            )

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> PropsConfig:
    """Load configuration from the [sv_props] table of a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        PropsConfig instance with loaded values.

    Raises:
        ConfigValidationError: If the file is missing, unparsable or holds invalid values.
    """
    if not config_path.exists():
        raise ConfigValidationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {config_path}: {e}") from e

    config_dict = dict(toml_data.get("sv_props", {}))

    if overrides:
        config_dict.update(overrides)

    validate_config(config_dict)

    valid_fields = {f.name for f in fields(PropsConfig)}
    unknown = sorted(set(config_dict) - valid_fields)
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

    filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}
    if filtered_config.get("log_level"):
        filtered_config["log_level"] = filtered_config["log_level"].upper()

    return PropsConfig(**filtered_config)
