# config/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the application.

Handles loading settings from Pydantic model defaults, environment variables,
a YAML file and command-line arguments, applying this order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (GTFS_ADAPTER_*)
3. YAML Configuration File
4. Command-Line Arguments
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)


class GTFSConfigError(Exception):
    """Raised when the run configuration cannot be resolved."""

    pass


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively update ``source`` with ``overrides``.

    Nested dictionaries are merged key by key; ``None`` values in ``overrides``
    never replace an existing value.

    Returns:
        The updated ``source`` dictionary.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _read_yaml(yaml_config_path: Path, logger_to_use: logging.Logger) -> Dict[str, Any]:
    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise GTFSConfigError(f"Could not parse YAML config file '{yaml_config_path}': {e}") from e
    except OSError as e:
        raise GTFSConfigError(f"Could not read config file '{yaml_config_path}': {e}") from e

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}
    logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def load_app_settings(
    cli_overrides: Optional[Dict[str, Any]] = None,
    config_file_path: Union[str, Path] = "config.yaml",
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings.

    Args:
        cli_overrides: Values given on the command line; ``None`` entries are ignored.
        config_file_path: Path to the YAML configuration file. A missing file is not an error.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        GTFSConfigError: If the YAML file is unreadable or the merged values are invalid.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        current_values_dict = AppSettings().model_dump(exclude_defaults=False)
    except ValidationError as e:
        raise GTFSConfigError(f"Invalid settings in environment: {e}") from e

    yaml_config_path = Path(config_file_path)
    if yaml_config_path.is_file():
        current_values_dict = _deep_update(
            current_values_dict, _read_yaml(yaml_config_path, logger_to_use)
        )
    else:
        logger_to_use.debug(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )

    if cli_overrides:
        current_values_dict = _deep_update(current_values_dict, cli_overrides)

    try:
        return AppSettings.model_validate(current_values_dict)
    except ValidationError as e:
        raise GTFSConfigError(f"Invalid configuration: {e}") from e
