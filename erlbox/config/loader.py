# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader: reads YAML from disk and produces a validated, frozen ErlboxConfig.

The loading pipeline is linear:
  1. Read raw text from the file
  2. Parse as YAML into a plain dict
  3. Hand the dict to pydantic for schema validation
  4. Return the frozen config object

Any failure stops here with a clear error. There are no fallbacks for a
broken file; only a *missing* default file (erlbox.yaml) means "use defaults".
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from erlbox.config.exceptions import ConfigLoadError, ConfigValidationError
from erlbox.config.schema import ErlboxConfig

DEFAULT_CONFIG_NAME = "erlbox.yaml"


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    """
    Read a YAML file and return the parsed dict.

    Existence is checked up front because yaml.safe_load gives cryptic errors
    on missing files. An empty file is treated as an empty mapping.

    Raises:
        ConfigLoadError: If the file doesn't exist, isn't readable, or isn't valid YAML.
    """
    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    if not config_path.is_file():
        raise ConfigLoadError(f"Config path is not a file: {config_path}")

    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must contain a YAML mapping (dict), got {type(parsed).__name__}"
        )

    return parsed


def load_config(config_path: Path) -> ErlboxConfig:
    """
    Load, validate, and freeze a config file into an ErlboxConfig object.

    Raises:
        ConfigLoadError: File I/O or YAML parse failures.
        ConfigValidationError: Schema violations (wrong types, unknown keys).
    """
    raw_data = _read_yaml_file(config_path)

    try:
        config = ErlboxConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Config validation failed for {config_path}:\n{err}"
        ) from err

    return config


def find_config(start: Path) -> Optional[Path]:
    """Walk up from `start` looking for an erlbox.yaml. Returns None if there isn't one."""
    current = start.resolve()
    while True:
        candidate = current / DEFAULT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent
