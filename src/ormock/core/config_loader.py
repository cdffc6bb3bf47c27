# src/ormock/core/config_loader.py
"""Settings loading for mock databases and models.

Provides YAML loading and deep merge for configuration precedence
(explicit overrides > config file > defaults). Test suites that share a
mock setup across modules keep it in one YAML file and override per test.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, with override taking precedence.

    Args:
        base: Base configuration dict.
        override: Override values (takes precedence).

    Returns:
        Merged configuration dict (new dict, does not mutate inputs).
    """
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML file that must contain a mapping.

    An empty file is an empty mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document is not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open() as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file '{path}' must be a YAML mapping, got {type(loaded).__name__}")
    return loaded


def load_settings[ConfigT: BaseModel](
    config_cls: type[ConfigT],
    *,
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ConfigT:
    """Load settings with precedence handling.

    Precedence (highest to lowest):
    1. overrides - Values passed directly by the test
    2. config_file - Shared YAML configuration file
    3. defaults - Built-in Pydantic defaults

    Args:
        config_cls: The Pydantic model class to validate into.
        config_file: Optional path to YAML config file.
        overrides: Optional dict of explicit overrides.

    Returns:
        Validated config instance of type ``config_cls``.

    Raises:
        FileNotFoundError: If config_file not found.
        yaml.YAMLError: If YAML is malformed.
        ValueError: If the YAML document is not a mapping.
        pydantic.ValidationError: If final config fails validation.
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        config_dict = load_yaml_mapping(config_file)

    if overrides is not None:
        config_dict = deep_merge(config_dict, overrides)

    return config_cls(**config_dict)
