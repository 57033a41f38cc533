"""Configuration loading with precedence resolution.

The result is always a frozen :class:`~apidox.models.DoxConfig` that callers
pass explicitly to the components that need it; nothing reads configuration
from ambient global state.

Precedence (high to low):
    1. Explicit overrides (CLI flags, keyword arguments)
    2. Environment variables (``APIDOX_*``)
    3. Config file -- the explicit path, ``$APIDOX_CONFIG``, or the first of
       ``apidox.json`` / ``apidox.yaml`` / ``apidox.yml`` in the working
       directory
    4. Defaults
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from apidox.exceptions import ConfigError
from apidox.models import DoxConfig

_PROJECT_CONFIG_FILENAMES = ("apidox.json", "apidox.yaml", "apidox.yml")

_CONFIG_ENV_VAR = "APIDOX_CONFIG"

_ENV_VARS = {
    "headers_whitelist": "APIDOX_HEADERS_WHITELIST",
    "schema_request_folder_path": "APIDOX_SCHEMA_REQUEST_FOLDER",
    "schema_response_folder_path": "APIDOX_SCHEMA_RESPONSE_FOLDER",
    "desc_folder_path": "APIDOX_DESC_FOLDER",
}
"""Config field -> environment variable. ``APIDOX_HEADERS_WHITELIST`` is comma-separated."""


def find_project_config(directory: Optional[Path] = None) -> Optional[Path]:
    """Return the first project config file found in *directory* (default: cwd)."""
    base = directory or Path.cwd()
    for name in _PROJECT_CONFIG_FILENAMES:
        path = base / name
        if path.is_file():
            return path
    return None


def load_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a JSON or YAML config file into a dict.

    Raises:
        ConfigError: If the file does not exist, cannot be parsed, or does
            not contain a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config at {path} must be a mapping (got {type(data).__name__})")
    return data


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> DoxConfig:
    """Resolve the effective configuration.

    Args:
        config_path: Explicit config file. Takes precedence over
            ``$APIDOX_CONFIG`` and the working-directory lookup.
        **overrides: Field values with the highest precedence. ``None``
            values are ignored so that unset CLI flags fall through.

    Returns:
        The validated, frozen :class:`~apidox.models.DoxConfig`.

    Raises:
        ConfigError: If a config file is invalid or the merged values fail
            validation.
    """
    data: dict[str, Any] = {}

    # 3. Config file
    path = config_path or os.environ.get(_CONFIG_ENV_VAR) or find_project_config()
    if path:
        data.update(load_config_file(path))

    # 2. Environment variables
    for field, var in _ENV_VARS.items():
        value = os.environ.get(var)
        if value:
            data[field] = value

    # 1. Explicit overrides
    for key, value in overrides.items():
        if value is not None:
            data[key] = value

    try:
        return DoxConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
