"""
Configuration Loader (``opsdesk_config.loader``).

Responsibility
--------------
Loads a YAML settings file, applies environment overrides and parses the
result into an ``OpsDeskSettings`` instance.  The single public entry point
for runtime settings is ``opsdesk_config.get_active_settings()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown section or key  -> ``ValueError``.
* Non-integer SERVER_PORT  -> ``ValueError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from opsdesk_config.settings import OpsDeskSettings

# section -> {yaml key: settings field}
_FIELD_MAP: dict[str, dict[str, str]] = {
    "database": {
        "url": "database_url",
        "echo": "echo",
        "pool_size": "pool_size",
        "max_overflow": "max_overflow",
        "pool_timeout": "pool_timeout",
        "pool_recycle": "pool_recycle",
    },
    "logging": {"level": "log_level"},
    "http": {"host": "http_host", "port": "http_port"},
}

# environment variable -> (settings field, converter)
_ENV_OVERRIDES: dict[str, tuple[str, Any]] = {
    "DATABASE_URL": ("database_url", str),
    "OPSDESK_LOG_LEVEL": ("log_level", lambda v: v.upper()),
    "SERVER_PORT": ("http_port", int),
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def flatten_settings(data: Mapping[str, Any]) -> dict[str, Any]:
    """Map nested YAML sections onto OpsDeskSettings field names."""
    fields: dict[str, Any] = {}
    for section, values in data.items():
        if section not in _FIELD_MAP:
            raise ValueError(f"Unknown settings section: '{section}'")
        if not isinstance(values, Mapping):
            raise ValueError(f"Settings section '{section}' must be a mapping")
        for key, value in values.items():
            if key not in _FIELD_MAP[section]:
                raise ValueError(f"Unknown setting: '{section}.{key}'")
            fields[_FIELD_MAP[section][key]] = value
    return fields


def apply_env_overrides(
    fields: dict[str, Any],
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """Return a copy of ``fields`` with environment values layered on top."""
    merged = dict(fields)
    for var, (field_name, convert) in _ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw:
            merged[field_name] = convert(raw)
    return merged


def load_settings(path: Path, environ: Mapping[str, str]) -> OpsDeskSettings:
    """Parse ``path`` plus ``environ`` into OpsDeskSettings."""
    fields = apply_env_overrides(flatten_settings(load_yaml_file(path)), environ)
    if "database_url" not in fields:
        raise ValueError("database.url is required (or set DATABASE_URL)")
    return OpsDeskSettings(**fields)
