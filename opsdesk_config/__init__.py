"""
opsdesk_config -- single public entrypoint for runtime settings.

Responsibility:
    Provides the ONLY way to obtain settings at runtime through
    ``get_active_settings()``.  No other component reads the settings file
    or the environment variables it honours (DATABASE_URL,
    OPSDESK_LOG_LEVEL, SERVER_PORT).

Failure modes:
    - ``FileNotFoundError`` -- the requested settings file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ValueError`` -- unknown keys or out-of-range values.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from opsdesk_config.loader import load_settings
from opsdesk_config.settings import OpsDeskSettings

_logger = logging.getLogger("opsdesk.config")

# Default settings directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"
DEFAULT_SETTINGS_PATH = _DEFAULT_CONFIG_DIR / "default.yaml"


def get_active_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> OpsDeskSettings:
    """The ONLY public settings entrypoint.

    Args:
        config_path: YAML settings file (defaults to ``sets/default.yaml``).
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Validated, frozen OpsDeskSettings.
    """
    path = config_path or DEFAULT_SETTINGS_PATH
    settings = load_settings(path, os.environ if environ is None else environ)
    _logger.info(
        "settings_loaded",
        extra={
            "config_path": str(path),
            "log_level": settings.log_level,
            "http_port": settings.http_port,
        },
    )
    return settings


__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "OpsDeskSettings",
    "get_active_settings",
]
