"""
Settings schema (``opsdesk_config.settings``).

Frozen dataclass describing everything the service needs at startup.
Parsed from the YAML set by ``opsdesk_config.loader``; never constructed
from environment variables directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class OpsDeskSettings:
    """Runtime settings for the engine, logging and HTTP server."""

    database_url: str
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800
    log_level: str = "INFO"
    http_host: str = "127.0.0.1"
    http_port: int = 2022

    def __post_init__(self):
        if not self.database_url:
            raise ValueError("database_url must not be empty")
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got '{self.log_level}'"
            )
        if not 0 < self.http_port < 65536:
            raise ValueError(f"http_port out of range: {self.http_port}")
        for name in ("pool_size", "max_overflow", "pool_timeout", "pool_recycle"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for ``configure_logging``."""
        return logging.getLevelName(self.log_level)
