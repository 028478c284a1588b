"""Application configuration helpers."""

from __future__ import annotations

from .browse import BrowseConfig, get_browse_config
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "BrowseConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_browse_config",
    "get_database_config",
    "get_storage_config",
]
