"""Configuration system for dirbackup.

This module provides TOML-based configuration loading, validation,
and schema definitions.
"""

from .loader import ConfigError, find_config_file, load_config
from .schema import ARCHIVE_FORMATS, INCREMENTAL, BackupConfig

__all__ = [
    "ARCHIVE_FORMATS",
    "INCREMENTAL",
    "BackupConfig",
    "load_config",
    "find_config_file",
    "ConfigError",
]
