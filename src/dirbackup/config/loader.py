"""TOML configuration loading and validation.

Handles config file discovery, parsing, and validation with helpful error messages.
"""

import tomllib
from pathlib import Path
from typing import Any

from .schema import ARCHIVE_FORMATS, INCREMENTAL, BackupConfig


class ConfigError(Exception):
    """Configuration loading or validation error."""

    pass


# Config file search paths in priority order
CONFIG_PATHS = [
    Path("config.toml"),
    Path.home() / ".config" / "dirbackup" / "config.toml",
    Path("/etc/dirbackup/config.toml"),
]


def find_config_file(explicit_path: str | None = None) -> Path | None:
    """Find configuration file.

    Args:
        explicit_path: Explicitly specified config path (highest priority)

    Returns:
        Path to config file, or None if not found
    """
    if explicit_path:
        path = Path(explicit_path)
        if path.exists():
            return path
        raise ConfigError(f"Config file not found: {explicit_path}")

    for path in CONFIG_PATHS:
        if path.exists():
            return path

    return None


def _get(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key, default)
    # bool is an int subclass, don't accept it for numbers
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"'{key}' must be of type {kind.__name__}")
    return value


def _parse_backup(data: dict[str, Any]) -> BackupConfig:
    """Parse backup configuration from dict."""
    for key in ("source", "backup"):
        if key not in data:
            raise ConfigError(f"Config missing required '{key}' field")

    config = BackupConfig(
        source=_get(data, "source", str, None),
        backup=_get(data, "backup", str, None),
        format=_get(data, "format", str, INCREMENTAL),
        workers=_get(data, "workers", int, BackupConfig.workers),
        queue_size=_get(data, "queue_size", int, 0),
        log_file=_get(data, "log_file", str, BackupConfig.log_file),
        progress=_get(data, "progress", bool, True),
    )

    if config.workers < 1:
        raise ConfigError("'workers' must be at least 1")
    if config.queue_size < 0:
        raise ConfigError("'queue_size' must not be negative")
    return config


def _validate_config(config: BackupConfig) -> list[str]:
    """Validate configuration and return list of warnings."""
    warnings = []

    if config.format != INCREMENTAL and config.format not in ARCHIVE_FORMATS:
        warnings.append(
            f"Unknown format '{config.format}', performing incremental backup"
        )

    source = Path(config.source).expanduser().absolute()
    backup = Path(config.backup).expanduser().absolute()
    if source == backup:
        warnings.append("Source and backup are the same directory")

    return warnings


def load_config(path: Path | str) -> tuple[BackupConfig, list[str]]:
    """Load and validate configuration from TOML file.

    Args:
        path: Path to configuration file

    Returns:
        Tuple of (BackupConfig object, list of warnings)

    Raises:
        ConfigError: If config is invalid or cannot be parsed
    """
    path = Path(path)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}")

    config = _parse_backup(data)

    # Validate and collect warnings
    warnings = _validate_config(config)

    return config, warnings


def generate_example_config() -> str:
    """Generate example configuration file content."""
    return """# dirbackup configuration

source = "/home/user/documents"
backup = "/mnt/backup/documents"

# "tar.gz" or "zip" write a single archive into the backup folder,
# anything else mirrors the tree, copying only changed files
format = "incremental"

# Incremental copy settings
workers = 4
queue_size = 0      # Max files waiting for a worker (0 = unbounded)

log_file = "backup_log.txt"
progress = true
"""
