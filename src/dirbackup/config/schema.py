"""Configuration schema definitions using dataclasses.

Defines the structure for TOML configuration with sensible defaults.
"""

from dataclasses import dataclass

from ..__logger__ import DEFAULT_COPY_LOG
from ..core.workers import DEFAULT_WORKERS

# Formats that bypass the incremental copy
ARCHIVE_FORMATS = ("tar.gz", "zip")
INCREMENTAL = "incremental"


@dataclass
class BackupConfig:
    """Backup job configuration.

    Attributes:
        source: Directory to back up
        backup: Directory receiving the backup
        format: "tar.gz", "zip", or anything else for an incremental copy
        workers: Number of copy workers for incremental backups
        queue_size: Max pairs waiting for a worker (0 for unbounded)
        log_file: Copy log appended to on every copied file
        progress: Whether to display a progress bar
    """

    source: str
    backup: str
    format: str = INCREMENTAL
    workers: int = DEFAULT_WORKERS
    queue_size: int = 0
    log_file: str = DEFAULT_COPY_LOG
    progress: bool = True

    @property
    def is_incremental(self) -> bool:
        return self.format not in ARCHIVE_FORMATS
