"""Core backup strategies for dirbackup.

Incremental mirroring with a worker pool, and full archives.
"""

from .archive import backup_as_tar_gz, backup_as_zip
from .channel import ChannelClosed, FilePair, TaskChannel
from .incremental import BackupResult, IncrementalBackup, RunState, incremental_backup
from .progress import ProgressReporter
from .staleness import Verdict, decide
from .walker import WalkEntry, count_files, destination_for, walk_tree
from .workers import DEFAULT_WORKERS, BackupStats, WorkerPool

__all__ = [
    "backup_as_tar_gz",
    "backup_as_zip",
    "ChannelClosed",
    "FilePair",
    "TaskChannel",
    "BackupResult",
    "IncrementalBackup",
    "RunState",
    "incremental_backup",
    "ProgressReporter",
    "Verdict",
    "decide",
    "WalkEntry",
    "count_files",
    "destination_for",
    "walk_tree",
    "DEFAULT_WORKERS",
    "BackupStats",
    "WorkerPool",
]
