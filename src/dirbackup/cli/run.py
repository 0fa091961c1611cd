"""Run a backup job: incremental copy or full archive."""

import argparse
import logging
import time
from pathlib import Path

from filelock import FileLock, Timeout

from .. import __util__
from .. import __logger__
from ..__logger__ import CopyLog, create_logger
from ..config import BackupConfig
from ..core import (
    ProgressReporter,
    backup_as_tar_gz,
    backup_as_zip,
    incremental_backup,
)
from .common import get_log_level, show_progress

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = ".dirbackup.lock"


def execute_run(args: argparse.Namespace, config: BackupConfig) -> int:
    """Execute a backup job.

    Args:
        args: Parsed command line arguments
        config: Resolved job configuration

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    create_logger(get_log_level(args))

    source = Path(config.source).expanduser()
    backup = Path(config.backup).expanduser()

    logger.info("Backing up %s to %s", source, backup)
    try:
        backup.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Failed to create backup directory %s: %s", backup, e)
        return 1

    lock = FileLock(backup / LOCK_FILE_NAME, timeout=0)
    try:
        with lock:
            return _run_locked(args, config, source, backup)
    except Timeout:
        logger.error("Another backup into %s is already running", backup)
        return 1


def _run_locked(
    args: argparse.Namespace, config: BackupConfig, source: Path, backup: Path
) -> int:
    logger.debug(__util__.log_heading(f"Started at {time.ctime()}"))

    if config.format == "tar.gz":
        writer = backup_as_tar_gz
    elif config.format == "zip":
        writer = backup_as_zip
    else:
        return _run_incremental(args, config, source, backup)

    try:
        writer(source, backup)
    except (__util__.BackupError, OSError) as e:
        logger.error("Archive backup failed: %s", e)
        return 1
    return 0


def _run_incremental(
    args: argparse.Namespace, config: BackupConfig, source: Path, backup: Path
) -> int:
    logger.info("No format specified. Performing incremental backup...")
    logger.info("Using %d worker(s)", config.workers)

    progress = ProgressReporter(
        console=__logger__.cons, enabled=show_progress(args, config.progress)
    )
    try:
        copy_log = CopyLog(config.log_file)
    except OSError as e:
        logger.error("Cannot open copy log %s: %s", config.log_file, e)
        return 1

    try:
        with copy_log, progress:
            result = incremental_backup(
                source,
                backup,
                workers=config.workers,
                queue_size=config.queue_size,
                progress=progress,
                copy_log=copy_log,
            )
    except (__util__.TraversalError, OSError) as e:
        logger.error("Backup aborted: %s", e)
        return 1

    if result.failed:
        logger.warning("%d file(s) could not be copied", result.failed)
    logger.info("Backup completed successfully!")
    return 0
