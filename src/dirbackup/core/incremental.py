"""Incremental backup: mirror a tree, copying only files that changed.

The walk runs on the calling thread and creates destination directories
itself, so a directory always exists before any pair inside it is queued.
Files are handed to a WorkerPool through a TaskChannel.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..__util__ import TraversalError
from .channel import FilePair, TaskChannel
from .progress import ProgressReporter
from .walker import count_files, destination_for, walk_tree
from .workers import DEFAULT_WORKERS, BackupStats, WorkerPool

logger = logging.getLogger(__name__)

COMPLETED_MESSAGE = "Backup completed successfully!"
FAILED_MESSAGE = "Backup failed"


class RunState(Enum):
    """Orchestrator states, in the order a successful run visits them."""

    INIT = "init"
    COUNTING = "counting"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BackupResult:
    """Outcome of one incremental run."""

    source: Path
    destination: Path
    total: int
    stats: BackupStats
    state: RunState

    @property
    def copied(self) -> int:
        return self.stats.copied

    @property
    def skipped(self) -> int:
        return self.stats.skipped

    @property
    def failed(self) -> int:
        return self.stats.failed

    @property
    def processed(self) -> int:
        return self.stats.processed


class IncrementalBackup:
    """Drive one incremental run from counting to draining the workers."""

    def __init__(
        self,
        source,
        destination,
        workers: int = DEFAULT_WORKERS,
        queue_size: int = 0,
        progress: Optional[ProgressReporter] = None,
        copy_log=None,
    ) -> None:
        self.source = Path(source)
        self.destination = Path(destination)
        self.workers = workers
        self.queue_size = queue_size
        self.progress = progress or ProgressReporter(enabled=False)
        self.copy_log = copy_log
        self.state = RunState.INIT
        self.total = 0

    def _set_state(self, state: RunState) -> None:
        logger.debug("Incremental backup %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self) -> BackupResult:
        """Execute the backup.

        Raises:
            TraversalError: If the source tree cannot be read. Files already
                copied stay in place.
        """
        self._set_state(RunState.COUNTING)
        try:
            self.total = count_files(self.source, exclude=(self.destination,))
        except TraversalError:
            self._set_state(RunState.FAILED)
            raise
        logger.info("%d file(s) to examine under %s", self.total, self.source)

        self.destination.mkdir(parents=True, exist_ok=True)

        channel = TaskChannel(self.queue_size)
        pool = WorkerPool(channel, self.progress, self.copy_log, size=self.workers)
        self.progress.start(self.total)
        pool.start()
        self._set_state(RunState.RUNNING)

        failed = True
        try:
            self._enqueue(channel)
            failed = False
        finally:
            # Queued pairs are processed even when the walk stopped early
            self._set_state(RunState.FAILED if failed else RunState.DRAINING)
            channel.close()
            pool.join()
            if failed:
                self.progress.finish(FAILED_MESSAGE, success=False)

        self._set_state(RunState.DONE)
        self.progress.finish(COMPLETED_MESSAGE)

        stats = pool.stats
        logger.info(
            "%d copied, %d up to date, %d failed",
            stats.copied,
            stats.skipped,
            stats.failed,
        )
        return BackupResult(
            self.source, self.destination, self.total, stats, self.state
        )

    def _enqueue(self, channel: TaskChannel) -> None:
        for entry in walk_tree(self.source, exclude=(self.destination,)):
            target = destination_for(entry, self.destination)
            if entry.is_dir:
                try:
                    target.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise TraversalError(target, e.strerror or e) from e
            else:
                channel.send(FilePair(entry.path, target))


def incremental_backup(
    source,
    destination,
    workers: int = DEFAULT_WORKERS,
    queue_size: int = 0,
    progress: Optional[ProgressReporter] = None,
    copy_log=None,
) -> BackupResult:
    """Mirror ``source`` into ``destination``, copying only stale files."""
    return IncrementalBackup(
        source,
        destination,
        workers=workers,
        queue_size=queue_size,
        progress=progress,
        copy_log=copy_log,
    ).run()
