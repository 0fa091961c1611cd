"""Pool of threads copying file pairs taken from a task channel."""

import logging
import shutil
import threading
from dataclasses import dataclass, field

from ..__util__ import CopyError
from .channel import FilePair, TaskChannel
from .progress import ProgressReporter
from .staleness import Verdict, decide

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4


@dataclass
class BackupStats:
    """Per-run tallies, updated by every worker."""

    copied: int = 0
    skipped: int = 0
    failed: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @property
    def processed(self) -> int:
        return self.copied + self.skipped + self.failed

    def count(self, outcome: str) -> None:
        with self._lock:
            setattr(self, outcome, getattr(self, outcome) + 1)


def copy_file(pair: FilePair) -> None:
    """Copy the contents of ``pair.source`` over ``pair.destination``.

    Raises:
        CopyError: If the copy fails for any filesystem reason
    """
    try:
        shutil.copyfile(pair.source, pair.destination)
    except OSError as e:
        raise CopyError(pair.source, pair.destination, e.strerror or e) from e


class WorkerPool:
    """Fixed number of threads draining a TaskChannel."""

    def __init__(
        self,
        channel: TaskChannel,
        progress: ProgressReporter,
        copy_log=None,
        size: int = DEFAULT_WORKERS,
    ) -> None:
        if size < 1:
            raise ValueError(f"Worker pool size must be at least 1, got {size}")
        self.channel = channel
        self.progress = progress
        self.copy_log = copy_log
        self.size = size
        self.stats = BackupStats()
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        for n in range(self.size):
            thread = threading.Thread(
                target=self._run, name=f"dirbackup-worker-{n}", daemon=True
            )
            thread.start()
            self._threads.append(thread)
        logger.debug("Started %d worker(s)", self.size)

    def join(self) -> None:
        """Wait until every worker has seen the channel closed and drained."""
        for thread in self._threads:
            thread.join()
        self._threads.clear()

    def _run(self) -> None:
        while True:
            pair = self.channel.receive()
            if pair is None:
                return
            try:
                outcome = self.process(pair)
            except Exception:
                # The worker keeps draining; the item counts as failed
                logger.exception("Unexpected error processing %s", pair.source)
                outcome = "failed"
            self.stats.count(outcome)
            self.progress.advance()

    def process(self, pair: FilePair) -> str:
        """Copy one pair if stale, returning the outcome name."""
        if decide(pair.source, pair.destination) is Verdict.SKIP:
            logger.debug("Up to date: %s", pair.destination)
            return "skipped"

        try:
            copy_file(pair)
        except CopyError as e:
            logger.error("%s", e)
            if self.copy_log is not None:
                self.copy_log.failed(e)
            return "failed"

        logger.debug("Copied %s -> %s", pair.source, pair.destination)
        if self.copy_log is not None:
            self.copy_log.copied(pair.source, pair.destination)
        return "copied"
