"""Work queue between the tree walker and the copy workers."""

import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class FilePair:
    """A file in the source tree and where its copy belongs."""

    source: Path
    destination: Path


class ChannelClosed(Exception):
    """Raised when sending on a closed channel."""

    pass


_SHUTDOWN = object()


class TaskChannel:
    """FIFO channel with one producer and any number of consumers.

    Every sent pair is received by exactly one consumer. Once the channel is
    closed and drained, every blocked or later ``receive`` returns None.
    """

    def __init__(self, maxsize: int = 0) -> None:
        """
        Args:
            maxsize: Bound on queued pairs, 0 for unbounded. When bounded,
                ``send`` blocks until a consumer makes room.
        """
        if maxsize < 0:
            raise ValueError("maxsize must be >= 0")
        self._queue: queue.Queue = queue.Queue(maxsize)
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, pair: FilePair) -> None:
        with self._lock:
            if self._closed:
                raise ChannelClosed("send on closed channel")
        self._queue.put(pair)

    def close(self) -> None:
        """Stop accepting pairs; receivers exit once the queue is empty."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put(_SHUTDOWN)

    def receive(self) -> Optional[FilePair]:
        """Block for the next pair, or return None once closed and drained."""
        item = self._queue.get()
        if item is _SHUTDOWN:
            # Leave the marker for the other receivers
            self._queue.put(_SHUTDOWN)
            return None
        return item
