# pyright: standard

"""dirbackup: dirbackup/__logger__.py
A common logger for displaying on a rich console, plus the copy log sink.
"""

import logging
import threading
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

# Initialize basic console and handler; stdout is left to the CLI output
cons = Console(stderr=True)
rich_handler = RichHandler(console=cons, show_path=False)
# Create a logger directly
logger = logging.Logger("dirbackup", logging.INFO)

DEFAULT_COPY_LOG = "backup_log.txt"


def create_logger(level="INFO") -> None:
    """Helper function to setup logging for the given level."""
    # pylint: disable=global-statement
    global cons, rich_handler

    cons = Console(stderr=True)
    rich_handler = RichHandler(console=cons, show_path=False)

    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(level)
    logger.addHandler(rich_handler)

    logging.basicConfig(
        format="%(message)s",
        datefmt="%H:%M:%S",
        level=level,
        handlers=[rich_handler],
        force=True,
    )


class CopyLog:
    """Append-only, one line per event log file shared by all workers.

    Writes go through a single ``logging.FileHandler`` which serializes
    access with its own lock, so workers never open the file themselves.
    """

    __counter = 0
    __lock = threading.Lock()

    def __init__(self, path=DEFAULT_COPY_LOG) -> None:
        self.path = Path(path)
        with CopyLog.__lock:
            CopyLog.__counter += 1
            name = f"dirbackup.copylog.{CopyLog.__counter}"
        self._handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger = logging.Logger(name, logging.INFO)
        self._logger.propagate = False
        self._logger.addHandler(self._handler)

    def __repr__(self) -> str:
        return f"CopyLog({str(self.path)!r})"

    def record(self, message: str) -> None:
        """Append a single line; embedded newlines are flattened."""
        self._logger.info(" ".join(message.splitlines()))

    def copied(self, source, destination) -> None:
        self.record(f"Copied {source} -> {destination}")

    def failed(self, error) -> None:
        self.record(str(error))

    def close(self) -> None:
        self._logger.removeHandler(self._handler)
        self._handler.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
