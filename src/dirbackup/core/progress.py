"""Live progress display for file-by-file backups."""

import threading

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TimeElapsedColumn,
)


class ProgressReporter:
    """Thread safe completion counter rendered as a rich progress bar.

    Counting happens whether or not the bar is displayed, so a disabled
    reporter still tells how many files were processed.
    """

    def __init__(self, console: Console | None = None, enabled: bool = True) -> None:
        self._progress = Progress(
            "[progress.description]{task.description}",
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            disable=not enabled,
        )
        self._lock = threading.Lock()
        self._task_id = None
        self._completed = 0
        self._total = 0
        self._finished = False

    @property
    def completed(self) -> int:
        return self._completed

    @property
    def total(self) -> int:
        return self._total

    @property
    def finished(self) -> bool:
        return self._finished

    def start(self, total: int, description: str = "Backing up") -> None:
        """Show the bar for ``total`` files."""
        self._total = total
        self._task_id = self._progress.add_task(
            f"[cyan]{description}", total=total
        )
        self._progress.start()

    def advance(self) -> None:
        """Count one more processed file."""
        with self._lock:
            self._completed += 1
            if self._task_id is not None:
                self._progress.advance(self._task_id)

    def finish(self, message: str, success: bool = True) -> None:
        """Replace the description with ``message`` and stop the display.

        A successful finish shows a full bar, even for an empty tree.
        """
        if self._finished:
            return
        self._finished = True
        if self._task_id is not None:
            if success:
                # rich reports 0% for a zero total
                total = max(self._total, 1)
                self._progress.update(
                    self._task_id,
                    description=f"[green]{message}",
                    total=total,
                    completed=max(self._completed, total),
                )
            else:
                self._progress.update(self._task_id, description=f"[red]{message}")
        self._progress.stop()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self._progress.stop()
