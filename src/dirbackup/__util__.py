"""dirbackup: dirbackup/__util__.py
Common errors and helpers shared by the backup strategies.
"""


class BackupError(Exception):
    """Base class for errors raised while backing up."""


class TraversalError(BackupError):
    """The source tree could not be read; fatal to the run."""

    def __init__(self, path, reason) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot traverse {path}: {reason}")


class CopyError(BackupError):
    """A single file could not be copied; the run continues."""

    def __init__(self, source, destination, reason) -> None:
        self.source = source
        self.destination = destination
        self.reason = reason
        super().__init__(f"Failed to copy {source} -> {destination}: {reason}")


def log_heading(caption: str) -> str:
    """Format a log heading."""
    return f"--[ {caption} ]--"
