"""Staleness check deciding whether a file needs to be copied again.

Only filesystem modification times are consulted; nothing is persisted
between runs.
"""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class Verdict(Enum):
    """Decision for one file pair."""

    COPY = "copy"
    SKIP = "skip"


def decide(source, destination) -> Verdict:
    """Decide whether ``source`` has to be copied over ``destination``.

    Args:
        source: Path of the file in the source tree
        destination: Path of its mirror in the backup tree

    Returns:
        Verdict.COPY if the destination is missing, older than the source,
        or if either modification time cannot be read. Verdict.SKIP otherwise.
    """
    if not os.path.lexists(destination):
        return Verdict.COPY

    try:
        source_mtime = os.stat(source).st_mtime_ns
        destination_mtime = os.stat(destination).st_mtime_ns
    except OSError as e:
        # Inconclusive, prefer a redundant copy over missing an update
        logger.debug("Cannot compare %s and %s: %s", source, destination, e)
        return Verdict.COPY

    if source_mtime > destination_mtime:
        return Verdict.COPY
    return Verdict.SKIP
