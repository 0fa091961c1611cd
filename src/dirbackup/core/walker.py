"""Depth-first traversal of a source tree.

The walk is a lazy generator. Whoever drives it can create the mirrored
directory for a directory entry before the walk descends into it.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ..__util__ import TraversalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkEntry:
    """One file or directory found under the walked root.

    Attributes:
        path: Full path of the entry
        relative: Path relative to the walked root ("." for the root itself)
        is_dir: Whether the entry is mirrored as a directory
    """

    path: Path
    relative: Path
    is_dir: bool


def walk_tree(root, exclude=()) -> Iterator[WalkEntry]:
    """Yield every entry under ``root`` once, in depth-first pre-order.

    The root itself comes first. Symlinks to directories are reported as
    directories but not followed. Paths in ``exclude`` are neither yielded
    nor descended into.

    Raises:
        TraversalError: If the root or any directory below it cannot be read
    """
    root = Path(root)
    if not root.is_dir():
        raise TraversalError(root, "not a directory")

    excluded = frozenset(os.path.realpath(p) for p in exclude)
    yield WalkEntry(root, Path("."), True)

    # One listing per directory still being walked, deepest last
    stack = [(Path(), iter(_list_dir(root)))]
    while stack:
        relative, entries = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        if excluded and os.path.realpath(entry.path) in excluded:
            continue
        rel = relative / entry.name
        try:
            is_dir = entry.is_dir()
            is_link = entry.is_symlink()
        except OSError as e:
            raise TraversalError(entry.path, e.strerror or e) from e

        path = Path(entry.path)
        yield WalkEntry(path, rel, is_dir)
        if is_dir and not is_link:
            stack.append((rel, iter(_list_dir(path))))


def _list_dir(directory: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise TraversalError(directory, e.strerror or e) from e



def destination_for(entry: WalkEntry, destination_root) -> Path:
    """Mirror the entry's relative path under ``destination_root``."""
    return Path(destination_root) / entry.relative


def count_files(root, exclude=()) -> int:
    """Count the file entries ``walk_tree`` would yield for ``root``."""
    total = sum(1 for entry in walk_tree(root, exclude) if not entry.is_dir)
    logger.debug("Counted %d file(s) under %s", total, root)
    return total
