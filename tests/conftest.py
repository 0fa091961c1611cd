"""Pytest configuration and shared fixtures."""

import inspect
import sys
from contextlib import contextmanager
from pathlib import Path

import pytest


def read_tree(root: Path) -> dict[str, bytes]:
    """Map each file's root-relative POSIX path to its contents."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def copied_lines(log_path: Path) -> list[str]:
    """Return the 'Copied ...' entries of a copy log."""
    if not log_path.exists():
        return []
    return [
        line for line in log_path.read_text().splitlines() if line.startswith("Copied ")
    ]



def make_deep_tree(root: Path, depth: int) -> Path:
    """Nest ``depth`` directories under ``root`` with one file at the bottom."""
    path = root
    path.mkdir()
    for _ in range(depth):
        path = path / "d"
        path.mkdir()
    (path / "leaf.txt").write_text("leaf")
    return path


@contextmanager
def recursion_headroom(frames: int):
    """Allow only ``frames`` more nested calls than the current stack holds."""
    old_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(len(inspect.stack(0)) + frames)
    try:
        yield
    finally:
        sys.setrecursionlimit(old_limit)


@pytest.fixture
def source_tree(tmp_path):
    """Create a small source tree: a.txt and sub/b.txt."""
    source = tmp_path / "source"
    (source / "sub").mkdir(parents=True)
    (source / "a.txt").write_text("x")
    (source / "sub" / "b.txt").write_text("y")
    return source


@pytest.fixture
def deep_tree(tmp_path):
    """Create a wider source tree with nested and empty directories."""
    source = tmp_path / "deep"
    for d in range(3):
        for s in range(3):
            sub = source / f"dir{d}" / f"sub{s}"
            sub.mkdir(parents=True)
            for f in range(4):
                (sub / f"file{f}.dat").write_bytes(f"{d}-{s}-{f}".encode() * 10)
    (source / "empty" / "nested").mkdir(parents=True)
    (source / "top.txt").write_text("top")
    return source


@pytest.fixture
def backup_dir(tmp_path):
    """Path of a not yet existing backup directory."""
    return tmp_path / "backup"


@pytest.fixture
def log_path(tmp_path):
    """Path of the copy log."""
    return tmp_path / "backup_log.txt"


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def sample_config_toml(source_tree, backup_dir, log_path):
    """Return a sample valid TOML configuration string."""
    return f"""
source = "{source_tree.as_posix()}"
backup = "{backup_dir.as_posix()}"
format = "zip"
workers = 8
queue_size = 16
log_file = "{log_path.as_posix()}"
progress = false
"""


@pytest.fixture
def minimal_config_toml():
    """Return a minimal valid TOML configuration string."""
    return """
source = "/home/user"
backup = "/mnt/backup"
"""


@pytest.fixture
def config_file(tmp_config_dir, sample_config_toml):
    """Create a temporary config file with sample content."""
    config_path = tmp_config_dir / "config.toml"
    config_path.write_text(sample_config_toml)
    return config_path


@pytest.fixture
def minimal_config_file(tmp_config_dir, minimal_config_toml):
    """Create a temporary config file with minimal content."""
    config_path = tmp_config_dir / "minimal.toml"
    config_path.write_text(minimal_config_toml)
    return config_path
