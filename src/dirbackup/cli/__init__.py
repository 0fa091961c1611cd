"""Command line interface for dirbackup."""

from .dispatcher import main

__all__ = ["main"]
