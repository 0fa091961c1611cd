"""Shared CLI utilities and argument parsers."""

import argparse


def add_verbosity_args(parser: argparse.ArgumentParser) -> None:
    """Add verbosity-related arguments to a parser."""
    group = parser.add_argument_group("Output options")
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-essential output and the progress bar",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    group.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not display the progress bar",
    )


def get_log_level(args: argparse.Namespace) -> str:
    """Determine log level from parsed arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Log level string (DEBUG, INFO, WARNING)
    """
    if getattr(args, "debug", False):
        return "DEBUG"
    elif getattr(args, "quiet", False):
        return "WARNING"
    elif getattr(args, "verbose", False):
        return "DEBUG"
    else:
        return "INFO"


def show_progress(args: argparse.Namespace, configured: bool = True) -> bool:
    """Whether the progress bar should be displayed."""
    if getattr(args, "quiet", False) or getattr(args, "no_progress", False):
        return False
    return configured
