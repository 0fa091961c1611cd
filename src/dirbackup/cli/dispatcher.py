"""CLI entry point: resolve the job from arguments or a config file."""

import argparse
import sys

from ..config import (
    ARCHIVE_FORMATS,
    BackupConfig,
    ConfigError,
    find_config_file,
    load_config,
)
from ..config.loader import generate_example_config
from .common import add_verbosity_args

USAGE = "Usage: {prog} <source_folder> <backup_folder> [tar.gz|zip]"


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="dirbackup",
        description="Back up a directory as a tar.gz or zip archive, "
        "or incrementally copy the files that changed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("source", nargs="?", help="Directory to back up")
    parser.add_argument("backup", nargs="?", help="Directory receiving the backup")
    parser.add_argument(
        "format",
        nargs="?",
        help=f"One of {', '.join(ARCHIVE_FORMATS)}; "
        "omit for an incremental copy",
    )

    add_verbosity_args(parser)

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Path to configuration file, used when no paths are given",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        metavar="N",
        help="Number of copy workers (overrides config, default: 4)",
    )
    parser.add_argument(
        "--queue-size",
        type=int,
        metavar="N",
        help="Max files waiting for a worker, 0 for unbounded (overrides config)",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="File receiving one line per copied file (overrides config)",
    )
    parser.add_argument(
        "--example-config",
        action="store_true",
        help="Print an example configuration file and exit",
    )

    return parser


def resolve_config(args: argparse.Namespace) -> BackupConfig:
    """Build the job configuration from positional paths or a config file.

    Raises:
        ConfigError: If neither provides a source and a backup folder
    """
    if args.source and args.backup:
        config = BackupConfig(source=args.source, backup=args.backup)
        if args.format:
            config.format = args.format
    else:
        path = find_config_file(args.config)
        if path is None:
            raise ConfigError("No source and backup folders given")
        config, warnings = load_config(path)
        for warning in warnings:
            print(f"Config: {warning}", file=sys.stderr)

    if args.workers is not None:
        if args.workers < 1:
            raise ConfigError("--workers must be at least 1")
        config.workers = args.workers
    if args.queue_size is not None:
        if args.queue_size < 0:
            raise ConfigError("--queue-size must not be negative")
        config.queue_size = args.queue_size
    if args.log_file:
        config.log_file = args.log_file
    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the dirbackup CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    from .. import __version__

    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"dirbackup {__version__}")
        return 0

    if args.example_config:
        print(generate_example_config(), end="")
        return 0

    try:
        config = resolve_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE.format(prog=parser.prog), file=sys.stderr)
        return 1

    from .run import execute_run

    return execute_run(args, config)
