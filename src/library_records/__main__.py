"""
Command-line entry point for Library Records.

Usage:
    python -m library_records [--data-dir DIR] [--books FILE] [--readers FILE]
                              [--loans FILE] [--log-level LEVEL]

Loads the three collection files, reports what was loaded and hands control
to the interactive menu. Log output goes to stderr so the menu on stdout
stays readable.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import LibraryConfig, get_config
from .manager import LibraryManager
from .shell import LibraryShell
from .storage import StorageLocations

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="library-records",
        description="Manage a library's books, readers and loans",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding books.json, readers.json and loans.json",
    )
    parser.add_argument("--books", type=Path, help="Override the book catalog file")
    parser.add_argument("--readers", type=Path, help="Override the reader list file")
    parser.add_argument("--loans", type=Path, help="Override the loan history file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (defaults to configuration)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> LibraryConfig:
    """Configured settings, with ``--data-dir`` replacing the data directory."""
    if args.data_dir is not None:
        return LibraryConfig(data_dir=args.data_dir)
    return get_config()


def resolve_locations(args: argparse.Namespace, config: LibraryConfig) -> StorageLocations:
    """Command-line paths win over the configured ones."""
    locations = StorageLocations.from_config(config)
    return StorageLocations(
        books=args.books or locations.books,
        readers=args.readers or locations.readers,
        loans=args.loans or locations.loans,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the interactive program."""
    args = build_parser().parse_args(argv)
    config = resolve_config(args)

    logging.basicConfig(
        level=args.log_level or ("DEBUG" if config.is_development else config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    locations = resolve_locations(args, config)
    logger.debug("Using storage locations: %s", locations)

    manager = LibraryManager.from_config(config)
    manager.load(locations)
    print(
        f"Library system started. Loaded {len(manager.books)} books, "
        f"{len(manager.readers)} readers."
    )

    LibraryShell(manager, locations).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
