#!/usr/bin/env python3
"""
Command-line interface for release-download-tracker.
"""

import argparse
import logging
import sys
from typing import Optional

from .app import run_sync


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="release-download-tracker",
        description="GitHub release download statistics tracker"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Sync command
    sync_parser = subparsers.add_parser("sync", help="Record today's download snapshot for every repository")
    sync_parser.add_argument(
        "--config",
        default=None,
        help="Path to the JSON config file (default: $TRACKER_CONFIG or config.json)"
    )
    sync_parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory for history files (default: $DATA_DIR or data/ next to the config)"
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if args.command == "sync":
        try:
            success, message = run_sync(args.config, args.data_dir)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user")
            return 130
        if not success:
            print(f"Sync failed: {message}", file=sys.stderr)
            return 1
        print(f"\n✓ {message}")
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
