#!/usr/bin/env python3
"""
GrabProto CLI

Grabs protobuf definitions from a Vintage Story installation.

Usage:
    # Auto-detect the install and print the schema
    python -m grabproto.cli

    # Explicit install directory, write to a file
    python -m grabproto.cli --input ~/.config/Vintagestory --output vintagestory.proto
"""

import argparse
import logging
import sys
from pathlib import Path

from grabproto.constants import DEFAULT_PACKAGE, MAIN_LIBRARY
from grabproto.extractor import describe_error, generate_schema
from grabproto.locations import find_default_location

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

log = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Log grabproto messages to stderr (DEBUG when verbose)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATEFMT))

    logger = logging.getLogger("grabproto")
    # Repeated calls replace the handler instead of stacking them
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Grabs Protobuf definitions from VintageStory.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Example:
  grabproto --input ~/.config/Vintagestory --output vintagestory.proto

The input directory must contain {MAIN_LIBRARY}; dependencies are looked up
next to it, then in its Lib/ folder.
        """
    )
    parser.add_argument(
        '--input', '-i',
        help='Vintage Story install directory (default: auto-detect)'
    )
    parser.add_argument(
        '--output', '-o',
        help='Output .proto file (default: print to stdout)'
    )
    parser.add_argument(
        '--package',
        default=DEFAULT_PACKAGE,
        help=f'Proto package name (default: {DEFAULT_PACKAGE})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose logging to stderr'
    )
    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns the process exit code.

    Failures are reported on stdout; the exit code is 1 when no schema was
    produced or written, 0 otherwise.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    input_dir = args.input
    if input_dir is None:
        input_dir = find_default_location()
        if input_dir is None:
            print("No Vintage Story installation found; pass --input <dir>")
            return 1
        log.info("Using installation at %s", input_dir)

    schema = generate_schema(input_dir, package=args.package)
    if schema is None:
        return 1

    if not args.output:
        print(schema)
        return 0

    output_path = Path(args.output).resolve()
    try:
        # newline="" keeps the schema's own line endings
        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            f.write(schema)
    except OSError as e:
        message, inner = describe_error(e)
        print(f"Error: {message}")
        if inner:
            print(f"Inner: {inner}")
        return 1
    print(f"Wrote to: {output_path}")
    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
