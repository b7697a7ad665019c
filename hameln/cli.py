"""
Command line entry point.

Usage:
    hameln-publish 12345 67890             # Write one EPUB per novel id
    hameln-publish -o books 12345          # Write into ./books
    hameln-publish --fail-fast 12345 678   # Stop at the first failure
"""
import argparse
import asyncio
import sys

from .config import Settings, configure_logging, get_settings
from .errors import HamelnError
from .service import failed_ids, publish_many


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hameln-publish",
        description="Download novels from syosetu.org and save them as EPUB files.",
    )
    parser.add_argument("ids", metavar="IDS", type=int, nargs="+", help="Novel ids (the nid= value)")
    parser.add_argument("-o", "--output-dir", default=None, help="Directory for the EPUB files")
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first novel that cannot be published",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from HAMELN_LOG_LEVEL)")
    return parser


def run(args, settings: Settings) -> int:
    """Publish the requested novels and return the exit status."""
    result = asyncio.run(
        publish_many(args.ids, fail_fast=args.fail_fast, settings=settings, output_dir=args.output_dir)
    )
    for nid, path in result.written.items():
        print(f"✓ {nid}: {path}")
    for nid in failed_ids(result):
        print(f"✗ {nid}: {result.failed[nid]}", file=sys.stderr)
    return 0 if result.ok else 1


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)
    try:
        return run(args, settings)
    except HamelnError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
