"""Command-line interface for thumbcache.

Usage:
    thumbcache get imgs a.png --width 100 --crop Center
    thumbcache get imgs a.png --format json
    thumbcache key imgs a.png --width 100
"""

import argparse
import asyncio
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from thumbcache import __version__
from thumbcache.config import settings
from thumbcache.errors import ThumbCacheError
from thumbcache.keys import derive_cache_key
from thumbcache.models import CacheResult, CropMode, SourceRef, ThumbnailOptions
from thumbcache.pipeline.coordinator import open_coordinator

logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=1)


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("bucket", type=str, help="Source image bucket")
    parser.add_argument("key", type=str, help="Source image key")
    parser.add_argument("--width", type=int, default=None, help="Thumbnail width (pixels)")
    parser.add_argument("--height", type=int, default=None, help="Thumbnail height (pixels)")
    parser.add_argument(
        "--crop",
        type=str,
        choices=[c.value for c in CropMode],
        default=None,
        help="Crop method",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser with all commands and arguments.
    """
    parser = argparse.ArgumentParser(
        prog="thumbcache",
        description="thumbcache: memoized S3 thumbnails",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  thumbcache get imgs a.png --width 100 --crop Center
  thumbcache get imgs a.png --format json
  thumbcache key imgs a.png --width 100
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    get_parser = subparsers.add_parser(
        "get",
        help="Return the cached thumbnail record, creating or refreshing it if needed",
    )
    _add_source_arguments(get_parser)
    get_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    key_parser = subparsers.add_parser("key", help="Print the cache key for a source and options")
    _add_source_arguments(key_parser)

    subparsers.add_parser("version", help="Show version information")

    return parser


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context.

    Spins up a new event loop in a dedicated thread to avoid conflicts
    with any existing event loop.
    """
    def _target():
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(coro)
        finally:
            loop.close()

    future = _executor.submit(_target)
    return future.result()


def _parse_request(args: argparse.Namespace) -> tuple[SourceRef, ThumbnailOptions]:
    source = SourceRef(bucket=args.bucket, key=args.key)
    options = ThumbnailOptions(width=args.width, height=args.height, crop=args.crop)
    return source, options


async def _lookup(source: SourceRef, options: ThumbnailOptions) -> CacheResult:
    async with open_coordinator(settings) as coordinator:
        return await coordinator.lookup_or_populate(source, options)


def format_result(result: CacheResult) -> str:
    """Render a CacheResult as one aligned field per line."""
    data = result.to_dict()
    width = max(len(name) for name in data)
    return "\n".join(f"{name:<{width}}  {value}" for name, value in data.items())


def cmd_get(args: argparse.Namespace) -> int:
    """Execute the get command.

    Returns:
        Exit code (0 success, 1 cache failure, 2 invalid options, 130 interrupted)
    """
    try:
        source, options = _parse_request(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        result = _run_async(_lookup(source, options))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except ThumbCacheError as e:
        logger.error("Lookup failed [%s]: %s", e.kind, e)
        print(f"Error ({e.kind}): {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result))
    return 0


def cmd_key(args: argparse.Namespace) -> int:
    """Execute the key command."""
    try:
        source, options = _parse_request(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(derive_cache_key(source, options))
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command."""
    print(f"thumbcache v{__version__}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "get":
        return cmd_get(args)
    elif args.command == "key":
        return cmd_key(args)
    elif args.command == "version":
        return cmd_version(args)
    else:
        parser.print_help()
        return 0


def cli_entry() -> None:
    """Console script entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
