"""Command-line interface for Ghostsheet."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from . import export
from .config import settings
from .errors import GhostsheetError
from .feed import FeedReconstructor, FeedResult
from .sheets import FeedClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Ghostsheet - Fetch published spreadsheets as typed JSON"
    )
    parser.add_argument(
        "--log-level", default=settings.log_level, help="Logging level (default: from LOG_LEVEL)"
    )

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--beautify", action="store_true", default=None, help="Indent the JSON output")
    common.add_argument("--callback", help="Wrap the output as a JSONP call to this function")
    common.add_argument(
        "--offset",
        type=int,
        choices=(1, 2),
        help="Rows above the first data row: 1 (header only) or 2 (header and metadata row)",
    )
    common.add_argument(
        "--nullfill",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Turn empty cells into null",
    )
    common.add_argument(
        "--strict", action="store_true", default=None, help="Fail on cells that cannot be placed"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Fetch command
    fetch_parser = subparsers.add_parser(
        "fetch", parents=[common], help="Fetch published spreadsheets and save them as JSON"
    )
    fetch_parser.add_argument("spreadsheet_ids", nargs="+", help="Spreadsheet IDs to fetch")
    fetch_parser.add_argument(
        "--output",
        "-o",
        action="append",
        default=[],
        help="Destination file, one per spreadsheet ID (default: stdout)",
    )
    fetch_parser.add_argument("--url-template", help="Feed URL template containing {id}")

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse", parents=[common], help="Reconstruct a feed document saved on disk"
    )
    parse_parser.add_argument("file", type=Path, help="Path to the feed JSON document")
    parse_parser.add_argument("--output", "-o", help="Destination file (default: stdout)")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "fetch":
        return run_fetch(args)
    elif args.command == "parse":
        return run_parse(args)
    parser.print_help()
    return 1


def _reconstructor(args: argparse.Namespace) -> FeedReconstructor:
    """Build a reconstructor from settings, overridden by command-line flags."""
    return FeedReconstructor(
        recognized_types=settings.recognized_types,
        nullfill=settings.nullfill if args.nullfill is None else args.nullfill,
        header_row_offset=args.offset or settings.header_row_offset,
        strict=settings.strict if args.strict is None else args.strict,
    )


def _emit(result: FeedResult, dest: Optional[str], args: argparse.Namespace) -> bool:
    """Write a result to a file, or to stdout when no destination is given."""
    beautify = settings.beautify if args.beautify is None else args.beautify
    callback = args.callback or settings.jsonp_callback
    if not dest:
        print(export.dumps(result, beautify=beautify, callback=callback))
        return True
    try:
        export.write(result, dest, beautify=beautify, callback=callback)
    except OSError as e:
        logger.error(f"Cannot write feed {result.id} to {dest}: {e}")
        return False
    return True


def run_fetch(args: argparse.Namespace) -> int:
    """Fetch every requested spreadsheet and write it out."""
    if args.output and len(args.output) != len(args.spreadsheet_ids):
        logger.error(
            f"Got {len(args.output)} output files for {len(args.spreadsheet_ids)} spreadsheets"
        )
        return 1

    client = FeedClient(url_template=args.url_template, reconstructor=_reconstructor(args))
    destinations = args.output or [None] * len(args.spreadsheet_ids)
    status = 0

    for spreadsheet_id, dest in zip(args.spreadsheet_ids, destinations):
        if not spreadsheet_id.strip():
            logger.error(f"Invalid spreadsheet ID: {spreadsheet_id!r}")
            status = 1
            continue
        try:
            result = client.get(spreadsheet_id)
        except GhostsheetError as e:
            logger.error(str(e))
            status = 1
            continue
        if not _emit(result, dest, args):
            status = 1

    return status


def run_parse(args: argparse.Namespace) -> int:
    """Reconstruct a locally stored feed document."""
    try:
        document = json.loads(args.file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read feed document {args.file}: {e}")
        return 1

    try:
        result = _reconstructor(args).reconstruct_document(document)
    except GhostsheetError as e:
        logger.error(str(e))
        return 1

    if not _emit(result, args.output, args):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
