"""Command-line interface for csv-resumable."""

from __future__ import annotations

import argparse
import csv
import itertools
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, NoReturn

from .counting import LINE_COUNTERS, get_line_counter
from .enumerator import CsvEnumerator
from .exceptions import InvalidArgumentError
from .models import Row
from .progress import format_progress, percent_complete, processed_count
from .source import CONVERTERS, CsvSource


def _open_enumerator(args: argparse.Namespace) -> CsvEnumerator:
    source = CsvSource.open(
        args.file,
        encoding=args.encoding,
        headers=args.headers,
        delimiter=args.delimiter,
        strict=args.strict,
        converters=args.converters or (),
    )
    return CsvEnumerator(source, line_counter=get_line_counter(args.counter))


def _row_to_json(row: Row) -> Any:
    if row.headers is not None:
        return row.to_dict()
    return list(row.fields)


def _print_error(e: BaseException) -> int:
    print(f"Error: {e}", file=sys.stderr)
    return 1


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the 'info' subcommand."""
    if args.batch_size < 1:
        return _print_error(
            InvalidArgumentError(f"batch_size must be a positive integer, got {args.batch_size}")
        )
    try:
        processed_count(args.cursor)
    except InvalidArgumentError as e:
        return _print_error(e)
    try:
        enumerator = _open_enumerator(args)
    except (OSError, InvalidArgumentError) as e:
        return _print_error(e)

    with enumerator.source:
        total_rows = enumerator.estimated_total_rows()

    total_batches = (
        math.ceil(total_rows / args.batch_size) if total_rows is not None else None
    )
    remaining_rows = (
        max(total_rows - processed_count(args.cursor), 0)
        if total_rows is not None
        else None
    )

    if args.json:
        info = {
            "file": str(Path(args.file).resolve()),
            "rows": total_rows,
            "batches": total_batches,
            "batch_size": args.batch_size,
            "cursor": args.cursor,
            "remaining_rows": remaining_rows,
            "progress_pct": percent_complete(args.cursor, total_rows),
        }
        print(json.dumps(info, indent=2))
    else:
        print(f"File: {Path(args.file).resolve()}")
        print(f"Rows: {_format_count(total_rows)}")
        print(f"Batches: {_format_count(total_batches)} (batch size {args.batch_size})")
        print(f"Progress: {format_progress(args.cursor, total_rows)}")

    return 0


def cmd_rows(args: argparse.Namespace) -> int:
    """Handle the 'rows' subcommand."""
    try:
        enumerator = _open_enumerator(args)
    except (OSError, InvalidArgumentError) as e:
        return _print_error(e)

    with enumerator.source:
        try:
            rows = enumerator.rows(cursor=args.cursor)
            for row, cursor in itertools.islice(rows, args.limit):
                print(json.dumps({"cursor": cursor, "row": _row_to_json(row)}, default=str))
        except (csv.Error, UnicodeDecodeError, OSError, InvalidArgumentError) as e:
            return _print_error(e)

    return 0


def cmd_batches(args: argparse.Namespace) -> int:
    """Handle the 'batches' subcommand."""
    try:
        enumerator = _open_enumerator(args)
    except (OSError, InvalidArgumentError) as e:
        return _print_error(e)

    with enumerator.source:
        try:
            batches = enumerator.batches(cursor=args.cursor, batch_size=args.batch_size)
            for batch, cursor in itertools.islice(batches, args.limit):
                payload = {"cursor": cursor, "rows": [_row_to_json(row) for row in batch]}
                print(json.dumps(payload, default=str))
        except (csv.Error, UnicodeDecodeError, OSError, InvalidArgumentError) as e:
            return _print_error(e)

    return 0


def _format_count(count: int | None) -> str:
    """Format an estimated count, or 'unknown'."""
    return "unknown" if count is None else f"{count:,}"


def _non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but not negative."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Path to CSV file")
    parser.add_argument(
        "--headers", action="store_true", help="First line of the file is a header row"
    )
    parser.add_argument("--delimiter", default=",", help="Field delimiter (default: ',')")
    parser.add_argument("--encoding", default="utf-8", help="File encoding (default: utf-8)")
    parser.add_argument(
        "--strict", action="store_true", help="Fail on malformed quoting"
    )
    parser.add_argument(
        "--converter",
        dest="converters",
        action="append",
        choices=sorted(CONVERTERS),
        help="Convert matching fields (repeatable)",
    )
    parser.add_argument(
        "--counter",
        choices=list(LINE_COUNTERS),
        default="wc",
        help="How to count lines for size estimates (default: wc)",
    )
    parser.add_argument(
        "--cursor",
        type=int,
        default=None,
        help="Index of the last processed row or batch (default: start at 0)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="csv-resumable",
        description="Resumable row and batch enumeration for CSV files",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # info subcommand
    info_parser = subparsers.add_parser(
        "info",
        help="Show size estimates",
        description="Display estimated row and batch counts and progress for a cursor",
    )
    _add_source_arguments(info_parser)
    info_parser.add_argument(
        "--batch-size", type=int, default=100, help="Rows per batch (default: 100)"
    )
    info_parser.add_argument(
        "--json", action="store_true", help="Output as JSON for scripting"
    )
    info_parser.set_defaults(func=cmd_info)

    # rows subcommand
    rows_parser = subparsers.add_parser(
        "rows",
        help="Print rows after a cursor",
        description="Print one JSON object per row, with its cursor",
    )
    _add_source_arguments(rows_parser)
    rows_parser.add_argument("--limit", type=_non_negative_int, help="Stop after this many rows")
    rows_parser.set_defaults(func=cmd_rows)

    # batches subcommand
    batches_parser = subparsers.add_parser(
        "batches",
        help="Print batches after a cursor",
        description="Print one JSON object per batch of rows, with its cursor",
    )
    _add_source_arguments(batches_parser)
    batches_parser.add_argument(
        "--batch-size", type=int, default=100, help="Rows per batch (default: 100)"
    )
    batches_parser.add_argument("--limit", type=_non_negative_int, help="Stop after this many batches")
    batches_parser.set_defaults(func=cmd_batches)

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
