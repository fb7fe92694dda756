"""
Command line interface for XLSQuill.

Usage:
    xlsquill convert report.xls --output-dir out/
    xlsquill info report.xls --json
    xlsquill version
"""

from __future__ import annotations

import argparse
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .api import XlsToPdfConverter, load_sheet
from .config import PAGE_SIZES, ConvertOptions
from .exceptions import XlsInterpreterError
from .utils.logger import LOG_LEVELS, configure_logging

logger = logging.getLogger(__name__)

OUTPUT_NAME_LENGTH = 10


def generate_output_name() -> str:
    """Random output file name: 10 hex characters of a UUID4 plus ``.pdf``."""
    return f"{uuid.uuid4().hex[:OUTPUT_NAME_LENGTH]}.pdf"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xlsquill",
        description="Convert the first worksheet of a legacy .xls workbook into a landscape PDF.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this rotating log file.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert a workbook to PDF.")
    convert.add_argument("input", type=Path, help="Path to the .xls workbook.")
    convert.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the generated PDF (default: current directory).",
    )
    convert.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES),
        type=str.upper,
        default="A4",
        help="Page preset (default: A4).",
    )
    convert.add_argument("--portrait", action="store_true", help="Use portrait instead of landscape pages.")
    convert.add_argument("--font", dest="font_name", default=None, help="Base font name, e.g. STSong-Light.")
    convert.add_argument("--font-path", type=Path, default=None, help="TrueType file registered under --font.")
    convert.add_argument("--skip-last-row", action="store_true", help="Leave the sheet's last row out.")
    convert.add_argument("--no-images", action="store_true", help="Do not draw the sheet's pictures.")

    info = subparsers.add_parser("info", help="Describe worksheet 0 of a workbook.")
    info.add_argument("input", type=Path, help="Path to the .xls workbook.")
    info.add_argument("--json", action="store_true", help="Print the summary as JSON.")

    subparsers.add_parser("version", help="Print the package version.")
    return parser


def options_from_args(args: argparse.Namespace) -> ConvertOptions:
    return ConvertOptions.from_dict(
        {
            "page_size": args.page_size,
            "landscape": not args.portrait,
            "font_name": args.font_name,
            "font_path": args.font_path,
            "skip_last_row": args.skip_last_row,
            "include_images": not args.no_images,
        }
    )


def sheet_summary(path: Path) -> Dict[str, Any]:
    sheet = load_sheet(path)
    return {
        "file": str(path),
        "sheet": sheet.name,
        "rows": sheet.row_count,
        "columns": sheet.header_column_count,
        "merged_regions": len(sheet.merged_regions),
        "pictures": len(sheet.pictures),
        "styles": len(sheet.styles),
    }


def run_convert(args: argparse.Namespace, console: Console) -> int:
    options = options_from_args(args)
    output = args.output_dir / generate_output_name()
    converter = XlsToPdfConverter(args.input, output, options)
    result = converter.convert()
    console.print(f"[green]✓ {escape(str(args.input))} → {escape(str(result))}[/green]")
    return 0


def run_info(args: argparse.Namespace, console: Console) -> int:
    summary = sheet_summary(args.input)
    if args.json:
        console.print_json(json.dumps(summary))
        return 0
    table = Table(title=f"{args.input.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")
    for key, value in summary.items():
        table.add_row(key, str(value))
    console.print(table)
    return 0


COMMANDS = {
    "convert": run_convert,
    "info": run_info,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.log_level, log_file=args.log_file)

    console = Console()
    if args.command == "version":
        console.print(f"xlsquill {__version__}")
        return 0

    error_console = Console(stderr=True)
    try:
        return COMMANDS[args.command](args, console)
    except (XlsInterpreterError, OSError, ValueError) as exc:
        logger.debug("Conversion failed", exc_info=True)
        error_console.print(f"[red]✗ {type(exc).__name__}: {escape(str(exc))}[/red]")
        if args.log_level == "DEBUG":
            error_console.print_exception()
        return 1

