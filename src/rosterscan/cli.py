"""Command-line parsing for the RosterScan headless runner."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from rosterscan.headless import HeadlessOptions, HeadlessResult, execute_headless
from rosterscan.scan.layout import DEFAULT_LAYOUT_NAME


def parse_arguments(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Parse known CLI arguments and return ``(args, extras)``."""

    parser = argparse.ArgumentParser(description="RosterScan shift-assignment sheet extractor")
    parser.add_argument(
        "--input",
        dest="input_path",
        help="Path to the assignment sheet (PDF, image or OCR text file).",
    )
    parser.add_argument(
        "--page",
        dest="page_number",
        type=int,
        default=1,
        help="1-based PDF page to scan (default: 1).",
    )
    parser.add_argument(
        "--layout",
        default=DEFAULT_LAYOUT_NAME,
        help=f"Bundled layout preset name or JSON path (default: {DEFAULT_LAYOUT_NAME}).",
    )
    parser.add_argument(
        "--force-ocr",
        action="store_true",
        help="OCR PDF pages even when they carry a text layer.",
    )
    parser.add_argument(
        "--out-dir",
        dest="out_dir",
        help="Directory for the TXT/JSON outputs (default: ~/.rosterscan/exports).",
    )
    parser.add_argument(
        "--log-dir",
        dest="log_dir",
        default="debug",
        help="Directory for structured headless logs (default: debug).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        help="Optional explicit log file path.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable debug logging of anchors, bands and fallbacks.",
    )

    args, extras = parser.parse_known_args(argv)
    return args, extras


def create_headless_options(args: argparse.Namespace) -> HeadlessOptions:
    """Return ``HeadlessOptions`` derived from parsed ``args``."""

    if not args.input_path:
        raise ValueError("--input is required")
    if args.page_number < 1:
        raise ValueError("--page must be 1 or greater")

    input_path = Path(args.input_path).expanduser().resolve()
    out_dir = Path(args.out_dir).expanduser() if args.out_dir else None
    log_dir = Path(args.log_dir).expanduser()
    log_file = Path(args.log_file).expanduser() if args.log_file else None

    return HeadlessOptions(
        input_path=input_path,
        page_number=int(args.page_number),
        layout=str(args.layout or DEFAULT_LAYOUT_NAME),
        force_ocr=bool(args.force_ocr),
        out_dir=out_dir,
        log_dir=log_dir,
        log_file=log_file,
        trace=bool(args.trace),
    )


def run_headless_from_args(args: argparse.Namespace) -> HeadlessResult:
    """Execute the headless scan using ``args`` and return the result."""

    options = create_headless_options(args)
    return execute_headless(options)


__all__ = [
    "create_headless_options",
    "parse_arguments",
    "run_headless_from_args",
]
