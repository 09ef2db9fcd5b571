"""Entry point for ``python -m rosterscan`` and the ``rosterscan`` script."""

from __future__ import annotations

import sys
from typing import List, Optional

from rosterscan.cli import parse_arguments, run_headless_from_args
from rosterscan.headless import HeadlessResult


def main(argv: Optional[List[str]] = None) -> int:
    raw_argv = list(argv if argv is not None else sys.argv[1:])
    args, extras = parse_arguments(raw_argv)
    if extras:
        print(f"Ignoring unknown arguments: {' '.join(extras)}", file=sys.stderr, flush=True)

    try:
        result = run_headless_from_args(args)
    except (ValueError, FileNotFoundError) as exc:
        _emit_headless_miss(exc)
        return 2
    _print_headless_result(result)
    return result.exit_code


def _print_headless_result(result: HeadlessResult) -> None:
    print(result.summary_line, flush=True)
    print(f"TXT: {result.txt_path or '<missing>'}", flush=True)
    print(f"JSON: {result.json_path or '<missing>'}", flush=True)
    print(f"LOG: {result.log_file}", flush=True)
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr, flush=True)


def _emit_headless_miss(exc: Exception) -> None:
    reason = "input_missing" if isinstance(exc, FileNotFoundError) else "invalid_args"
    print(f"HEADLESS_MISS reason={reason}", flush=True)
    print(f"Headless error: {exc}", file=sys.stderr, flush=True)


if __name__ == "__main__":
    sys.exit(main())
