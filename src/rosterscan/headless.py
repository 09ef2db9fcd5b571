"""Headless roster scan runner used by the CLI and batch tooling."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rosterscan.fs.exports import exports_dir, sanitize_filename
from rosterscan.logs.rotating import get_logger, log_path
from rosterscan.report.txt_writer import write_roster_json, write_roster_report
from rosterscan.roster.model import RosterParseOutcome
from rosterscan.scan.layout import DEFAULT_LAYOUT_NAME, load_layout
from rosterscan.scan.parser import parse_outcome
from rosterscan.sources import load_source

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class HeadlessOptions:
    """Configuration for a headless roster scan."""

    input_path: Path
    page_number: int = 1
    layout: str = DEFAULT_LAYOUT_NAME
    force_ocr: bool = False
    out_dir: Optional[Path] = None
    log_dir: Path = field(default_factory=lambda: Path("debug"))
    log_file: Optional[Path] = None
    trace: bool = False


@dataclass(slots=True)
class HeadlessResult:
    """Outcome of a headless roster scan."""

    exit_code: int
    txt_path: Optional[Path]
    json_path: Optional[Path]
    outcome: Optional[RosterParseOutcome]
    warnings: List[str]
    summary_line: str
    log_file: Path


def execute_headless(options: HeadlessOptions) -> HeadlessResult:
    """Load, parse and report on ``options.input_path`` without any UI."""

    input_path = options.input_path.expanduser().resolve()
    if not input_path.exists():
        raise FileNotFoundError(f"Input not found: {input_path}")

    log_dir = options.log_dir.expanduser().resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (options.log_file or (log_dir / _default_log_name())).expanduser().resolve()

    base_logger = _configure_logging(log_file, trace=options.trace)
    LOGGER.info("Headless start: %s (page %d)", input_path, options.page_number)
    LOGGER.info("Headless layout: %s", options.layout)
    if options.trace:
        base_logger.debug("Trace mode enabled for headless execution.")
    LOGGER.debug("Rotating log: %s", log_path())

    layout = load_layout(options.layout)

    try:
        source = load_source(input_path, page_number=options.page_number, force_ocr=options.force_ocr)
    except Exception:
        LOGGER.exception("Failed to load roster source %s", input_path)
        return HeadlessResult(
            exit_code=1,
            txt_path=None,
            json_path=None,
            outcome=None,
            warnings=["Source failed to load; see logs for details"],
            summary_line="ERROR — roster source failed to load",
            log_file=log_file,
        )

    outcome = parse_outcome(source, layout)
    for warning in outcome.warnings:
        LOGGER.warning("Parse: %s", warning)

    out_dir = options.out_dir.expanduser().resolve() if options.out_dir else exports_dir()
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = input_path.stem or "Roster"
    txt_path = write_roster_report(
        outcome,
        source_basename=input_path.name,
        out_path=out_dir / sanitize_filename(f"{stem}_roster.txt"),
    )
    json_path = write_roster_json(outcome.roster, out_dir / sanitize_filename(f"{stem}_roster.json"))

    summary_line = _build_summary_line(outcome)
    exit_code = 0 if outcome.roster.assigned_room_count() else 2
    LOGGER.info("Headless run completed exit_code=%s txt=%s json=%s", exit_code, txt_path, json_path)

    return HeadlessResult(
        exit_code=exit_code,
        txt_path=txt_path,
        json_path=json_path,
        outcome=outcome,
        warnings=list(outcome.warnings),
        summary_line=summary_line,
        log_file=log_file,
    )


def _configure_logging(log_file: Path, *, trace: bool = False) -> logging.Logger:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    base_logger = get_logger()
    level = logging.DEBUG if trace else logging.INFO
    base_logger.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(isinstance(handler, logging.StreamHandler) for handler in root_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        root_logger.addHandler(stream_handler)

    existing_paths = {
        getattr(handler, "baseFilename", None)
        for handler in base_logger.handlers
        if hasattr(handler, "baseFilename")
    }
    if str(log_file) not in existing_paths:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(formatter)
        base_logger.addHandler(file_handler)

    return base_logger


def _build_summary_line(outcome: RosterParseOutcome) -> str:
    roster = outcome.roster
    return (
        f"Parse:{outcome.kind} Mode:{outcome.mode} PCAs:{len(roster.pcas)} RNs:{len(roster.rns)} "
        f"Rooms:{roster.assigned_room_count()} Warnings:{len(outcome.warnings)}"
    )


def _default_log_name() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"headless_{timestamp}.log"


__all__ = ["HeadlessOptions", "HeadlessResult", "execute_headless"]
