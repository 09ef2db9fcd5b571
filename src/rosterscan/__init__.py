"""RosterScan: shift-assignment sheet extraction for charge nurses."""

from __future__ import annotations

__version__ = "0.3.0"

from rosterscan.scan.parser import RosterInputError, parse, parse_outcome  # noqa: E402

__all__ = ["RosterInputError", "__version__", "parse", "parse_outcome"]
