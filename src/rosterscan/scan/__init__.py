"""Layout-aware roster extraction from OCR and PDF text-layer words."""

from __future__ import annotations

from .parser import RosterInputError, parse, parse_outcome

__all__ = [
    "anchors",
    "bands",
    "details",
    "geometry",
    "layout",
    "leadership",
    "lines",
    "parser",
    "pca",
    "tokens",
    "RosterInputError",
    "parse",
    "parse_outcome",
]
