"""Layout presets for the roster scan parser."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Tuple

from rosterscan._paths import resource_path

from .tokens import (
    DEFAULT_ROOM_CANDIDATE_PATTERN,
    DEFAULT_VALID_ROOM_PATTERN,
    RoomGrammar,
)

DEFAULT_LAYOUT_NAME = "two_south"
_LAYOUT_DIR = "layouts"

_RATIO_FIELDS = (
    "pca_max_y_ratio",
    "rn_room_min_y_ratio",
    "rn_min_y_ratio",
    "rn_max_y_ratio",
    "anchor_max_x_ratio",
    "anchor_x_tolerance_ratio",
    "detail_right_ratio",
)


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """
    Tuned page-region priors for one family of assignment sheets.

    The defaults match the 2 South sheet: PCA table in the top ~42% of the page,
    RN grid below with RN names in the left ~45% of the width. Ratios are page
    fractions; the remaining distances are in page pixels/points.
    """

    name: str = DEFAULT_LAYOUT_NAME
    pca_max_y_ratio: float = 0.42
    rn_room_min_y_ratio: float = 0.42
    rn_min_y_ratio: float = 0.45
    rn_max_y_ratio: float = 0.95
    anchor_max_x_ratio: float = 0.45
    anchor_x_tolerance_ratio: float = 0.04
    anchor_y_tolerance: float = 22.0
    line_y_tolerance: float = 14.0
    max_anchors: int = 10
    anchor_dedup_x_bucket: float = 20.0
    anchor_dedup_y_bucket: float = 30.0
    detail_left_pad: float = 10.0
    detail_right_ratio: float = 0.26
    detail_above: float = 22.0
    detail_below: float = 30.0
    min_dimension: float = 100.0
    min_pca_rooms: int = 2
    min_confidence: float = 0.0
    valid_room_pattern: str = DEFAULT_VALID_ROOM_PATTERN
    room_candidate_pattern: str = DEFAULT_ROOM_CANDIDATE_PATTERN
    unit_labels: Tuple[str, ...] = field(default=("2 South",))

    @property
    def grammar(self) -> RoomGrammar:
        return _grammar_for(self.valid_room_pattern, self.room_candidate_pattern)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "LayoutConfig":
        """Build a config from a JSON-style mapping, rejecting unknown keys."""

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown layout keys: {', '.join(unknown)}")

        values = dict(payload)
        if "unit_labels" in values:
            labels = values["unit_labels"]
            if isinstance(labels, str) or not isinstance(labels, (list, tuple)):
                raise ValueError("unit_labels must be a list of strings")
            values["unit_labels"] = tuple(str(label) for label in labels)

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        for name in _RATIO_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not 0.0 <= float(value) <= 1.0:
                raise ValueError(f"{name} must be a page fraction between 0 and 1, got {value!r}")
        if self.rn_min_y_ratio > self.rn_max_y_ratio:
            raise ValueError("rn_min_y_ratio must not exceed rn_max_y_ratio")
        if self.max_anchors < 1:
            raise ValueError("max_anchors must be at least 1")
        if self.min_pca_rooms < 1:
            raise ValueError("min_pca_rooms must be at least 1")
        try:
            _grammar_for(self.valid_room_pattern, self.room_candidate_pattern)
        except re.error as exc:
            raise ValueError(f"Invalid room grammar: {exc}") from exc


@lru_cache(maxsize=8)
def _grammar_for(valid: str, candidate: str) -> RoomGrammar:
    return RoomGrammar.from_patterns(valid, candidate)


DEFAULT_LAYOUT = LayoutConfig()


@lru_cache(maxsize=8)
def load_layout(name_or_path: str = DEFAULT_LAYOUT_NAME) -> LayoutConfig:
    """Load and cache a layout preset by bundled name or JSON path."""

    candidate = Path(name_or_path).expanduser()
    if candidate.suffix.lower() == ".json" and candidate.exists():
        resolved = candidate
    else:
        resolved = resource_path(Path(_LAYOUT_DIR) / f"{name_or_path}.json")
    if not resolved.exists():
        raise ValueError(f"Layout preset not found: {name_or_path}")

    with resolved.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Layout preset must be a JSON object: {resolved}")
    payload.setdefault("name", resolved.stem)
    return LayoutConfig.from_mapping(payload)


__all__ = ["DEFAULT_LAYOUT", "DEFAULT_LAYOUT_NAME", "LayoutConfig", "load_layout"]
