"""Care-level and acuity-note extraction around a room token."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence, Tuple

from .bands import Band, RoomToken
from .geometry import Rect, Word, clamp, words_in_box
from .layout import DEFAULT_LAYOUT, LayoutConfig
from .tokens import collapse_ws

KeywordTable = Tuple[Tuple[Pattern[str], str], ...]

CARE_WORDS: KeywordTable = (
    (re.compile(r"\btele\b", re.IGNORECASE), "Tele"),
    (re.compile(r"\bms\b", re.IGNORECASE), "MS"),
    (re.compile(r"\bmed\s*surg\b", re.IGNORECASE), "MS"),
    (re.compile(r"\bmed-surg\b", re.IGNORECASE), "MS"),
)

NOTE_TAGS: KeywordTable = (
    (re.compile(r"\biso\b", re.IGNORECASE), "ISO"),
    (re.compile(r"\bsitter\b", re.IGNORECASE), "SITTER"),
    (re.compile(r"\bbg\b", re.IGNORECASE), "BG"),
    (re.compile(r"\bnih\b", re.IGNORECASE), "NIH"),
    (re.compile(r"\badmit\b", re.IGNORECASE), "ADMIT"),
    (re.compile(r"\bdrip\b", re.IGNORECASE), "DRIP"),
    (re.compile(r"\bq2\b", re.IGNORECASE), "Q2"),
    (re.compile(r"\bheavy\b", re.IGNORECASE), "HEAVY"),
    (re.compile(r"\btf\b", re.IGNORECASE), "TF"),
    # care levels also reported as note tags
    (re.compile(r"\btele\b", re.IGNORECASE), "TELE"),
    (re.compile(r"\bms\b", re.IGNORECASE), "MS"),
)


@dataclass(slots=True)
class RoomDetail:
    care: Optional[str] = None
    notes: List[str] = field(default_factory=list)


def care_from_text(text: str) -> Optional[str]:
    normalized = collapse_ws(text)
    for pattern, tag in CARE_WORDS:
        if pattern.search(normalized):
            return tag
    return None


def note_tags_from_text(text: str) -> List[str]:
    # OCR keeps slash-joined tags together ("Iso/BG", "Sitter/BG/TF").
    normalized = collapse_ws((text or "").replace("/", " "))
    tags: List[str] = []
    for pattern, tag in NOTE_TAGS:
        if pattern.search(normalized) and tag not in tags:
            tags.append(tag)
    return tags


def detail_box(
    width: float,
    height: float,
    band: Band,
    room_token: RoomToken,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> Rect:
    """Return the search box right of ``room_token``, clamped to its band."""

    rx0, ry0, _rx1, ry1 = room_token.bbox
    return (
        clamp(rx0 - config.detail_left_pad, band.left, band.right),
        clamp(ry0 - config.detail_above, 0.0, height),
        clamp(rx0 + width * config.detail_right_ratio, band.left, band.right),
        clamp(ry1 + config.detail_below, 0.0, height),
    )


def parse_care_and_notes_for_room(
    words: Sequence[Word],
    width: float,
    height: float,
    band: Band,
    room_token: RoomToken,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> RoomDetail:
    """Read the care level and note tags printed next to ``room_token``."""

    box = detail_box(width, height, band, room_token, config)
    nearby = words_in_box(words, box)
    text = collapse_ws(" ".join(word.text for word in nearby))
    return RoomDetail(care=care_from_text(text), notes=note_tags_from_text(text))


__all__ = [
    "CARE_WORDS",
    "NOTE_TAGS",
    "RoomDetail",
    "care_from_text",
    "detail_box",
    "note_tags_from_text",
    "parse_care_and_notes_for_room",
]
