"""Synthetic fixtures for roster parser tests."""

from .roster import (
    LEADERSHIP_TEXT,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    full_sheet_payload,
    full_sheet_words,
    header_words,
    pca_words,
    rn_anchor_words,
    rn_room_words,
    rooms_without_anchors_payload,
    word,
)

__all__ = [
    "LEADERSHIP_TEXT",
    "PAGE_HEIGHT",
    "PAGE_WIDTH",
    "full_sheet_payload",
    "full_sheet_words",
    "header_words",
    "pca_words",
    "rn_anchor_words",
    "rn_room_words",
    "rooms_without_anchors_payload",
    "word",
]
