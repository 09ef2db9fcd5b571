"""RN column bands and room-token assignment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .anchors import NameAnchor
from .geometry import Rect, Word
from .tokens import DEFAULT_ROOM_GRAMMAR, RoomGrammar, is_valid_room, normalize_token


@dataclass(frozen=True, slots=True)
class Band:
    """Horizontal page slice ``[left, right)`` attributed to one RN anchor."""

    anchor: NameAnchor
    left: float
    right: float

    @property
    def name(self) -> str:
        return self.anchor.name

    def contains(self, x: float) -> bool:
        return self.left <= x < self.right


@dataclass(frozen=True, slots=True)
class RoomToken:
    """A word recognized as a valid room code."""

    word: Word
    room: str

    @property
    def bbox(self) -> Rect:
        return self.word.bbox

    @property
    def cx(self) -> float:
        return self.word.cx


def build_room_tokens(words: Iterable[Word], grammar: RoomGrammar = DEFAULT_ROOM_GRAMMAR) -> List[RoomToken]:
    tokens: List[RoomToken] = []
    for word in words:
        room = normalize_token(word.text)
        if is_valid_room(room, grammar):
            tokens.append(RoomToken(word=word, room=room))
    return tokens


def compute_band_ranges(anchors: Sequence[NameAnchor], width: float) -> List[Band]:
    """
    Return contiguous bands for ``anchors`` (sorted by x) across ``[0, width)``.

    Neighbouring bands meet at the midpoint between their anchor centroids.
    """

    bands: List[Band] = []
    for index, anchor in enumerate(anchors):
        prev_anchor = anchors[index - 1] if index > 0 else None
        next_anchor = anchors[index + 1] if index + 1 < len(anchors) else None
        left = (prev_anchor.cx + anchor.cx) / 2.0 if prev_anchor is not None else 0.0
        right = (anchor.cx + next_anchor.cx) / 2.0 if next_anchor is not None else float(width)
        bands.append(Band(anchor=anchor, left=left, right=right))
    return bands


def band_index_for(x: float, bands: Sequence[Band]) -> int:
    for index, band in enumerate(bands):
        if band.contains(x):
            return index
    return -1


def assign_rooms_to_bands(room_tokens: Iterable[RoomToken], bands: Sequence[Band]) -> Dict[int, List[RoomToken]]:
    """Bucket ``room_tokens`` by the band containing their x-center, first occurrence per room."""

    buckets: Dict[int, List[RoomToken]] = {index: [] for index in range(len(bands))}
    for token in room_tokens:
        index = band_index_for(token.cx, bands)
        if index >= 0:
            buckets[index].append(token)

    for index, tokens in buckets.items():
        seen: set[str] = set()
        unique: List[RoomToken] = []
        for token in tokens:
            if token.room in seen:
                continue
            seen.add(token.room)
            unique.append(token)
        buckets[index] = unique
    return buckets


__all__ = [
    "Band",
    "RoomToken",
    "assign_rooms_to_bands",
    "band_index_for",
    "build_room_tokens",
    "compute_band_ranges",
]
