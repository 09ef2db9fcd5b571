"""Horizontal text-line grouping for OCR words."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .geometry import Rect, Word, union_bbox
from .tokens import collapse_ws

_DEFAULT_Y_TOLERANCE = 14.0


@dataclass(slots=True)
class Line:
    """Words sharing an approximate y0, ordered left to right."""

    y: float
    words: List[Word] = field(default_factory=list)
    text: str = ""
    bbox: Optional[Rect] = None


def group_words_into_lines(words: Iterable[Word], y_tolerance: float = _DEFAULT_Y_TOLERANCE) -> List[Line]:
    """
    Cluster ``words`` into lines.

    Words are visited in ``(y0, x0)`` order and a new line opens whenever a
    word's y0 is more than ``y_tolerance`` away from the current line's
    representative y (the y0 of the word that opened it).
    """

    ordered = sorted((word for word in words if word.text), key=lambda word: (word.y0, word.x0))

    lines: List[Line] = []
    for word in ordered:
        current = lines[-1] if lines else None
        if current is None or abs(current.y - word.y0) > y_tolerance:
            current = Line(y=word.y0)
            lines.append(current)
        current.words.append(word)

    for line in lines:
        line.words.sort(key=lambda word: word.x0)
        line.text = collapse_ws(" ".join(word.text for word in line.words))
        line.bbox = union_bbox(line.words)
    return lines


__all__ = ["Line", "group_words_into_lines"]
