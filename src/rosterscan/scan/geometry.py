"""Word geometry primitives shared by the roster scan parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

Rect = Tuple[float, float, float, float]
Point = Tuple[float, float]


def normalize_rect(rect: Rect) -> Rect:
    """Return ``rect`` with coordinates sorted so that x1 >= x0 and y1 >= y0."""

    x0, y0, x1, y1 = rect
    if x1 < x0:
        x0, x1 = x1, x0
    if y1 < y0:
        y0, y1 = y1, y0
    return float(x0), float(y0), float(x1), float(y1)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True, slots=True)
class Word:
    """A single OCR or PDF text-layer token in page coordinates."""

    text: str
    bbox: Rect
    confidence: Optional[float] = None

    @property
    def x0(self) -> float:
        return self.bbox[0]

    @property
    def y0(self) -> float:
        return self.bbox[1]

    @property
    def x1(self) -> float:
        return self.bbox[2]

    @property
    def y1(self) -> float:
        return self.bbox[3]

    @property
    def center(self) -> Point:
        return ((self.bbox[0] + self.bbox[2]) / 2.0, (self.bbox[1] + self.bbox[3]) / 2.0)

    @property
    def cx(self) -> float:
        return (self.bbox[0] + self.bbox[2]) / 2.0

    @property
    def cy(self) -> float:
        return (self.bbox[1] + self.bbox[3]) / 2.0


def make_word(
    text: str,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    confidence: Optional[float] = None,
) -> Word:
    """Build a :class:`Word` with a normalized bounding box."""

    return Word(text=str(text), bbox=normalize_rect((x0, y0, x1, y1)), confidence=confidence)


@dataclass(slots=True)
class OcrResult:
    """Word source output: recognized text plus positioned words in one coordinate space."""

    text: str
    words: List[Word] = field(default_factory=list)
    width: Optional[float] = None
    height: Optional[float] = None
    source: str = "ocr"

    def to_dict(self) -> Dict[str, object]:
        return {
            "text": self.text,
            "words": [
                {
                    "text": word.text,
                    "x0": word.x0,
                    "y0": word.y0,
                    "x1": word.x1,
                    "y1": word.y1,
                    "conf": word.confidence,
                }
                for word in self.words
            ],
            "width": self.width,
            "height": self.height,
            "source": self.source,
        }


def words_in_box(words: Iterable[Word], box: Rect) -> List[Word]:
    """Return words whose center lies inside ``box`` (edges inclusive)."""

    bx0, by0, bx1, by1 = box
    hits: List[Word] = []
    for word in words:
        cx, cy = word.center
        if bx0 <= cx <= bx1 and by0 <= cy <= by1:
            hits.append(word)
    return hits


def union_bbox(words: Iterable[Word]) -> Optional[Rect]:
    boxes = [word.bbox for word in words]
    if not boxes:
        return None
    return (
        min(box[0] for box in boxes),
        min(box[1] for box in boxes),
        max(box[2] for box in boxes),
        max(box[3] for box in boxes),
    )


__all__ = ["OcrResult", "Point", "Rect", "Word", "clamp", "make_word", "normalize_rect", "union_bbox", "words_in_box"]
