"""RN name-anchor detection for the lower RN grid."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .geometry import Word
from .layout import DEFAULT_LAYOUT, LayoutConfig
from .tokens import clean_alpha_token, collapse_ws, is_paren_code, is_plausible_person_name

LOGGER = logging.getLogger(__name__)

Candidate = Tuple[Word, str]


@dataclass(frozen=True, slots=True)
class NameAnchor:
    """Detected RN name and the centroid of the words that spell it."""

    name: str
    cx: float
    cy: float


@dataclass(slots=True)
class _Column:
    cx: float
    members: List[Candidate]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _candidate_words(words: Sequence[Word], width: float, height: float, config: LayoutConfig) -> List[Candidate]:
    y_min = height * config.rn_min_y_ratio
    y_max = height * config.rn_max_y_ratio
    x_max = width * config.anchor_max_x_ratio

    candidates: List[Candidate] = []
    for word in words:
        if not (y_min <= word.y0 <= y_max):
            continue
        if word.cx > x_max:
            continue
        token = clean_alpha_token(word.text)
        if token:
            candidates.append((word, token))
    return candidates


def _cluster_columns(candidates: Sequence[Candidate], x_tolerance: float) -> List[_Column]:
    columns: List[_Column] = []
    for word, token in sorted(candidates, key=lambda item: item[0].cx):
        for column in columns:
            if abs(word.cx - column.cx) <= x_tolerance:
                column.members.append((word, token))
                count = len(column.members)
                column.cx = (column.cx * (count - 1) + word.cx) / count
                break
        else:
            columns.append(_Column(cx=word.cx, members=[(word, token)]))
    return columns


def _split_rows(members: Sequence[Candidate], y_tolerance: float) -> List[List[Candidate]]:
    rows: List[Tuple[float, List[Candidate]]] = []
    for word, token in sorted(members, key=lambda item: item[0].y0):
        if not rows or abs(rows[-1][0] - word.y0) > y_tolerance:
            rows.append((word.y0, []))
        rows[-1][1].append((word, token))
    return [group for _y, group in rows]


def _compose_name(tokens: Sequence[str]) -> str:
    paren = next((token for token in tokens if is_paren_code(token)), None)
    alpha = [token for token in tokens if not is_paren_code(token)]
    name = " ".join(alpha[:2])
    if paren:
        name = f"{name} {paren}"
    return collapse_ws(name)


def find_rn_anchors(
    words: Sequence[Word],
    width: float,
    height: float,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> List[NameAnchor]:
    """
    Return one anchor per RN name found in the RN grid, ordered left to right.

    Candidate name tokens are clustered into columns by x-center, then each
    column is split into rows by y0 so stacked names stay separate. Results are
    capped at ``config.max_anchors``.
    """

    candidates = _candidate_words(words, width, height, config)
    if not candidates:
        return []

    anchors: List[NameAnchor] = []
    for column in _cluster_columns(candidates, width * config.anchor_x_tolerance_ratio):
        for row in _split_rows(column.members, config.anchor_y_tolerance):
            ordered = sorted(row, key=lambda item: item[0].x0)
            tokens = [token for _word, token in ordered if token]
            if not tokens:
                continue
            name = _compose_name(tokens)
            if not is_plausible_person_name(name):
                continue
            xs = [word.cx for word, _token in ordered]
            ys = [word.cy for word, _token in ordered]
            anchors.append(NameAnchor(name=name, cx=sum(xs) / len(xs), cy=sum(ys) / len(ys)))

    unique: List[NameAnchor] = []
    seen: set[Tuple[str, int, int]] = set()
    for anchor in anchors:
        key = (
            anchor.name.upper(),
            _round_half_up(anchor.cx / config.anchor_dedup_x_bucket),
            _round_half_up(anchor.cy / config.anchor_dedup_y_bucket),
        )
        if key in seen:
            continue
        seen.add(key)
        unique.append(anchor)

    unique.sort(key=lambda anchor: anchor.cx)
    if len(unique) > config.max_anchors:
        LOGGER.debug("RN anchors capped at %d (found %d)", config.max_anchors, len(unique))
    return unique[: config.max_anchors]


__all__ = ["NameAnchor", "find_rn_anchors"]
