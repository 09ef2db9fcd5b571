"""PCA table extraction from the upper region of an assignment sheet."""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from rosterscan.roster.model import PcaEntry

from .geometry import Word
from .layout import DEFAULT_LAYOUT, LayoutConfig
from .lines import group_words_into_lines
from .tokens import clean_alpha_token, collapse_ws, find_room_spans, is_plausible_person_name

LOGGER = logging.getLogger(__name__)

_COUNT_RE = re.compile(r"\b([1-9])\b")


def parse_pcas(
    text: str,
    words: Sequence[Word],
    width: float,
    height: float,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> List[PcaEntry]:
    """
    Return ``(name, count, rooms)`` rows found in the PCA block.

    Only words whose y0 sits in the top ``pca_max_y_ratio`` of the page are
    considered. ``text`` is accepted for parity with the text-only path and is
    not read; the PCA block is rebuilt from word geometry.
    """

    grammar = config.grammar
    top_limit = height * config.pca_max_y_ratio
    top_words = [word for word in words if word.y0 <= top_limit]
    lines = group_words_into_lines(top_words, config.line_y_tolerance)

    entries: List[PcaEntry] = []
    seen: set[str] = set()

    for line in lines:
        spans = find_room_spans(line.text, grammar)
        rooms: List[str] = []
        for _start, room in spans:
            if room not in rooms:
                rooms.append(room)
        if len(rooms) < config.min_pca_rooms:
            continue

        first_room_at = spans[0][0]
        lead = line.text[:first_room_at]
        count_match = _COUNT_RE.search(lead)
        if count_match:
            count = int(count_match.group(1))
            name_part = lead[: count_match.start()]
        else:
            count = len(rooms)
            name_part = lead

        name_tokens = [token for token in (clean_alpha_token(raw) for raw in name_part.split()) if token]
        if not name_tokens:
            continue
        name = collapse_ws(" ".join(name_tokens[:2]))
        if not is_plausible_person_name(name):
            LOGGER.debug("PCA line rejected, implausible name %r: %s", name, line.text)
            continue

        key = f"{name.upper()}|{','.join(rooms)}"
        if key in seen:
            continue
        seen.add(key)
        entries.append(PcaEntry(name=name, count=count, rooms=rooms))

    entries.sort(key=lambda entry: entry.name.casefold())
    return entries


__all__ = ["parse_pcas"]
