"""Roster parse orchestrator for OCR / PDF text-layer results."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from rosterscan.roster.model import (
    FALLBACK_RN_NAME,
    ParsedRoster,
    RnEntry,
    RoomAssignment,
    RosterMeta,
    RosterParseOutcome,
    classify_outcome,
)

from .anchors import find_rn_anchors
from .bands import RoomToken, assign_rooms_to_bands, build_room_tokens, compute_band_ranges
from .details import parse_care_and_notes_for_room
from .geometry import OcrResult, Word, make_word
from .layout import DEFAULT_LAYOUT, LayoutConfig
from .leadership import parse_date_label, parse_leadership, parse_unit_label
from .pca import parse_pcas
from .tokens import extract_rooms_from_text, room_sort_key

LOGGER = logging.getLogger(__name__)

ParseSource = Union[str, OcrResult, Mapping[str, Any], None]

_WIDTH_KEYS = ("width", "imageWidth", "w")
_HEIGHT_KEYS = ("height", "imageHeight", "h")
_COORD_KEYS = ("x0", "y0", "x1", "y1")


class RosterInputError(TypeError):
    """Raised when the word source breaks the ``{text, words[]}`` contract."""


def parse(source: ParseSource, config: Optional[LayoutConfig] = None) -> ParsedRoster:
    """Return the roster recovered from ``source``; never raises for noisy input."""

    return parse_outcome(source, config).roster


def parse_outcome(source: ParseSource, config: Optional[LayoutConfig] = None) -> RosterParseOutcome:
    """
    Parse ``source`` and report how much of the layout was recovered.

    A plain string runs the text-only path. An :class:`OcrResult` or mapping
    with ``text`` and ``words`` runs the word-geometry path; when page
    dimensions cannot be derived only leadership fields are returned.
    """

    layout = config or DEFAULT_LAYOUT
    if isinstance(source, str):
        return _parse_text(source, layout)

    if source is None:
        payload: Mapping[str, Any] = {}
    elif isinstance(source, OcrResult):
        payload = {
            "text": source.text,
            "words": source.words,
            "width": source.width,
            "height": source.height,
        }
    elif isinstance(source, Mapping):
        payload = source
    else:
        raise RosterInputError(
            f"parse expects a string, OcrResult or mapping with 'text'/'words', got {type(source).__name__}"
        )
    return _parse_words(payload, layout)


def coerce_words(entries: Sequence[Any], min_confidence: float = 0.0) -> List[Word]:
    """
    Return usable words from raw collaborator entries.

    Entries lacking text or any coordinate are dropped as noise; entries that
    are neither mappings nor :class:`Word` instances raise
    :class:`RosterInputError`.
    """

    words: List[Word] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, Word):
            word: Optional[Word] = entry if entry.text.strip() else None
        elif isinstance(entry, Mapping):
            word = _word_from_mapping(entry)
        else:
            raise RosterInputError(f"words[{index}] must be a mapping or Word, got {type(entry).__name__}")
        if word is None:
            continue
        if min_confidence and word.confidence is not None and word.confidence < min_confidence:
            continue
        words.append(word)
    return words


def derive_dimensions(
    payload: Mapping[str, Any],
    words: Sequence[Word],
    min_dimension: float = DEFAULT_LAYOUT.min_dimension,
) -> Tuple[Optional[float], Optional[float]]:
    """Return page ``(width, height)`` from ``payload`` or the word extents."""

    width = _first_positive(payload, _WIDTH_KEYS)
    height = _first_positive(payload, _HEIGHT_KEYS)
    if (width is None or height is None) and words:
        max_x = max(word.x1 for word in words)
        max_y = max(word.y1 for word in words)
        if width is None and max_x > min_dimension:
            width = max_x
            LOGGER.debug("Page width inferred from word extents: %.1f", width)
        if height is None and max_y > min_dimension:
            height = max_y
            LOGGER.debug("Page height inferred from word extents: %.1f", height)
    return width, height


def _parse_text(text: str, config: LayoutConfig) -> RosterParseOutcome:
    meta = _meta_from_text(text, config)
    rooms = sorted(extract_rooms_from_text(text, config.grammar), key=room_sort_key)
    rns = [RnEntry(name=FALLBACK_RN_NAME, rooms=[RoomAssignment(room=room) for room in rooms])] if rooms else []
    roster = ParsedRoster(meta=meta, pcas=[], rns=rns)

    warnings: List[str] = ["No word geometry; PCA and RN columns not reconstructed"]
    if rooms:
        warnings.append(f"{len(rooms)} rooms collected into a single RN bucket")
    return RosterParseOutcome(
        kind=classify_outcome(roster, banded=False),
        mode="text",
        roster=roster,
        warnings=warnings,
    )


def _parse_words(payload: Mapping[str, Any], config: LayoutConfig) -> RosterParseOutcome:
    text = str(payload.get("text") or "")
    raw_words = payload.get("words")
    if raw_words is None:
        raw_words = []
    if not isinstance(raw_words, (list, tuple)):
        raise RosterInputError(f"'words' must be a list of word entries, got {type(raw_words).__name__}")

    words = coerce_words(raw_words, config.min_confidence)
    width, height = derive_dimensions(payload, words, config.min_dimension)
    meta = _meta_from_text(text, config)

    warnings: List[str] = []
    if not width or not height:
        warnings.append("Page dimensions unavailable; RN and PCA passes skipped")
        roster = ParsedRoster(meta=meta)
        return RosterParseOutcome(
            kind=classify_outcome(roster, banded=False),
            mode="words",
            roster=roster,
            warnings=warnings,
        )

    pcas = parse_pcas(text, words, width, height, config)
    if not pcas:
        warnings.append("No PCA rows matched in the upper region")

    rns, banded, rn_warnings = _parse_rns(words, width, height, config)
    warnings.extend(rn_warnings)

    roster = ParsedRoster(meta=meta, pcas=pcas, rns=rns)
    LOGGER.debug(
        "Roster parsed: pcas=%d rns=%d rooms=%d banded=%s",
        len(pcas),
        len(rns),
        roster.assigned_room_count(),
        banded,
    )
    return RosterParseOutcome(
        kind=classify_outcome(roster, banded=banded),
        mode="words",
        roster=roster,
        warnings=warnings,
    )


def _parse_rns(
    words: Sequence[Word],
    width: float,
    height: float,
    config: LayoutConfig,
) -> Tuple[List[RnEntry], bool, List[str]]:
    room_floor = height * config.rn_room_min_y_ratio
    room_tokens = [token for token in build_room_tokens(words, config.grammar) if token.word.y0 >= room_floor]
    if not room_tokens:
        return [], False, ["No room tokens found in the RN region"]

    anchors = find_rn_anchors(words, width, height, config)
    if not anchors:
        LOGGER.debug("No RN anchors; falling back to a single RN bucket (%d tokens)", len(room_tokens))
        return (
            [_fallback_bucket(room_tokens)],
            False,
            ["No RN name anchors found; rooms collected into a single RN bucket"],
        )

    bands = compute_band_ranges(anchors, width)
    buckets = assign_rooms_to_bands(room_tokens, bands)
    LOGGER.debug("RN bands: %s", ", ".join(f"{band.name}[{band.left:.0f},{band.right:.0f})" for band in bands))

    rns: List[RnEntry] = []
    claimed: set[str] = set()
    for index, band in enumerate(bands):
        assignments: List[RoomAssignment] = []
        for token in buckets.get(index, []):
            if token.room in claimed:
                LOGGER.debug("Room %s already claimed; skipped for %s", token.room, band.name)
                continue
            detail = parse_care_and_notes_for_room(words, width, height, band, token, config)
            assignments.append(RoomAssignment(room=token.room, level_of_care=detail.care, notes=detail.notes))
            claimed.add(token.room)
        if not assignments:
            continue
        assignments.sort(key=lambda assignment: room_sort_key(assignment.room))
        rns.append(RnEntry(name=band.name or FALLBACK_RN_NAME, rooms=assignments))

    return rns, True, []


def _fallback_bucket(room_tokens: Sequence[RoomToken]) -> RnEntry:
    rooms: List[str] = []
    for token in room_tokens:
        if token.room not in rooms:
            rooms.append(token.room)
    rooms.sort(key=room_sort_key)
    return RnEntry(name=FALLBACK_RN_NAME, rooms=[RoomAssignment(room=room) for room in rooms])


def _meta_from_text(text: str, config: LayoutConfig) -> RosterMeta:
    leadership = parse_leadership(text)
    return RosterMeta(
        charge_nurse=leadership.charge_nurse,
        resource_rn=leadership.resource_rn,
        cta=leadership.cta,
        unit_label=parse_unit_label(text, config.unit_labels),
        date_label=parse_date_label(text),
    )


def _word_from_mapping(entry: Mapping[str, Any]) -> Optional[Word]:
    text = entry.get("text")
    if text is None or not str(text).strip():
        return None

    bbox = entry.get("bbox")
    if isinstance(bbox, Mapping):
        raw_coords = [bbox.get(key) for key in _COORD_KEYS]
    elif isinstance(bbox, (list, tuple)) and len(bbox) == 4:
        raw_coords = list(bbox)
    else:
        raw_coords = [entry.get(key) for key in _COORD_KEYS]

    coords: List[float] = []
    for value in raw_coords:
        number = _as_float(value)
        if number is None:
            return None
        coords.append(number)

    confidence = entry.get("conf", entry.get("confidence"))
    return make_word(str(text), *coords, confidence=_as_float(confidence))


def _first_positive(payload: Mapping[str, Any], keys: Sequence[str]) -> Optional[float]:
    for key in keys:
        number = _as_float(payload.get(key))
        if number is not None and number > 0:
            return number
    return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


__all__ = [
    "ParseSource",
    "RosterInputError",
    "coerce_words",
    "derive_dimensions",
    "parse",
    "parse_outcome",
]
