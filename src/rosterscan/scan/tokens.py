"""Room-code and name-fragment normalization for OCR tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Pattern, Tuple

DEFAULT_VALID_ROOM_PATTERN = r"^2(0\d|1\d|2[0-8])[AB]?$"  # rooms 200-228
DEFAULT_ROOM_CANDIDATE_PATTERN = r"\b2[0-9OIL]{2}[A-B8]?\b"

STOP_WORDS = frozenset(
    {
        "RN", "ROOM", "ROOMS", "NOTES", "ACUITY", "TELE", "MS", "MED", "SURG",
        "CHARGE", "NURSE", "MENTOR", "CLINICAL", "CTA", "RESOURCE",
        "SHIFT", "NOC", "DAY", "NIGHT",
        "SITTER", "ISO", "BG", "NIH", "ADMIT", "DRIP", "Q2", "HEAVY", "TF",
        "EDG", "PCA", "PCAS",
    }
)

_EDGE_NOISE_RE = re.compile(r"^[^A-Z0-9]+|[^A-Z0-9]+$")
_TRAILING_EIGHT_RE = re.compile(r"^(\d{3})8$")
_NON_ALPHA_PAREN_RE = re.compile(r"[^A-Za-z()]")
_SLASH_SPLIT_RE = re.compile(r"[/\\]+")
_PAREN_CODE_RE = re.compile(r"^\([A-Za-z]{2,6}\)$")
_ROOM_SORT_RE = re.compile(r"^(\d+)(.*)$")


@dataclass(frozen=True, slots=True)
class RoomGrammar:
    """Closed room-code grammar for one unit deployment."""

    valid: Pattern[str]
    candidate: Pattern[str]

    @classmethod
    def from_patterns(cls, valid: str, candidate: str) -> "RoomGrammar":
        return cls(valid=re.compile(valid), candidate=re.compile(candidate, re.IGNORECASE))


DEFAULT_ROOM_GRAMMAR = RoomGrammar.from_patterns(DEFAULT_VALID_ROOM_PATTERN, DEFAULT_ROOM_CANDIDATE_PATTERN)


def collapse_ws(text: object) -> str:
    """Return ``text`` with table pipes removed and whitespace collapsed."""

    raw = "" if text is None else str(text)
    return " ".join(raw.replace("|", " ").split())


def normalize_token(raw: object) -> str:
    """
    Return the canonical room-code form of an OCR token.

    Letters never appear inside room codes except as an A/B suffix, so the
    confusables O, I and L are folded to digits across the whole token. A
    trailing 8 after a three digit prefix is read as B.
    """

    token = ("" if raw is None else str(raw)).upper().strip()
    token = _EDGE_NOISE_RE.sub("", token)
    token = token.replace("O", "0")
    token = token.replace("I", "1").replace("L", "1")
    return _TRAILING_EIGHT_RE.sub(r"\1B", token)


def is_valid_room(token: str, grammar: RoomGrammar = DEFAULT_ROOM_GRAMMAR) -> bool:
    return bool(token) and grammar.valid.match(token) is not None


def find_room_spans(text: str, grammar: RoomGrammar = DEFAULT_ROOM_GRAMMAR) -> List[Tuple[int, str]]:
    """Return ``(start, room)`` for every candidate in ``text`` that normalizes to a valid room."""

    spans: List[Tuple[int, str]] = []
    for match in grammar.candidate.finditer(text or ""):
        room = normalize_token(match.group(0))
        if is_valid_room(room, grammar):
            spans.append((match.start(), room))
    return spans


def extract_rooms_from_text(text: str, grammar: RoomGrammar = DEFAULT_ROOM_GRAMMAR) -> List[str]:
    """Return valid room codes found in ``text``, de-duplicated in order of appearance."""

    rooms: List[str] = []
    seen: set[str] = set()
    for _start, room in find_room_spans(text, grammar):
        if room in seen:
            continue
        seen.add(room)
        rooms.append(room)
    return rooms


def room_sort_key(room: str) -> Tuple[int, int, str]:
    match = _ROOM_SORT_RE.match(room or "")
    if not match:
        return (1, 0, room or "")
    return (0, int(match.group(1)), match.group(2))


def clean_alpha_token(raw: object) -> str:
    """
    Return the alphabetic name fragment of ``raw`` or ``""`` when it is noise.

    Parentheses are kept so that short codes such as ``(EDG)`` survive. Stop
    words, single letters and slash-joined tag tokens (``ISO/BG``) are dropped.
    """

    text = "" if raw is None else str(raw)
    pieces = [piece for piece in _SLASH_SPLIT_RE.split(text) if piece.strip()]
    if len(pieces) > 1:
        for piece in pieces:
            letters = _NON_ALPHA_PAREN_RE.sub("", piece).replace("(", "").replace(")", "")
            if letters.upper() in STOP_WORDS:
                return ""

    cleaned = _NON_ALPHA_PAREN_RE.sub("", text).strip()
    if not cleaned:
        return ""
    bare = cleaned.replace("(", "").replace(")", "")
    if bare.upper() in STOP_WORDS:
        return ""
    if len(bare) <= 1:
        return ""
    return cleaned


def is_paren_code(token: str) -> bool:
    return _PAREN_CODE_RE.match(token or "") is not None


def is_plausible_person_name(name: str) -> bool:
    """Return ``True`` for ``First Last`` style names or one token of five letters or more."""

    parts = collapse_ws(name).split()
    alpha_parts = [part for part in parts if not is_paren_code(part)]
    if len(alpha_parts) >= 2:
        return True
    if len(alpha_parts) == 1:
        letters = re.sub(r"[^A-Za-z]", "", alpha_parts[0])
        return len(letters) >= 5
    return False


__all__ = [
    "DEFAULT_ROOM_GRAMMAR",
    "RoomGrammar",
    "STOP_WORDS",
    "clean_alpha_token",
    "collapse_ws",
    "extract_rooms_from_text",
    "find_room_spans",
    "is_paren_code",
    "is_plausible_person_name",
    "is_valid_room",
    "normalize_token",
    "room_sort_key",
]
