"""Text-only extraction of leadership names and sheet header labels."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Pattern

from .tokens import STOP_WORDS, collapse_ws

_LABEL_JOINER = r"[\s.\-_]*"
_NAME_TAIL = r"\s*[:\-]?\s*([A-Za-z]+(?:[ \t]+[A-Za-z]+){0,2})"

_UNIT_FIELD_RE = re.compile(r"(?i)\bunit\s*[:\-]\s*([A-Za-z0-9]+(?:[ \t]+[A-Za-z0-9]+){0,2})")
_DATE_PATTERNS = (
    re.compile(r"\b(\d{1,2}/\d{1,2}/\d{2,4})\b"),
    re.compile(r"\b(\d{4}-\d{2}-\d{2})\b"),
    re.compile(
        r"(?i)\b((?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+\d{1,2},?\s+\d{4})\b"
    ),
)


@dataclass(slots=True)
class Leadership:
    charge_nurse: Optional[str] = None
    resource_rn: Optional[str] = None
    cta: Optional[str] = None


@lru_cache(maxsize=16)
def _label_regex(label: str) -> Pattern[str]:
    parts = [re.escape(part) for part in label.split()]
    return re.compile(r"\b" + _LABEL_JOINER.join(parts) + _NAME_TAIL, re.IGNORECASE)


def _trim_at_stop_word(raw: str) -> Optional[str]:
    kept = []
    for word in collapse_ws(raw).split():
        if word.upper() in STOP_WORDS:
            break
        kept.append(word)
    return " ".join(kept) or None


def _find_name(text: str, labels: Iterable[str]) -> Optional[str]:
    for label in labels:
        match = _label_regex(label).search(text)
        if match:
            return _trim_at_stop_word(match.group(1))
    return None


def parse_leadership(text: str) -> Leadership:
    """
    Return charge nurse, clinical mentor (resource RN) and CTA names.

    Each label may be followed by ``:`` or ``-`` and up to three words; the
    captured words stop at the next table keyword so an adjacent label is not
    read as part of the name. Missing labels yield ``None``.
    """

    source = str(text or "")
    return Leadership(
        charge_nurse=_find_name(source, ("Charge Nurse",)),
        resource_rn=_find_name(source, ("Clinical Mentor", "Mentor")),
        cta=_find_name(source, ("CTA",)),
    )


def parse_unit_label(text: str, unit_labels: Iterable[str] = ()) -> Optional[str]:
    source = str(text or "")
    for label in unit_labels:
        parts = [re.escape(part) for part in str(label).split()]
        if not parts:
            continue
        if re.search(r"\b" + r"\s*".join(parts) + r"\b", source, re.IGNORECASE):
            return str(label)
    match = _UNIT_FIELD_RE.search(source)
    if match:
        return _trim_at_stop_word(match.group(1))
    return None


def parse_date_label(text: str) -> Optional[str]:
    source = str(text or "")
    for pattern in _DATE_PATTERNS:
        match = pattern.search(source)
        if match:
            return collapse_ws(match.group(1))
    return None


__all__ = ["Leadership", "parse_date_label", "parse_leadership", "parse_unit_label"]
