"""Roster data structures shared by the scan parser and report writers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

LevelOfCare = Literal["Tele", "MS"]
OutcomeKind = Literal["full", "single_bucket", "leadership_only", "empty"]
ParseMode = Literal["words", "text"]

FALLBACK_RN_NAME = "RN"


@dataclass(slots=True)
class RosterMeta:
    """Leadership and header fields read from the sheet text."""

    charge_nurse: Optional[str] = None
    resource_rn: Optional[str] = None
    cta: Optional[str] = None
    unit_label: Optional[str] = None
    date_label: Optional[str] = None

    def has_leadership(self) -> bool:
        return any((self.charge_nurse, self.resource_rn, self.cta))

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "chargeNurse": self.charge_nurse,
            "resourceRn": self.resource_rn,
            "cta": self.cta,
            "unitLabel": self.unit_label,
            "dateLabel": self.date_label,
        }


@dataclass(slots=True)
class PcaEntry:
    name: str
    count: int
    rooms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "count": self.count, "rooms": list(self.rooms)}


@dataclass(slots=True)
class RoomAssignment:
    room: str
    level_of_care: Optional[LevelOfCare] = None
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"room": self.room, "levelOfCare": self.level_of_care, "notes": list(self.notes)}


@dataclass(slots=True)
class RnEntry:
    name: str
    rooms: List[RoomAssignment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "rooms": [room.to_dict() for room in self.rooms]}


@dataclass(slots=True)
class ParsedRoster:
    """
    Structured roster built by one parse call.

    ``to_dict`` emits the camelCase shape consumed by review/apply code, which
    is shared with the structured CSV importer.
    """

    meta: RosterMeta = field(default_factory=RosterMeta)
    pcas: List[PcaEntry] = field(default_factory=list)
    rns: List[RnEntry] = field(default_factory=list)

    def assigned_room_count(self) -> int:
        return sum(len(rn.rooms) for rn in self.rns)

    def to_dict(self) -> Dict[str, object]:
        return {
            "meta": self.meta.to_dict(),
            "pcas": [pca.to_dict() for pca in self.pcas],
            "rns": [rn.to_dict() for rn in self.rns],
        }


@dataclass(slots=True)
class RosterParseOutcome:
    """Parsed roster paired with how much of the layout was recovered."""

    kind: OutcomeKind
    mode: ParseMode
    roster: ParsedRoster
    warnings: List[str] = field(default_factory=list)


def classify_outcome(roster: ParsedRoster, *, banded: bool) -> OutcomeKind:
    """Return the outcome kind for ``roster``; ``banded`` marks anchor-based RN assignment."""

    if roster.rns:
        return "full" if banded else "single_bucket"
    if roster.pcas:
        return "full"
    if roster.meta.has_leadership():
        return "leadership_only"
    return "empty"


__all__ = [
    "FALLBACK_RN_NAME",
    "LevelOfCare",
    "OutcomeKind",
    "ParseMode",
    "ParsedRoster",
    "PcaEntry",
    "RnEntry",
    "RosterMeta",
    "RosterParseOutcome",
    "RoomAssignment",
    "classify_outcome",
]
