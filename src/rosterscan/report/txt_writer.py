"""TXT and JSON writers for charge-nurse roster review."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from rosterscan.fs.exports import safe_write_text
from rosterscan.roster.model import ParsedRoster, RnEntry, RoomAssignment, RosterParseOutcome

_CENTRAL = ZoneInfo("America/Chicago")
_KIND_LABELS = {
    "full": "Full layout",
    "single_bucket": "Single RN bucket",
    "leadership_only": "Leadership only",
    "empty": "Nothing recognized",
}

LOW_ROOM_COUNT = 8


def write_roster_report(
    outcome: RosterParseOutcome,
    source_basename: str,
    out_path: Path,
    notes: Optional[Iterable[str]] = None,
) -> Path:
    """Write the review-ready TXT report to ``out_path`` and return the written path."""

    roster = outcome.roster
    meta = roster.meta
    unit = meta.unit_label or "Unit unknown"
    date_label = meta.date_label or "Date unknown"
    header = f"{date_label} · {unit} · Source: {source_basename}"
    counts_line = (
        f"Parse: {_KIND_LABELS.get(outcome.kind, outcome.kind)} ({outcome.mode}) · "
        f"PCAs: {len(roster.pcas)} · RNs: {len(roster.rns)} · Rooms: {roster.assigned_room_count()}"
    )

    lines: List[str] = [header, counts_line, ""]

    lines.append("Leadership —")
    lines.append(f"Charge Nurse: {meta.charge_nurse or '—'}")
    lines.append(f"Resource RN: {meta.resource_rn or '—'}")
    lines.append(f"CTA: {meta.cta or '—'}")

    lines.append("")
    lines.append("PCAs —")
    if roster.pcas:
        for pca in roster.pcas:
            rooms = ", ".join(pca.rooms)
            lines.append(f"{pca.name} ({pca.count}) — {rooms}")
    else:
        lines.append("PCAs: 0 (none recognized)")

    lines.append("")
    lines.append("RNs —")
    if roster.rns:
        for rn in roster.rns:
            lines.extend(_format_rn(rn))
    else:
        lines.append("RNs: 0 (none recognized)")

    note_lines: List[str] = []
    seen_notes: set[str] = set()
    for note in [*outcome.warnings, *(notes or [])]:
        text = str(note).strip()
        if not text or text in seen_notes:
            continue
        note_lines.append(text)
        seen_notes.add(text)

    assigned = roster.assigned_room_count()
    if assigned < LOW_ROOM_COUNT:
        prompt = f"Low assigned room count ({assigned}); review against the sheet"
        if prompt not in seen_notes:
            note_lines.append(prompt)
            seen_notes.add(prompt)

    if note_lines:
        lines.append("")
        for text in note_lines:
            lines.append(f"Notes — {text}")

    lines.append("")
    generated_stamp = datetime.now(_CENTRAL).strftime("%m/%d/%Y %H:%M")
    lines.append(f"Generated: {generated_stamp} (Central)")

    return safe_write_text(out_path, "\n".join(lines))


def write_roster_json(roster: ParsedRoster, out_path: Path) -> Path:
    """Write ``roster`` in the shared camelCase contract to ``out_path``."""
    return safe_write_text(out_path, json.dumps(roster.to_dict(), indent=2))


def _format_rn(rn: RnEntry) -> List[str]:
    lines = [f"{rn.name} — {len(rn.rooms)} rooms"]
    for assignment in rn.rooms:
        lines.append(f"  {_format_room(assignment)}")
    return lines


def _format_room(assignment: RoomAssignment) -> str:
    parts = [assignment.room, assignment.level_of_care or "—"]
    if assignment.notes:
        parts.append(", ".join(assignment.notes))
    return " · ".join(parts)


__all__ = ["LOW_ROOM_COUNT", "write_roster_json", "write_roster_report"]
