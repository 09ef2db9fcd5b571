"""TXT/JSON roster report writer tests."""

from __future__ import annotations

import json
import re
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from rosterscan import parse_outcome
from rosterscan.report.txt_writer import LOW_ROOM_COUNT, write_roster_json, write_roster_report

from .fixtures.synth import full_sheet_payload


class TxtWriterTests(unittest.TestCase):
    def test_report_sections_and_order(self) -> None:
        outcome = parse_outcome(full_sheet_payload())
        with TemporaryDirectory() as tmp:
            out_path = Path(tmp) / "nested" / "roster.txt"
            written = write_roster_report(outcome, "sheet.pdf", out_path, notes=["Checked by night shift"])
            lines = written.read_text(encoding="utf-8").splitlines()

        self.assertEqual(lines[0], "3/14/2025 · 2 South · Source: sheet.pdf")
        self.assertEqual(lines[1], "Parse: Full layout (words) · PCAs: 2 · RNs: 2 · Rooms: 4")
        self.assertIn("Charge Nurse: Alice Smith", lines)
        self.assertIn("Resource RN: —", lines)
        self.assertIn("Bob Chen (2) — 210, 211", lines)
        self.assertIn("Kim Lee — 2 rooms", lines)
        self.assertIn("  205 · Tele · ISO, BG, TELE", lines)
        self.assertIn("  214B · — · SITTER", lines)
        self.assertIn("  215 · MS", lines)
        self.assertLess(lines.index("PCAs —"), lines.index("RNs —"))
        self.assertIn("Notes — Checked by night shift", lines)
        self.assertIn("Notes — Low assigned room count (4); review against the sheet", lines)
        self.assertRegex(lines[-1], re.compile(r"^Generated: \d{2}/\d{2}/\d{4} \d{2}:\d{2} \(Central\)$"))

    def test_warnings_become_notes_once(self) -> None:
        outcome = parse_outcome("Charge Nurse: Smith")
        outcome.warnings.append(outcome.warnings[0])
        with TemporaryDirectory() as tmp:
            lines = write_roster_report(outcome, "sheet.txt", Path(tmp) / "r.txt").read_text(encoding="utf-8").splitlines()

        note_lines = [line for line in lines if line.startswith("Notes — ")]
        self.assertEqual(len(note_lines), len(set(note_lines)))
        self.assertIn("PCAs: 0 (none recognized)", lines)
        self.assertIn("RNs: 0 (none recognized)", lines)
        self.assertEqual(lines[0], "Date unknown · Unit unknown · Source: sheet.txt")

    def test_no_low_count_prompt_for_full_rosters(self) -> None:
        rooms = " ".join(str(200 + index) for index in range(LOW_ROOM_COUNT))
        outcome = parse_outcome(rooms)
        with TemporaryDirectory() as tmp:
            text = write_roster_report(outcome, "sheet.txt", Path(tmp) / "r.txt").read_text(encoding="utf-8")
        self.assertNotIn("Low assigned room count", text)

    def test_json_contract(self) -> None:
        outcome = parse_outcome(full_sheet_payload())
        with TemporaryDirectory() as tmp:
            path = write_roster_json(outcome.roster, Path(tmp) / "roster.json")
            payload = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual(set(payload), {"meta", "pcas", "rns"})
        self.assertEqual(payload["meta"]["chargeNurse"], "Alice Smith")
        self.assertEqual(payload["rns"][1]["rooms"][0], {"room": "214B", "levelOfCare": None, "notes": ["SITTER"]})
