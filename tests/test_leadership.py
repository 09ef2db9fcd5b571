"""Leadership and header label tests."""

from __future__ import annotations

import unittest

from rosterscan.scan.leadership import parse_date_label, parse_leadership, parse_unit_label


class LeadershipTests(unittest.TestCase):
    def test_adjacent_labels_do_not_swallow_each_other(self) -> None:
        leadership = parse_leadership("Charge Nurse: Smith Clinical Mentor: Lee CTA: Jones")
        self.assertEqual(leadership.charge_nurse, "Smith")
        self.assertEqual(leadership.resource_rn, "Lee")
        self.assertEqual(leadership.cta, "Jones")

    def test_label_punctuation_and_case_are_tolerated(self) -> None:
        text = "CHARGE-NURSE - Alice Smith\nclinical.mentor Jo Ann Kim\nCTA:Pat"
        leadership = parse_leadership(text)
        self.assertEqual(leadership.charge_nurse, "Alice Smith")
        self.assertEqual(leadership.resource_rn, "Jo Ann Kim")
        self.assertEqual(leadership.cta, "Pat")

    def test_mentor_alone_is_resource_rn(self) -> None:
        self.assertEqual(parse_leadership("Mentor: Dana Park").resource_rn, "Dana Park")

    def test_missing_labels_are_none(self) -> None:
        leadership = parse_leadership("205 Tele 206 MS")
        self.assertIsNone(leadership.charge_nurse)
        self.assertIsNone(leadership.resource_rn)
        self.assertIsNone(leadership.cta)
        self.assertIsNone(parse_leadership("").cta)

    def test_label_followed_only_by_stop_word(self) -> None:
        self.assertIsNone(parse_leadership("Charge Nurse: RN").charge_nurse)


class HeaderLabelTests(unittest.TestCase):
    def test_configured_unit_label(self) -> None:
        self.assertEqual(parse_unit_label("2  south assignments", ("2 South",)), "2 South")

    def test_explicit_unit_field(self) -> None:
        self.assertEqual(parse_unit_label("Unit: 4 West\nCharge Nurse: Kim", ()), "4 West")
        self.assertIsNone(parse_unit_label("no unit here", ("2 South",)))

    def test_date_formats(self) -> None:
        self.assertEqual(parse_date_label("Sheet 3/14/2025 Days"), "3/14/2025")
        self.assertEqual(parse_date_label("Sheet 2025-03-14"), "2025-03-14")
        self.assertEqual(parse_date_label("March 14, 2025 nights"), "March 14, 2025")
        self.assertIsNone(parse_date_label("Room 214B"))
