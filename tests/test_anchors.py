"""RN name-anchor detection tests."""

from __future__ import annotations

import unittest

from rosterscan.scan.anchors import find_rn_anchors
from rosterscan.scan.geometry import make_word
from rosterscan.scan.layout import LayoutConfig
from rosterscan.scan.parser import coerce_words

from .fixtures.synth import PAGE_HEIGHT, PAGE_WIDTH, full_sheet_words


class AnchorDetectionTests(unittest.TestCase):
    def test_synthetic_sheet_anchors(self) -> None:
        anchors = find_rn_anchors(coerce_words(full_sheet_words()), PAGE_WIDTH, PAGE_HEIGHT)

        self.assertEqual([anchor.name for anchor in anchors], ["Kim Lee", "Dana Park"])
        self.assertAlmostEqual(anchors[0].cx, 102.5)
        self.assertAlmostEqual(anchors[1].cx, 400.5)
        self.assertAlmostEqual(anchors[0].cy, 506.0)

    def test_words_outside_rn_region_are_ignored(self) -> None:
        words = [
            make_word("Alice", 60, 100, 100, 112),  # above the RN grid
            make_word("Smith", 105, 100, 150, 112),
            make_word("Jordan", 600, 500, 660, 512),  # right of the anchor column
            make_word("Taylor", 60, 980, 120, 992),  # below the grid
        ]
        self.assertEqual(find_rn_anchors(words, PAGE_WIDTH, PAGE_HEIGHT), [])

    def test_stacked_names_in_one_column_stay_separate(self) -> None:
        words = [
            make_word("Kim", 70, 500, 100, 512),
            make_word("Lee", 105, 500, 135, 512),
            make_word("Jordan", 75, 700, 130, 712),
        ]
        anchors = find_rn_anchors(words, PAGE_WIDTH, PAGE_HEIGHT)
        self.assertEqual(sorted(anchor.name for anchor in anchors), ["Jordan", "Kim Lee"])

    def test_parenthesized_code_follows_first_two_tokens(self) -> None:
        words = [
            make_word("(AJ)", 124, 500, 140, 512),
            make_word("Kim", 70, 500, 100, 512),
            make_word("Lee", 102, 500, 122, 512),
        ]
        anchors = find_rn_anchors(words, PAGE_WIDTH, PAGE_HEIGHT)
        self.assertEqual([anchor.name for anchor in anchors], ["Kim Lee (AJ)"])

    def test_short_single_tokens_are_not_anchors(self) -> None:
        words = [make_word("AB", 70, 500, 95, 512), make_word("RN", 370, 500, 395, 512)]
        self.assertEqual(find_rn_anchors(words, PAGE_WIDTH, PAGE_HEIGHT), [])

    def test_anchor_cap(self) -> None:
        # single long-name tokens spaced beyond the column tolerance
        words = [make_word(f"Nurse{chr(65 + index)}xx", 10 + index * 60, 500, 40 + index * 60, 512) for index in range(6)]
        config = LayoutConfig(max_anchors=3)
        anchors = find_rn_anchors(words, PAGE_WIDTH, PAGE_HEIGHT, config)
        self.assertEqual(len(anchors), 3)
        self.assertEqual([anchor.cx for anchor in anchors], sorted(anchor.cx for anchor in anchors))
