"""Band partition and room assignment tests."""

from __future__ import annotations

import random
import unittest

from rosterscan.scan.anchors import NameAnchor
from rosterscan.scan.bands import (
    RoomToken,
    assign_rooms_to_bands,
    band_index_for,
    build_room_tokens,
    compute_band_ranges,
)
from rosterscan.scan.geometry import make_word


def _anchor(name: str, cx: float) -> NameAnchor:
    return NameAnchor(name=name, cx=cx, cy=500.0)


def _room(text: str, cx: float, y0: float = 600.0) -> RoomToken:
    tokens = build_room_tokens([make_word(text, cx - 20, y0, cx + 20, y0 + 12)])
    assert tokens, text
    return tokens[0]


class BandRangeTests(unittest.TestCase):
    def test_two_anchor_scenario(self) -> None:
        bands = compute_band_ranges([_anchor("Kim Lee", 100.0), _anchor("Dana Park", 500.0)], 800.0)

        self.assertEqual([(band.left, band.right) for band in bands], [(0.0, 300.0), (300.0, 800.0)])
        self.assertEqual(band_index_for(250.0, bands), 0)
        self.assertEqual(band_index_for(650.0, bands), 1)
        self.assertEqual(band_index_for(300.0, bands), 1)
        self.assertEqual(band_index_for(800.0, bands), -1)

    def test_single_anchor_spans_page(self) -> None:
        bands = compute_band_ranges([_anchor("Jordan", 320.0)], 640.0)
        self.assertEqual([(band.left, band.right) for band in bands], [(0.0, 640.0)])
        self.assertEqual(bands[0].name, "Jordan")

    def test_bands_tile_the_page_for_random_anchor_sets(self) -> None:
        rng = random.Random(1412)
        for _ in range(200):
            width = rng.uniform(200.0, 3000.0)
            count = rng.randint(1, 10)
            centers = sorted(rng.uniform(0.0, width) for _ in range(count))
            bands = compute_band_ranges([_anchor(f"Nurse {index}", cx) for index, cx in enumerate(centers)], width)

            self.assertEqual(len(bands), count)
            self.assertEqual(bands[0].left, 0.0)
            self.assertEqual(bands[-1].right, width)
            for current, following in zip(bands, bands[1:]):
                self.assertEqual(current.right, following.left)

    def test_no_anchors_no_bands(self) -> None:
        self.assertEqual(compute_band_ranges([], 800.0), [])


class RoomAssignmentTests(unittest.TestCase):
    def test_rooms_follow_their_band_and_dedupe_per_band(self) -> None:
        bands = compute_band_ranges([_anchor("Kim Lee", 100.0), _anchor("Dana Park", 500.0)], 800.0)
        tokens = [
            _room("205", 250.0),
            _room("214B", 650.0),
            _room("2O5", 120.0, y0=700.0),
            _room("2I6", 320.0),
        ]
        buckets = assign_rooms_to_bands(tokens, bands)

        self.assertEqual(sorted(buckets), [0, 1])
        self.assertEqual([token.room for token in buckets[0]], ["205"])
        self.assertEqual(buckets[0][0].cx, 250.0)
        self.assertEqual([token.room for token in buckets[1]], ["214B", "216"])

    def test_empty_bands_are_present(self) -> None:
        bands = compute_band_ranges([_anchor("Kim Lee", 100.0), _anchor("Dana Park", 500.0)], 800.0)
        buckets = assign_rooms_to_bands([_room("205", 650.0)], bands)
        self.assertEqual(buckets[0], [])
        self.assertEqual(len(buckets[1]), 1)

    def test_build_room_tokens_skips_non_rooms(self) -> None:
        words = [
            make_word("Kim", 0, 0, 10, 10),
            make_word("229", 0, 0, 10, 10),
            make_word("2148", 0, 0, 10, 10),
            make_word("2L0A", 0, 0, 10, 10),
        ]
        self.assertEqual([token.room for token in build_room_tokens(words)], ["214B", "210A"])
