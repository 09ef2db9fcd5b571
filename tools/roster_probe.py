from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rosterscan.scan.anchors import find_rn_anchors
from rosterscan.scan.bands import assign_rooms_to_bands, build_room_tokens, compute_band_ranges
from rosterscan.scan.geometry import OcrResult
from rosterscan.scan.layout import DEFAULT_LAYOUT_NAME, load_layout
from rosterscan.sources import load_source


def main() -> None:
    ap = argparse.ArgumentParser(description="Print RN anchors, bands and room tokens for one sheet")
    ap.add_argument("path", help="PDF or image of an assignment sheet")
    ap.add_argument("--page", type=int, default=1, help="1-based PDF page")
    ap.add_argument("--layout", default=DEFAULT_LAYOUT_NAME, help="Layout preset name or JSON path")
    ap.add_argument("--force-ocr", action="store_true", help="OCR even when a text layer exists")
    args = ap.parse_args()

    path = Path(args.path).expanduser()
    if not path.is_file():
        print(f"[SKIP] input not found: {path}")
        sys.exit(0)

    config = load_layout(args.layout)
    source = load_source(path, page_number=args.page, force_ocr=args.force_ocr)
    if not isinstance(source, OcrResult) or not source.width or not source.height:
        print(f"[SKIP] no word geometry for {path.name}")
        sys.exit(0)

    width, height = source.width, source.height
    print(f"[PAGE] {path.name} source={source.source} size={width:.0f}x{height:.0f} words={len(source.words)}")

    anchors = find_rn_anchors(source.words, width, height, config)
    for anchor in anchors:
        print(f"[ANCHOR] {anchor.name!r} cx={anchor.cx:.1f} cy={anchor.cy:.1f}")

    floor = height * config.rn_room_min_y_ratio
    tokens = [token for token in build_room_tokens(source.words, config.grammar) if token.word.y0 >= floor]
    print(f"[ROOMS] {len(tokens)} tokens below y={floor:.0f}")

    bands = compute_band_ranges(anchors, width)
    buckets = assign_rooms_to_bands(tokens, bands)
    for index, band in enumerate(bands):
        rooms = ", ".join(token.room for token in buckets.get(index, []))
        print(f"[BAND] {band.name!r} [{band.left:.0f}, {band.right:.0f}) -> {rooms or '-'}")
    if not anchors:
        print("[FALLBACK] no anchors; rooms go to a single RN bucket")


if __name__ == "__main__":
    main()
