"""Image preprocessing and Tesseract adapter tests (Tesseract mocked)."""

from __future__ import annotations

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import mock

from PIL import Image

from rosterscan.sources import load_source
from rosterscan.sources.ocr import prepare_image, run_ocr, words_from_tesseract


def _tesseract_data() -> dict:
    return {
        "text": ["", "Charge", "Nurse:", "Alice", "205", "Tele", "  "],
        "left": [0, 10, 80, 150, 40, 90, 0],
        "top": [0, 12, 12, 12, 400, 401, 0],
        "width": [0, 60, 60, 50, 36, 40, 0],
        "height": [0, 14, 14, 14, 14, 14, 0],
        "conf": [-1, 95.5, 91, "88", 90, -1, -1],
        "block_num": [0, 1, 1, 1, 2, 2, 2],
        "par_num": [0, 1, 1, 1, 1, 1, 1],
        "line_num": [0, 1, 1, 1, 1, 1, 1],
    }


class PrepareImageTests(unittest.TestCase):
    def test_small_images_are_upscaled_and_binarized(self) -> None:
        image = Image.new("RGB", (800, 600), (200, 200, 200))
        prepared = prepare_image(image, min_width=1600, sharpen=False)

        self.assertEqual(prepared.size, (1600, 1200))
        self.assertEqual(prepared.mode, "L")
        self.assertEqual(set(prepared.getdata()), {255})

    def test_threshold_splits_dark_and_light(self) -> None:
        image = Image.new("L", (100, 10), 250)
        image.paste(40, (0, 0, 50, 10))
        prepared = prepare_image(image, min_width=0, threshold=160, sharpen=False)

        self.assertEqual(prepared.getpixel((10, 5)), 0)
        self.assertEqual(prepared.getpixel((90, 5)), 255)

    def test_wide_images_keep_size_with_sharpen(self) -> None:
        image = Image.new("RGB", (3400, 100), (255, 255, 255))
        self.assertEqual(prepare_image(image).size, (3400, 100))


class RunOcrTests(unittest.TestCase):
    def test_words_from_tesseract_skip_blanks_and_group_lines(self) -> None:
        words, text = words_from_tesseract(_tesseract_data())

        self.assertEqual([word.text for word in words], ["Charge", "Nurse:", "Alice", "205", "Tele"])
        self.assertEqual(words[0].bbox, (10.0, 12.0, 70.0, 26.0))
        self.assertEqual(words[0].confidence, 95.5)
        self.assertEqual(words[2].confidence, 88.0)
        self.assertIsNone(words[4].confidence)
        self.assertEqual(text, "Charge Nurse: Alice\n205 Tele")

    def test_run_ocr_uses_processed_image_space(self) -> None:
        image = Image.new("RGB", (1000, 500), (255, 255, 255))
        with mock.patch("rosterscan.sources.ocr.pytesseract.image_to_data", return_value=_tesseract_data()) as call:
            result = run_ocr(image, min_width=2000)

        self.assertEqual(result.source, "ocr")
        self.assertEqual((result.width, result.height), (2000.0, 1000.0))
        self.assertEqual(len(result.words), 5)
        _args, kwargs = call.call_args
        self.assertEqual(kwargs["config"], "--psm 6")
        self.assertEqual(call.call_args[0][0].size, (2000, 1000))

    def test_missing_image_path(self) -> None:
        with self.assertRaises(FileNotFoundError):
            run_ocr(Path("/nonexistent/sheet.png"))

    def test_load_source_routes_images_to_ocr(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "sheet.png"
            Image.new("RGB", (400, 300), (255, 255, 255)).save(path)
            with mock.patch("rosterscan.sources.ocr.pytesseract.image_to_data", return_value=_tesseract_data()):
                result = load_source(path)

        self.assertEqual(result.source, "ocr")
        self.assertEqual(result.width, 3200.0)
        self.assertEqual(result.text.splitlines()[0], "Charge Nurse: Alice")

    def test_load_source_text_and_unsupported(self) -> None:
        with TemporaryDirectory() as tmp:
            text_path = Path(tmp) / "sheet.txt"
            text_path.write_text("Charge Nurse: Smith 205", encoding="utf-8")
            self.assertEqual(load_source(text_path), "Charge Nurse: Smith 205")

            other = Path(tmp) / "sheet.docx"
            other.write_bytes(b"PK")
            with self.assertRaises(ValueError):
                load_source(other)
            with self.assertRaises(FileNotFoundError):
                load_source(Path(tmp) / "missing.pdf")
