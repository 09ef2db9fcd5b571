"""Word sources that feed the roster scan parser."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from rosterscan.scan.geometry import OcrResult

LOGGER = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".gif", ".webp"})
TEXT_SUFFIXES = frozenset({".txt", ".text"})


def load_source(
    path: Union[str, Path],
    *,
    page_number: int = 1,
    force_ocr: bool = False,
) -> Union[OcrResult, str]:
    """
    Return parser input for ``path``.

    PDFs use the text layer when the page has one (unless ``force_ocr``) and
    fall back to rendering + OCR. Images are OCR'd; text files are returned as
    plain strings for the text-only parse path.
    """

    source = Path(path).expanduser()
    if not source.exists():
        raise FileNotFoundError(f"Input not found: {source}")

    suffix = source.suffix.lower()
    if suffix in TEXT_SUFFIXES:
        return source.read_text(encoding="utf-8", errors="replace")

    from rosterscan.sources import ocr

    if suffix == ".pdf":
        from rosterscan.sources import pdf_text

        if not force_ocr and pdf_text.page_has_text_layer(source, page_number):
            LOGGER.info("Using PDF text layer: %s (page %d)", source.name, page_number)
            return pdf_text.extract_pdf_words(source, page_number)
        LOGGER.info("Rendering PDF page for OCR: %s (page %d)", source.name, page_number)
        return ocr.run_ocr(pdf_text.render_page_image(source, page_number))

    if suffix in IMAGE_SUFFIXES:
        return ocr.run_ocr(source)

    raise ValueError(f"Unsupported input type: {source.suffix or source.name}")


__all__ = ["IMAGE_SUFFIXES", "TEXT_SUFFIXES", "load_source"]
