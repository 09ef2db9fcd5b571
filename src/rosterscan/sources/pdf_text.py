"""PyMuPDF word extraction for assignment sheets exported as PDF."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple, Union

import fitz  # PyMuPDF
from PIL import Image

from rosterscan.scan.geometry import OcrResult, Word, make_word

LOGGER = logging.getLogger(__name__)

DocumentLike = Union[str, Path, "fitz.Document"]

_MIN_TEXT_LAYER_WORDS = 12
_RENDER_SCALE = 2.75


def canonical_matrix(page: "fitz.Page", scale: float = 1.0) -> "fitz.Matrix":
    """Return the matrix that derotates + scales ``page`` into top-left origin coordinates."""

    rotation_scale = fitz.Matrix(scale, scale).prerotate(-page.rotation)
    rotated_rect = fitz.Rect(page.rect) * rotation_scale
    rotation_scale.e -= rotated_rect.x0
    rotation_scale.f -= rotated_rect.y0
    return rotation_scale


@contextmanager
def _open_document(source: DocumentLike) -> Iterator["fitz.Document"]:
    if isinstance(source, fitz.Document):
        yield source
        return
    path = Path(source).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"PDF file not found: {path}")
    doc = fitz.open(str(path))
    try:
        yield doc
    finally:
        doc.close()


def _load_page(doc: "fitz.Document", page_number: int) -> "fitz.Page":
    if page_number < 1 or page_number > doc.page_count:
        raise ValueError(f"page_number {page_number} out of range (document has {doc.page_count} pages)")
    return doc.load_page(page_number - 1)


def _page_words(page: "fitz.Page", matrix: "fitz.Matrix", width: float, height: float) -> List[Tuple[Word, Tuple[int, int]]]:
    try:
        raw_words = page.get_text("words", clip=page.rect)
    except RuntimeError:
        return []

    words: List[Tuple[Word, Tuple[int, int]]] = []
    for entry in raw_words:
        if len(entry) < 7:
            continue
        text = str(entry[4])
        if not text.strip():
            continue
        x0, y0, x1, y1 = map(float, entry[0:4])
        corners = [fitz.Point(x0, y0), fitz.Point(x1, y0), fitz.Point(x0, y1), fitz.Point(x1, y1)]
        transformed = [point * matrix for point in corners]
        xs = [point.x for point in transformed]
        ys = [point.y for point in transformed]
        word = make_word(
            text,
            max(0.0, min(xs)),
            max(0.0, min(ys)),
            min(width, max(xs)),
            min(height, max(ys)),
        )
        words.append((word, (int(entry[5]), int(entry[6]))))
    return words


def extract_pdf_words(source: DocumentLike, page_number: int = 1, *, scale: float = 1.0) -> OcrResult:
    """
    Return the text-layer words of one PDF page as an :class:`OcrResult`.

    Coordinates are derotated so the origin is the visual top-left corner;
    ``width``/``height`` describe the same space. ``text`` joins words per
    PyMuPDF line so the leadership labels read naturally.
    """

    with _open_document(source) as doc:
        page = _load_page(doc, page_number)
        matrix = canonical_matrix(page, scale=scale)
        derotated = fitz.Rect(page.rect) * matrix
        width = float(derotated.width)
        height = float(derotated.height)
        entries = _page_words(page, matrix, width, height)

    lines: List[str] = []
    current_key = None
    current: List[str] = []
    for word, line_key in entries:
        if line_key != current_key and current:
            lines.append(" ".join(current))
            current = []
        current_key = line_key
        current.append(word.text)
    if current:
        lines.append(" ".join(current))

    LOGGER.debug("PDF text layer: page=%d words=%d size=%.0fx%.0f", page_number, len(entries), width, height)
    return OcrResult(
        text="\n".join(lines),
        words=[word for word, _key in entries],
        width=width,
        height=height,
        source="pdf-text",
    )


def page_has_text_layer(source: DocumentLike, page_number: int = 1, min_words: int = _MIN_TEXT_LAYER_WORDS) -> bool:
    """Return ``True`` when the page carries enough text-layer words to skip OCR."""

    with _open_document(source) as doc:
        page = _load_page(doc, page_number)
        try:
            count = len(page.get_text("words"))
        except RuntimeError:
            count = 0
    return count >= min_words


def render_page_image(source: DocumentLike, page_number: int = 1, scale: float = _RENDER_SCALE) -> Image.Image:
    """Render one page to an RGB Pillow image for OCR."""

    with _open_document(source) as doc:
        page = _load_page(doc, page_number)
        pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        return Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)


__all__ = ["canonical_matrix", "extract_pdf_words", "page_has_text_layer", "render_page_image"]
