"""Tesseract OCR for photographed or rasterized assignment sheets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import pytesseract
from PIL import Image, ImageFilter, ImageOps

from rosterscan.scan.geometry import OcrResult, Word, make_word

LOGGER = logging.getLogger(__name__)

ImageSource = Union[str, Path, Image.Image]

DEFAULT_MIN_WIDTH = 3200
DEFAULT_THRESHOLD = 160
DEFAULT_PSM = 6
OCR_LANG = "eng"

# 3x3 sharpen: [0 -1 0; -1 5 -1; 0 -1 0]
_SHARPEN_KERNEL = ImageFilter.Kernel((3, 3), (0, -1, 0, -1, 5, -1, 0, -1, 0), scale=1, offset=0)


def load_image(source: ImageSource) -> Image.Image:
    if isinstance(source, Image.Image):
        return source
    path = Path(source).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")
    with Image.open(path) as handle:
        handle.load()
        # phone photos carry their rotation in EXIF
        return ImageOps.exif_transpose(handle)


def ensure_min_width(image: Image.Image, min_width: int = DEFAULT_MIN_WIDTH) -> Image.Image:
    """Upscale ``image`` so that small table text survives binarization."""

    if not min_width or image.width >= min_width:
        return image
    scale = min_width / float(image.width)
    size = (round(image.width * scale), round(image.height * scale))
    return image.resize(size, Image.Resampling.LANCZOS)


def binarize(image: Image.Image, threshold: int = DEFAULT_THRESHOLD) -> Image.Image:
    gray = ImageOps.grayscale(image)
    return gray.point(lambda value: 255 if value >= threshold else 0)


def prepare_image(
    image: Image.Image,
    *,
    min_width: int = DEFAULT_MIN_WIDTH,
    threshold: int = DEFAULT_THRESHOLD,
    sharpen: bool = True,
) -> Image.Image:
    """Upscale, grayscale + threshold, then optionally sharpen ``image``."""

    prepared = binarize(ensure_min_width(image.convert("RGB"), min_width), threshold)
    if sharpen:
        prepared = prepared.filter(_SHARPEN_KERNEL)
    return prepared


def words_from_tesseract(data: Dict[str, List[Any]]) -> Tuple[List[Word], str]:
    """Return words and line-joined text from ``pytesseract.image_to_data`` output."""

    words: List[Word] = []
    lines: List[str] = []
    current_key = None
    current: List[str] = []

    texts = data.get("text", [])
    for index, raw in enumerate(texts):
        text = str(raw or "").strip()
        if not text:
            continue
        try:
            left = float(data["left"][index])
            top = float(data["top"][index])
            width = float(data["width"][index])
            height = float(data["height"][index])
        except (KeyError, IndexError, TypeError, ValueError):
            continue
        try:
            confidence = float(data.get("conf", [])[index])
        except (IndexError, TypeError, ValueError):
            confidence = None
        if confidence is not None and confidence < 0:
            confidence = None

        words.append(make_word(text, left, top, left + width, top + height, confidence=confidence))

        line_key = (
            data.get("block_num", [0] * len(texts))[index],
            data.get("par_num", [0] * len(texts))[index],
            data.get("line_num", [0] * len(texts))[index],
        )
        if line_key != current_key and current:
            lines.append(" ".join(current))
            current = []
        current_key = line_key
        current.append(text)

    if current:
        lines.append(" ".join(current))
    return words, "\n".join(lines)


def run_ocr(
    source: ImageSource,
    *,
    min_width: int = DEFAULT_MIN_WIDTH,
    threshold: int = DEFAULT_THRESHOLD,
    sharpen: bool = True,
    psm: int = DEFAULT_PSM,
) -> OcrResult:
    """
    OCR ``source`` and return words in the processed image's pixel space.

    ``width``/``height`` are the dimensions of the upscaled image so that the
    returned bounding boxes and page size share one coordinate space.
    """

    image = prepare_image(load_image(source), min_width=min_width, threshold=threshold, sharpen=sharpen)
    LOGGER.info("OCR start: %dx%d psm=%d", image.width, image.height, psm)

    data = pytesseract.image_to_data(
        image,
        lang=OCR_LANG,
        config=f"--psm {psm}",
        output_type=pytesseract.Output.DICT,
    )
    words, text = words_from_tesseract(data)
    LOGGER.info("OCR complete: words=%d chars=%d", len(words), len(text))
    return OcrResult(
        text=text,
        words=words,
        width=float(image.width),
        height=float(image.height),
        source="ocr",
    )


__all__ = [
    "DEFAULT_MIN_WIDTH",
    "DEFAULT_PSM",
    "DEFAULT_THRESHOLD",
    "binarize",
    "ensure_min_width",
    "load_image",
    "prepare_image",
    "run_ocr",
    "words_from_tesseract",
]
