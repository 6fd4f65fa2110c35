"""Conversion of images and plain text into PDF documents."""

from __future__ import annotations

import io
from pathlib import PurePath
from typing import List, Sequence

from PIL import Image, UnidentifiedImageError
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from .exceptions import ConversionError, ValidationError
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.convert")

SUPPORTED_IMAGE_FORMATS = {"JPEG", "PNG"}
IMAGE_RESOLUTION = 72.0

TEXT_FONT = "Helvetica"
TEXT_FONT_SIZE = 11
TEXT_LEADING = 14
TEXT_MARGIN = 72


def _stem(name: str) -> str:
    return PurePath(name).stem or name


def _open_image(source: InputFile) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(source.content))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ConversionError(
            f"Could not read image '{source.name}'. Please use JPEG or PNG."
        ) from exc
    if image.format not in SUPPORTED_IMAGE_FORMATS:
        raise ConversionError("Unsupported image type. Please use JPEG or PNG.")
    # The PDF encoder cannot store alpha or palette data.
    if image.mode != "RGB":
        image = image.convert("RGB")
    return image


def _save_images(images: List[Image.Image]) -> bytes:
    buffer = io.BytesIO()
    first, rest = images[0], images[1:]
    first.save(
        buffer,
        format="PDF",
        resolution=IMAGE_RESOLUTION,
        save_all=bool(rest),
        append_images=rest,
    )
    return buffer.getvalue()


def image_to_pdf(source: InputFile) -> OutputDocument:
    """Place a JPEG or PNG image on a single page of the image's pixel size."""

    image = _open_image(source)
    LOGGER.debug("Converting %s (%dx%d) to PDF", source.name, image.width, image.height)
    return OutputDocument(name=f"{_stem(source.name)}.pdf", content=_save_images([image]))


def images_to_pdf(sources: Sequence[InputFile], output_name: str = "images.pdf") -> OutputDocument:
    """Combine several images into one document, one page per image."""

    if not sources:
        raise ValidationError("Please select at least one image to convert.")
    images = [_open_image(source) for source in sources]
    LOGGER.debug("Combining %d image(s) into %s", len(images), output_name)
    return OutputDocument(name=output_name, content=_save_images(images))


def text_to_pdf(source: InputFile, encoding: str = "utf-8") -> OutputDocument:
    """Wrap the lines of a plain text file onto Letter pages."""

    text = source.content.decode(encoding, errors="replace")
    width, height = letter
    max_width = width - 2 * TEXT_MARGIN

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=letter)
    c.setTitle(_stem(source.name))
    c.setFont(TEXT_FONT, TEXT_FONT_SIZE)
    y = height - TEXT_MARGIN
    pages = 1

    for paragraph in text.splitlines():
        lines = simpleSplit(paragraph.expandtabs(4), TEXT_FONT, TEXT_FONT_SIZE, max_width) or [""]
        for line in lines:
            if y < TEXT_MARGIN:
                c.showPage()
                c.setFont(TEXT_FONT, TEXT_FONT_SIZE)
                y = height - TEXT_MARGIN
                pages += 1
            c.drawString(TEXT_MARGIN, y, line)
            y -= TEXT_LEADING

    c.save()
    LOGGER.debug("Converted %s to %d page(s) of text", source.name, pages)
    return OutputDocument(name=f"{_stem(source.name)}.pdf", content=buffer.getvalue())


__all__ = ["image_to_pdf", "images_to_pdf", "text_to_pdf", "SUPPORTED_IMAGE_FORMATS"]
