from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader

from pdf_toolkit import ConversionError, ValidationError, image_to_pdf, images_to_pdf, text_to_pdf
from pdf_toolkit.types import InputFile


def _sizes(content: bytes) -> list[tuple[int, int]]:
    reader = PdfReader(BytesIO(content))
    return [(round(float(page.mediabox.width)), round(float(page.mediabox.height))) for page in reader.pages]


def test_png_to_pdf_uses_pixel_size(png_image: InputFile) -> None:
    output = image_to_pdf(png_image)
    assert output.name == "picture.pdf"
    assert _sizes(output.content) == [(40, 30)]


def test_jpeg_to_pdf(jpeg_image: InputFile) -> None:
    output = image_to_pdf(jpeg_image)
    assert output.name == "photo.pdf"
    assert _sizes(output.content) == [(64, 48)]


def test_unsupported_image_type(gif_image: InputFile) -> None:
    with pytest.raises(ConversionError, match="Please use JPEG or PNG"):
        image_to_pdf(gif_image)


def test_unreadable_image() -> None:
    with pytest.raises(ConversionError):
        image_to_pdf(InputFile(name="broken.png", content=b"garbage"))


def test_images_to_single_pdf(png_image: InputFile, jpeg_image: InputFile) -> None:
    output = images_to_pdf([png_image, jpeg_image], "album.pdf")
    assert output.name == "album.pdf"
    assert _sizes(output.content) == [(40, 30), (64, 48)]


def test_images_to_pdf_requires_input() -> None:
    with pytest.raises(ValidationError):
        images_to_pdf([])


def test_text_to_pdf_wraps_onto_pages() -> None:
    lines = "\n".join(f"Line number {i}" for i in range(120))
    output = text_to_pdf(InputFile(name="notes.txt", content=lines.encode("utf-8")))

    reader = PdfReader(BytesIO(output.content))
    assert output.name == "notes.pdf"
    assert len(reader.pages) > 1
    assert _sizes(output.content)[0] == (612, 792)
    assert "Line number 0" in reader.pages[0].extract_text()
    assert "Line number 119" in reader.pages[-1].extract_text()


def test_long_line_is_wrapped() -> None:
    text = "word " * 200
    output = text_to_pdf(InputFile(name="long.txt", content=text.encode("utf-8")))
    page_text = PdfReader(BytesIO(output.content)).pages[0].extract_text()
    assert len(page_text.splitlines()) > 1


def test_empty_text_still_produces_a_page() -> None:
    output = text_to_pdf(InputFile(name="empty.txt", content=b""))
    assert len(PdfReader(BytesIO(output.content)).pages) == 1
