from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_toolkit.types import InputFile  # noqa: E402

SAMPLE_PAGES = 10


def _page_width(index: int) -> int:
    return 200 + index


@pytest.fixture()
def page_width() -> Callable[[int], int]:
    """Width given to page ``index`` so tests can tell pages apart."""

    return _page_width


def _pdf_bytes(
    pages: int,
    *,
    title: str | None = None,
    password: str | None = None,
) -> bytes:
    writer = PdfWriter()
    for index in range(pages):
        writer.add_blank_page(width=_page_width(index), height=300)
    metadata = {"/Producer": "pdf-toolkit-tests"}
    if title is not None:
        metadata["/Title"] = title
    writer.add_metadata(metadata)
    if password is not None:
        writer.encrypt(password)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    return _pdf_bytes(SAMPLE_PAGES, title="Sample")


@pytest.fixture()
def sample_pdf(sample_pdf_bytes: bytes) -> InputFile:
    return InputFile(name="sample.pdf", content=sample_pdf_bytes)


@pytest.fixture()
def sample_pdf_path(tmp_path: Path, sample_pdf_bytes: bytes) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_bytes)
    return pdf_path


@pytest.fixture()
def encrypted_pdf() -> InputFile:
    return InputFile(name="locked.pdf", content=_pdf_bytes(3, title="Locked", password="secret"))


@pytest.fixture()
def empty_pdf() -> InputFile:
    buffer = BytesIO()
    PdfWriter().write(buffer)
    return InputFile(name="empty.pdf", content=buffer.getvalue())


@pytest.fixture()
def pdf_factory() -> Callable[..., InputFile]:
    def _create(filename: str, pages: int = 1, title: str | None = None) -> InputFile:
        return InputFile(name=filename, content=_pdf_bytes(pages, title=title))

    return _create


@pytest.fixture()
def sample_pdfs(pdf_factory: Callable[..., InputFile]) -> list[InputFile]:
    return [
        pdf_factory("one.pdf", pages=2, title="Document One"),
        pdf_factory("two.pdf", pages=3),
    ]


def _image_bytes(fmt: str, size: tuple[int, int], mode: str) -> bytes:
    buffer = BytesIO()
    Image.new(mode, size, color="red" if mode == "RGB" else (255, 0, 0, 128)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture()
def png_image() -> InputFile:
    return InputFile(name="picture.png", content=_image_bytes("PNG", (40, 30), "RGBA"))


@pytest.fixture()
def jpeg_image() -> InputFile:
    return InputFile(name="photo.jpg", content=_image_bytes("JPEG", (64, 48), "RGB"))


@pytest.fixture()
def gif_image() -> InputFile:
    return InputFile(name="anim.gif", content=_image_bytes("GIF", (10, 10), "RGB"))
