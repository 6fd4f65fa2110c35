from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image
from pypdf import PdfReader, PdfWriter

from pdf_toolkit import ValidationError, compress_pdf, get_compression_info
from pdf_toolkit.config import COMPRESSION_LEVELS, compression_level
from pdf_toolkit.types import InputFile


@pytest.fixture()
def image_pdf() -> InputFile:
    image = Image.new("RGB", (400, 300), color=(30, 120, 200))
    buffer = BytesIO()
    image.save(buffer, format="PDF", resolution=72.0)

    writer = PdfWriter()
    writer.append(PdfReader(BytesIO(buffer.getvalue())))
    writer.add_metadata({"/Title": "Pictures"})
    output = BytesIO()
    writer.write(output)
    return InputFile(name="pictures.pdf", content=output.getvalue())


def test_compress_keeps_pages_and_metadata(sample_pdf: InputFile) -> None:
    result = compress_pdf(sample_pdf)

    reader = PdfReader(BytesIO(result.output.content))
    assert result.output.name == "sample_compressed_recommended.pdf"
    assert result.level == "recommended"
    assert len(reader.pages) == 10
    assert reader.metadata.get("/Title") == "Sample"
    assert result.original_size == sample_pdf.size
    assert result.compressed_size == result.output.size


@pytest.mark.parametrize("level", ["extreme", "minimal", "EXTREME"])
def test_compress_levels(image_pdf: InputFile, level: str) -> None:
    result = compress_pdf(image_pdf, level)
    assert result.level == level.lower()
    assert len(PdfReader(BytesIO(result.output.content)).pages) == 1


def test_compress_rejects_unknown_level(sample_pdf: InputFile) -> None:
    with pytest.raises(ValidationError, match="Unknown compression level"):
        compress_pdf(sample_pdf, "maximum")


def test_compression_result_statistics(sample_pdf: InputFile) -> None:
    result = compress_pdf(sample_pdf, "minimal")
    assert result.bytes_saved == max(result.original_size - result.compressed_size, 0)
    assert result.compression_ratio == pytest.approx(result.compressed_size / result.original_size)
    assert result.reduction_percent == round((1 - result.compression_ratio) * 100, 1)


def test_compression_info_estimates_every_preset(sample_pdf: InputFile) -> None:
    info = get_compression_info(sample_pdf)
    assert info.original_size == sample_pdf.size
    assert set(info.estimated_sizes) == set(COMPRESSION_LEVELS)
    assert info.estimated_sizes["extreme"] < info.estimated_sizes["recommended"] < info.estimated_sizes["minimal"]
    assert compression_level("Minimal").image_quality == 90
