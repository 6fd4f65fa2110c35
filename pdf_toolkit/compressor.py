"""Compression engine for PDF Toolkit."""

from __future__ import annotations

import dataclasses
from typing import Dict, Optional

from .backends.base import PDFBackend
from .config import DEFAULT_COMPRESSION_LEVEL, COMPRESSION_LEVELS, CompressionLevel, compression_level
from .document import PDFDocumentAdapter
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.compress")


@dataclasses.dataclass
class CompressionResult:
    """Represents the outcome of a compression run."""

    output: OutputDocument
    level: str
    original_size: int
    compressed_size: int

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size

    @property
    def reduction_percent(self) -> float:
        return round((1.0 - self.compression_ratio) * 100, 1)


@dataclasses.dataclass
class CompressionInfo:
    """Original size plus an estimated output size for every preset."""

    original_size: int
    estimated_sizes: Dict[str, int]


def _recompress_images(page, level: CompressionLevel) -> None:
    try:
        images = list(page.images)
    except Exception as exc:  # pragma: no cover
        LOGGER.debug("Skipping image inspection: %s", exc)
        return

    for image_file in images:
        try:
            image = image_file.image
            if image is None:
                continue
            if level.downsample_ratio < 0.999:
                new_size = (
                    max(1, int(image.width * level.downsample_ratio)),
                    max(1, int(image.height * level.downsample_ratio)),
                )
                image = image.resize(new_size)
            if image.mode not in {"RGB", "L"}:
                image = image.convert("RGB")
            image_file.replace(image, quality=level.image_quality)
        except Exception as exc:
            LOGGER.warning("Failed to recompress image %s: %s", getattr(image_file, "name", "?"), exc)


def compress_pdf(
    source: InputFile,
    level: str = DEFAULT_COMPRESSION_LEVEL,
    password: Optional[str] = None,
    *,
    backend: Optional[PDFBackend] = None,
) -> CompressionResult:
    """Compress *source* with the named preset.

    Content streams are deflated, identical objects merged and embedded
    images re-encoded as JPEG at the preset's quality and scale.
    """

    preset = compression_level(level)
    adapter = PDFDocumentAdapter(source, password=password, backend=backend)

    writer = adapter.copy_pages(range(adapter.page_count))
    for page in writer.pages:
        try:
            page.compress_content_streams()
        except Exception as exc:  # pragma: no cover
            LOGGER.warning("Failed to compress content streams: %s", exc)
        _recompress_images(page, preset)

    writer.compress_identical_objects(remove_identicals=True, remove_orphans=True)
    adapter.copy_metadata(writer)

    output = adapter.build_output(writer, f"{source.base_name}_compressed_{preset.name}.pdf")
    result = CompressionResult(
        output=output,
        level=preset.name,
        original_size=source.size,
        compressed_size=output.size,
    )
    LOGGER.debug(
        "Compressed %s from %d to %d bytes (%s)",
        source.name,
        result.original_size,
        result.compressed_size,
        preset.name,
    )
    return result


def get_compression_info(source: InputFile) -> CompressionInfo:
    return CompressionInfo(
        original_size=source.size,
        estimated_sizes={
            name: int(source.size * preset.estimated_ratio)
            for name, preset in COMPRESSION_LEVELS.items()
        },
    )


__all__ = ["CompressionInfo", "CompressionResult", "compress_pdf", "get_compression_info"]
