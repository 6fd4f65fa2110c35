"""Text watermarks drawn with reportlab and merged onto every page."""

from __future__ import annotations

import io
from typing import Dict, Optional, Tuple

from pypdf import PdfReader
from reportlab.lib import colors
from reportlab.pdfgen import canvas

from .backends.base import PDFBackend
from .config import WatermarkStyle
from .document import PDFDocumentAdapter
from .exceptions import ValidationError
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.watermark")


def parse_hex_color(value: str) -> Tuple[float, float, float]:
    """Convert ``#rrggbb`` (or ``rrggbb``) to an RGB tuple of fractions."""

    hexcolor = value.strip().lstrip("#")
    if len(hexcolor) != 6:
        raise ValidationError(f"Invalid colour '{value}'. Expected '#rrggbb'.")
    try:
        r, g, b = (int(hexcolor[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
    except ValueError as exc:
        raise ValidationError(f"Invalid colour '{value}'. Expected '#rrggbb'.") from exc
    return r, g, b


def _validate_style(style: WatermarkStyle) -> None:
    if not 0.0 <= style.opacity <= 1.0:
        raise ValidationError(f"Opacity must be between 0 and 1, got {style.opacity}.")
    if style.font_size <= 0:
        raise ValidationError(f"Font size must be positive, got {style.font_size}.")
    if any(not 0.0 <= channel <= 1.0 for channel in style.color):
        raise ValidationError(f"Colour channels must be between 0 and 1, got {style.color}.")


def _watermark_layer(text: str, width: float, height: float, style: WatermarkStyle):
    """Return a one-page watermark layer sized ``width`` x ``height``."""

    packet = io.BytesIO()
    c = canvas.Canvas(packet, pagesize=(width, height))
    r, g, b = style.color
    c.saveState()
    c.translate(width / 2, height / 2)
    c.rotate(style.angle)
    c.setFillColor(colors.Color(r, g, b, alpha=style.opacity))
    c.setFont(style.font_name, style.font_size)
    c.drawCentredString(0, 0, text)
    c.restoreState()
    c.save()
    packet.seek(0)
    return PdfReader(packet).pages[0]


def add_watermark(
    source: InputFile,
    text: str,
    style: Optional[WatermarkStyle] = None,
    password: Optional[str] = None,
    *,
    backend: Optional[PDFBackend] = None,
) -> OutputDocument:
    """Stamp ``text`` in the centre of every page of *source*."""

    if not text or not text.strip():
        raise ValidationError("Watermark text cannot be empty.")
    style = style or WatermarkStyle()
    _validate_style(style)

    adapter = PDFDocumentAdapter(source, password=password, backend=backend)
    writer = adapter.copy_pages(range(adapter.page_count))

    layers: Dict[Tuple[float, float], object] = {}
    for page in writer.pages:
        size = (float(page.mediabox.width), float(page.mediabox.height))
        if size not in layers:
            layers[size] = _watermark_layer(text, size[0], size[1], style)
        page.merge_page(layers[size])

    LOGGER.debug("Watermarked %d page(s) of %s", adapter.page_count, source.name)
    adapter.copy_metadata(writer)
    return adapter.build_output(writer, f"{source.base_name}_watermarked.pdf")


__all__ = ["add_watermark", "parse_hex_color"]
