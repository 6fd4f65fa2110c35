"""Default settings for PDF Toolkit operations and the CLI."""

from __future__ import annotations

import dataclasses
from typing import Dict, Literal, Tuple

from .exceptions import ValidationError

CompressionLevelName = Literal["extreme", "recommended", "minimal"]

PRODUCER = "PDF Toolkit"
DEFAULT_OUTPUT_DIR = "./output"
ENV_PREFIX = "PDF_TOOLKIT"


@dataclasses.dataclass(frozen=True)
class CompressionLevel:
    """Behavioural toggles for a compression preset."""

    name: CompressionLevelName
    image_quality: int
    downsample_ratio: float
    estimated_ratio: float


COMPRESSION_LEVELS: Dict[str, CompressionLevel] = {
    "extreme": CompressionLevel("extreme", image_quality=40, downsample_ratio=0.5, estimated_ratio=0.4),
    "recommended": CompressionLevel("recommended", image_quality=70, downsample_ratio=0.75, estimated_ratio=0.6),
    "minimal": CompressionLevel("minimal", image_quality=90, downsample_ratio=1.0, estimated_ratio=0.85),
}
DEFAULT_COMPRESSION_LEVEL: CompressionLevelName = "recommended"


@dataclasses.dataclass(frozen=True)
class WatermarkStyle:
    """Appearance of a text watermark."""

    font_name: str = "Helvetica-Bold"
    font_size: int = 48
    color: Tuple[float, float, float] = (0.5, 0.5, 0.5)
    opacity: float = 0.3
    angle: float = 0.0


def compression_level(name: str) -> CompressionLevel:
    try:
        return COMPRESSION_LEVELS[name.lower()]
    except KeyError:
        raise ValidationError(
            f"Unknown compression level: '{name}'. Expected one of: {', '.join(COMPRESSION_LEVELS)}."
        ) from None
