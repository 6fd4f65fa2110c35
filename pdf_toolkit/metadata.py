"""Document information editing."""

from __future__ import annotations

from typing import Mapping, Optional

from .backends.base import PDFBackend
from .document import PDFDocumentAdapter
from .exceptions import ValidationError
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.metadata")

METADATA_KEYS = {
    "title": "/Title",
    "author": "/Author",
    "subject": "/Subject",
    "keywords": "/Keywords",
    "producer": "/Producer",
    "creator": "/Creator",
}


def normalize_keywords(value: str) -> str:
    return ", ".join(keyword.strip() for keyword in value.split(",") if keyword.strip())


def _document_info(fields: Mapping[str, Optional[str]]) -> dict[str, str]:
    info: dict[str, str] = {}
    for key, value in fields.items():
        pdf_key = METADATA_KEYS.get(key.lower())
        if pdf_key is None:
            raise ValidationError(
                f"Unknown metadata field: '{key}'. Expected one of: {', '.join(METADATA_KEYS)}."
            )
        if value is None or not str(value).strip():
            continue
        text = str(value).strip()
        if pdf_key == "/Keywords":
            text = normalize_keywords(text)
        info[pdf_key] = text
    return info


def edit_metadata(
    source: InputFile,
    fields: Mapping[str, Optional[str]],
    password: Optional[str] = None,
    *,
    backend: Optional[PDFBackend] = None,
) -> OutputDocument:
    """Update the document info of *source*; blank values leave a field as is."""

    updates = _document_info(fields)
    adapter = PDFDocumentAdapter(source, password=password, backend=backend)

    writer = adapter.clone()
    metadata = adapter.metadata
    metadata.update(updates)
    if metadata:
        writer.add_metadata(metadata)

    LOGGER.debug("Updated metadata fields %s on %s", sorted(updates), source.name)
    return adapter.build_output(writer, f"{source.base_name}_edited.pdf")


__all__ = ["METADATA_KEYS", "edit_metadata", "normalize_keywords"]
