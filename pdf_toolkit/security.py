"""Password removal helpers for PDF Toolkit."""

from __future__ import annotations

from typing import Optional

from .backends.base import PDFBackend
from .document import PDFDocumentAdapter
from .exceptions import PasswordRequiredError
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.security")


def is_pdf_encrypted(source: InputFile, *, backend: Optional[PDFBackend] = None) -> bool:
    """Return ``True`` when *source* needs a password to be opened."""

    try:
        adapter = PDFDocumentAdapter(source, backend=backend)
    except PasswordRequiredError:
        return True
    return adapter.is_encrypted


def remove_password(
    source: InputFile,
    password: Optional[str],
    *,
    backend: Optional[PDFBackend] = None,
) -> OutputDocument:
    """Decrypt *source* with ``password`` and re-save it without encryption.

    Raises:
        PasswordRequiredError: If the password is missing or incorrect.
    """

    adapter = PDFDocumentAdapter(source, password=password, backend=backend)
    if not adapter.is_encrypted:
        LOGGER.info("%s is not encrypted; saving an unchanged copy", source.name)

    writer = adapter.clone()
    metadata = adapter.metadata
    if metadata:
        writer.add_metadata(metadata)
    return adapter.build_output(writer, f"{source.base_name}_unlocked.pdf")


__all__ = ["is_pdf_encrypted", "remove_password"]
