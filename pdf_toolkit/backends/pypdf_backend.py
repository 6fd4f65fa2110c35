"""pypdf backend implementation for PDF Toolkit."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..exceptions import InvalidPDFError, PageIndexError, PasswordRequiredError
from ..utils import get_logger
from .base import BackendDocument, PDFBackend

LOGGER = get_logger("pdf_toolkit.backends.pypdf")


@dataclass
class PypdfDocument(BackendDocument):
    reader: Optional[PdfReader] = None

    def get_page(self, index: int) -> object:
        return self.reader.pages[index]

    def metadata(self) -> dict[str, str]:
        metadata = self.reader.metadata
        if not metadata:
            return {}
        return {
            key: str(value)
            for key, value in metadata.items()
            if isinstance(key, str) and value is not None
        }


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, data: bytes, password: Optional[str] = None) -> PypdfDocument:
        if not data:
            raise InvalidPDFError("The file is empty.")

        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF file. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF. Error: {exc}") from exc

        was_encrypted = reader.is_encrypted
        if was_encrypted:
            self._decrypt(reader, password)

        try:
            page_count = len(reader.pages)
        except Exception as exc:
            raise InvalidPDFError(f"Unable to read PDF pages. Error: {exc}") from exc
        if page_count == 0:
            raise InvalidPDFError("PDF has no pages.")

        return PypdfDocument(
            page_count=page_count,
            file_size=len(data),
            was_encrypted=was_encrypted,
            reader=reader,
        )

    @staticmethod
    def _decrypt(reader: PdfReader, password: Optional[str]) -> None:
        # Owner-password-only files open with an empty user password.
        candidate = password or ""
        try:
            status = reader.decrypt(candidate)
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            LOGGER.error("Failed to decrypt PDF: %s", exc)
            raise InvalidPDFError(f"Unable to decrypt PDF. Error: {exc}") from exc

        if status == 0:
            if password:
                raise PasswordRequiredError("Incorrect password for encrypted PDF.")
            raise PasswordRequiredError()
        LOGGER.debug("Decrypted encrypted PDF")

    def new_writer(self) -> PdfWriter:
        return PdfWriter()

    def copy_pages(
        self,
        document: PypdfDocument,
        indices: Sequence[int],
        *,
        writer: Optional[PdfWriter] = None,
        rotations: Optional[Mapping[int, int]] = None,
    ) -> PdfWriter:
        writer = writer if writer is not None else self.new_writer()
        rotations = rotations or {}
        for index in indices:
            if not 0 <= index < document.page_count:
                raise PageIndexError(
                    f"Page index {index} is out of bounds: the document has "
                    f"{document.page_count} page(s)."
                )
            page = writer.add_page(document.get_page(index))
            angle = rotations.get(index, 0) % 360
            if angle:
                page.rotate(angle)
        return writer

    def clone(self, document: PypdfDocument) -> PdfWriter:
        writer = PdfWriter()
        writer.clone_reader_document_root(document.reader)
        return writer

    def save(self, writer: PdfWriter) -> bytes:
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()
