"""Adapter utilities for interacting with PDF data via pluggable backends."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from .backends import BackendDocument, PypdfBackend
from .backends.base import PDFBackend
from .config import PRODUCER
from .types import InputFile, OutputDocument, PDFInfo


class PDFDocumentAdapter:
    """High level helper around a backend-specific PDF document."""

    def __init__(
        self,
        source: InputFile,
        password: Optional[str] = None,
        *,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.source = source
        self.backend: PDFBackend = backend or PypdfBackend()
        self._document: BackendDocument = self.backend.load(source.content, password=password)
        self._metadata_cache: Optional[Dict[str, str]] = None

    # ------------------------------------------------------------------
    # Basic document information helpers
    # ------------------------------------------------------------------
    @property
    def document(self) -> BackendDocument:
        return self._document

    @property
    def page_count(self) -> int:
        return self._document.page_count

    @property
    def file_size(self) -> int:
        return self._document.file_size

    @property
    def is_encrypted(self) -> bool:
        return self._document.was_encrypted

    @property
    def base_name(self) -> str:
        return self.source.base_name

    @property
    def metadata(self) -> Dict[str, str]:
        if self._metadata_cache is None:
            self._metadata_cache = self._document.metadata()
        return dict(self._metadata_cache)

    def get_page(self, index: int) -> Any:
        return self._document.get_page(index)

    # ------------------------------------------------------------------
    # Assembly helpers
    # ------------------------------------------------------------------
    def new_writer(self) -> Any:
        return self.backend.new_writer()

    def copy_pages(
        self,
        indices: Sequence[int],
        *,
        writer: Any = None,
        rotations: Optional[Mapping[int, int]] = None,
    ) -> Any:
        return self.backend.copy_pages(self._document, indices, writer=writer, rotations=rotations)

    def clone(self) -> Any:
        return self.backend.clone(self._document)

    def copy_metadata(self, writer: Any, *, title_suffix: str = "") -> None:
        """Copy the source document info to ``writer`` and stamp the producer."""

        metadata = self.metadata
        if title_suffix and metadata.get("/Title"):
            metadata["/Title"] = f"{metadata['/Title']}{title_suffix}"
        metadata["/Producer"] = PRODUCER
        writer.add_metadata(metadata)

    def build_output(self, writer: Any, name: str) -> OutputDocument:
        return OutputDocument(name=name, content=self.backend.save(writer))

    # ------------------------------------------------------------------
    # Reporting helpers
    # ------------------------------------------------------------------
    def to_pdf_info(self) -> PDFInfo:
        metadata = self.metadata
        return PDFInfo(
            num_pages=self.page_count,
            file_size=self.file_size,
            title=metadata.get("/Title"),
            author=metadata.get("/Author"),
            subject=metadata.get("/Subject"),
            keywords=metadata.get("/Keywords"),
            creator=metadata.get("/Creator"),
            producer=metadata.get("/Producer"),
            is_encrypted=self.is_encrypted,
        )


def load_document(
    source: InputFile,
    password: Optional[str] = None,
    *,
    backend: Optional[PDFBackend] = None,
) -> PDFDocumentAdapter:
    return PDFDocumentAdapter(source, password=password, backend=backend)


def get_pdf_info(source: InputFile, password: Optional[str] = None) -> PDFInfo:
    """Return information about a PDF document using :class:`PDFInfo`."""

    return load_document(source, password=password).to_pdf_info()


__all__ = ["PDFDocumentAdapter", "load_document", "get_pdf_info"]
