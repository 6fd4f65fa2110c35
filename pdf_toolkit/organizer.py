"""Page reorganization: assembling a document from an edited page order."""

from __future__ import annotations

import asyncio
from typing import List, Mapping, Optional, Sequence

from .backends.base import PDFBackend
from .document import PDFDocumentAdapter
from .exceptions import PageIndexError, ValidationError
from .page_order import ROTATION, PageOrderManager
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.organize")


def _validate_order(order: Sequence[int], page_count: int) -> List[int]:
    pages = list(order)
    if not pages:
        raise ValidationError("No pages to organize. Cannot save an empty PDF.")

    seen: set[int] = set()
    for page in pages:
        if not 0 <= page < page_count:
            raise PageIndexError(
                f"Page index {page} is out of bounds: the document has {page_count} page(s)."
            )
        if page in seen:
            raise ValidationError(f"Page {page + 1} appears more than once in the page order.")
        seen.add(page)
    return pages


def assemble_order(
    adapter: PDFDocumentAdapter,
    order: Sequence[int],
    rotations: Optional[Mapping[int, int]] = None,
    output_name: Optional[str] = None,
) -> OutputDocument:
    pages = _validate_order(order, adapter.page_count)
    for page, angle in (rotations or {}).items():
        if angle % 90:
            raise ValidationError(
                f"Rotation of page {page + 1} must be a multiple of 90 degrees, got {angle}."
            )

    writer = adapter.copy_pages(pages, rotations=rotations)
    adapter.copy_metadata(writer)
    name = output_name or f"{adapter.base_name}_reorganized.pdf"

    removed = adapter.page_count - len(pages)
    LOGGER.debug("Reorganized %d page(s) into %s, %d removed", len(pages), name, removed)
    return adapter.build_output(writer, name)


def reorganize_pdf(
    source: InputFile,
    order: Sequence[int],
    rotations: Optional[Mapping[int, int]] = None,
    password: Optional[str] = None,
    *,
    backend: Optional[PDFBackend] = None,
) -> OutputDocument:
    """Write the pages of *source* in *order*.

    Args:
        source: The PDF to reorganize.
        order: 0-based page indices, typically from
            :meth:`PageOrderManager.materialize`. Pages left out are dropped.
        rotations: Clockwise rotation in degrees keyed by original page index.
        password: Passed through to the backend untouched.

    Raises:
        ValidationError: If ``order`` is empty or repeats a page.
        PageIndexError: If ``order`` references a page that does not exist.
    """

    adapter = PDFDocumentAdapter(source, password=password, backend=backend)
    return assemble_order(adapter, order, rotations)


class EditingSession:
    """One reorganize session: a loaded document plus its own page order.

    A new :class:`PageOrderManager` is created on every :meth:`load`, so
    nothing leaks from a previously loaded document.
    """

    def __init__(self, *, backend: Optional[PDFBackend] = None) -> None:
        self.backend = backend
        self._adapter: Optional[PDFDocumentAdapter] = None
        self.pages = PageOrderManager()

    def load(self, source: InputFile, password: Optional[str] = None) -> PageOrderManager:
        adapter = PDFDocumentAdapter(source, password=password, backend=self.backend)
        pages = PageOrderManager(adapter.page_count)
        self._adapter, self.pages = adapter, pages
        LOGGER.debug("Loaded %s with %d page(s)", source.name, adapter.page_count)
        return pages

    @property
    def source(self) -> Optional[InputFile]:
        return self._adapter.source if self._adapter else None

    def _snapshot(self) -> tuple[PDFDocumentAdapter, List[int], dict[int, int]]:
        if self._adapter is None:
            raise ValidationError("No document loaded. Load a PDF before exporting.")
        order = self.pages.materialize()
        rotations = {
            page: int(angle)
            for page, angle in self.pages.attributes(ROTATION).items()
            if angle
        }
        return self._adapter, order, rotations

    def export(self, output_name: Optional[str] = None) -> OutputDocument:
        adapter, order, rotations = self._snapshot()
        return assemble_order(adapter, order, rotations, output_name)

    async def export_async(self, output_name: Optional[str] = None) -> OutputDocument:
        """Export in a worker thread.

        The order is snapshotted before the first ``await``; edits made while
        the export runs do not affect it.
        """

        adapter, order, rotations = self._snapshot()
        return await asyncio.to_thread(assemble_order, adapter, order, rotations, output_name)

    def summary(self) -> str:
        removed = len(self.pages.removed_pages()) if self.pages.is_loaded else 0
        if removed:
            plural = "s were" if removed > 1 else " was"
            return f"Your PDF has been reorganized successfully. {removed} page{plural} removed."
        return "Your PDF has been reorganized successfully."


__all__ = ["reorganize_pdf", "assemble_order", "EditingSession"]
