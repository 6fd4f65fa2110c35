"""Merge functionality for PDF Toolkit."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from .backends.base import PDFBackend
from .config import PRODUCER
from .document import PDFDocumentAdapter
from .exceptions import ValidationError
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.merge")

DEFAULT_MERGED_NAME = "merged.pdf"


def merge_documents(
    sources: Sequence[InputFile],
    output_name: str = DEFAULT_MERGED_NAME,
    *,
    passwords: Optional[Mapping[str, str]] = None,
    bookmarks: bool = False,
    backend: Optional[PDFBackend] = None,
) -> OutputDocument:
    """Concatenate every page of *sources*, in order, into one document.

    Args:
        sources: Two or more PDF inputs.
        output_name: Filename of the merged document.
        passwords: Optional passwords keyed by input filename.
        bookmarks: When ``True`` an outline entry is added at the first page
            of every input, titled with the input's base name.

    Raises:
        ValidationError: If fewer than two inputs are provided.
    """

    if len(sources) < 2:
        raise ValidationError(
            f"Please select at least 2 PDF files to merge (got {len(sources)})."
        )

    passwords = passwords or {}
    adapters = [
        PDFDocumentAdapter(source, password=passwords.get(source.name), backend=backend)
        for source in sources
    ]

    first = adapters[0]
    writer = first.new_writer()
    bookmark_targets: list[tuple[str, int]] = []
    for adapter in adapters:
        LOGGER.debug("Adding %d page(s) from %s", adapter.page_count, adapter.source.name)
        bookmark_targets.append((adapter.base_name, len(writer.pages)))
        adapter.copy_pages(range(adapter.page_count), writer=writer)

    metadata = first.metadata
    metadata["/Producer"] = PRODUCER
    writer.add_metadata(metadata)

    if bookmarks:
        for title, page_index in bookmark_targets:
            writer.add_outline_item(title, page_index)

    LOGGER.info("Merged %d PDFs into %s", len(adapters), output_name)
    return first.build_output(writer, output_name)


__all__ = ["merge_documents", "DEFAULT_MERGED_NAME"]
