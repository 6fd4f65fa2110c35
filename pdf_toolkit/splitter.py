"""PDF splitting functionality built around :class:`PDFDocumentAdapter`."""

from __future__ import annotations

from typing import Callable, List, Optional

from .backends.base import PDFBackend
from .document import PDFDocumentAdapter
from .ranges import build_output_filename, format_pages, parse_groups, parse_individual
from .types import InputFile, OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.split")

ProgressCallback = Callable[[int, int], None]


class PDFSplitter:
    """High-level PDF splitting operations on one loaded document."""

    def __init__(
        self,
        source: InputFile,
        *,
        password: Optional[str] = None,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.source = source
        self._adapter = PDFDocumentAdapter(source, password=password, backend=backend)
        self.num_pages = self._adapter.page_count

    def _build(self, pages: List[int], name: str, title_suffix: str) -> OutputDocument:
        writer = self._adapter.copy_pages(pages)
        self._adapter.copy_metadata(writer, title_suffix=title_suffix)
        LOGGER.debug("Writing %d page(s) to %s", len(pages), name)
        return self._adapter.build_output(writer, name)

    def split_by_ranges(
        self,
        ranges: Optional[str],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[OutputDocument]:
        """Produce one document per comma-separated range, in input order.

        Overlapping ranges yield overlapping documents.
        """

        groups = parse_groups(ranges, self.num_pages)
        outputs: List[OutputDocument] = []
        for index, group in enumerate(groups, start=1):
            name = build_output_filename(self.source.base_name, group)
            outputs.append(self._build(group, name, f" - Pages {format_pages(group)}"))
            if progress_callback:
                progress_callback(index, len(groups))
        return outputs

    def split_to_pages(
        self,
        pages: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[OutputDocument]:
        """Produce one single-page document per selected page (all by default)."""

        selected = parse_individual(pages, self.num_pages)
        outputs: List[OutputDocument] = []
        for index, page in enumerate(selected, start=1):
            name = build_output_filename(self.source.base_name, [page])
            outputs.append(self._build([page], name, f" - Page {page + 1}"))
            if progress_callback:
                progress_callback(index, len(selected))
        return outputs

    def extract_pages(self, pages: Optional[str], output_name: Optional[str] = None) -> OutputDocument:
        """Copy the selected pages, ascending, into a single document."""

        selected = parse_individual(pages, self.num_pages)
        name = output_name or f"{self.source.base_name}_split.pdf"
        return self._build(selected, name, f" - Pages {format_pages(selected)}")

    def get_page_count(self) -> int:
        return self.num_pages


def split_by_ranges(
    source: InputFile,
    ranges: Optional[str],
    password: Optional[str] = None,
) -> List[OutputDocument]:
    return PDFSplitter(source, password=password).split_by_ranges(ranges)


def split_to_pages(
    source: InputFile,
    pages: Optional[str] = None,
    password: Optional[str] = None,
) -> List[OutputDocument]:
    return PDFSplitter(source, password=password).split_to_pages(pages)


def extract_pages(
    source: InputFile,
    pages: Optional[str],
    password: Optional[str] = None,
) -> OutputDocument:
    return PDFSplitter(source, password=password).extract_pages(pages)


__all__ = [
    "PDFSplitter",
    "split_by_ranges",
    "split_to_pages",
    "extract_pages",
]
