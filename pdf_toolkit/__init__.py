"""
PDF Toolkit - Page-level PDF utilities that work on in-memory bytes.

This library parses page range expressions, keeps an editable page order
for reorganizing documents, and provides split, merge, compress,
watermark, metadata, unlock and conversion operations built on pypdf.

Quick Start:
    >>> from pdf_toolkit import InputFile, split_by_ranges
    >>> source = InputFile.from_path('input.pdf')
    >>> for document in split_by_ranges(source, '1-3,5'):
    ...     document.write_to('output/')

Page Ranges:
    - parse_individual: Flat, deduplicated, ascending 0-based indices
    - parse_groups: One group per comma-separated token, in input order

Page Order:
    - PageOrderManager: Editable order of original page indices plus
      per-page attributes such as rotation
    - EditingSession: A loaded document with its own page order

Exceptions:
    - PDFToolkitException: Base exception
    - ParseError: Malformed or out-of-bounds range expression
    - PageIndexError: Slot or page index out of bounds
    - ValidationError: Invalid arguments or state
    - PasswordRequiredError: Missing or incorrect password
    - InvalidPDFError: Unreadable PDF data
    - ConversionError: Unsupported conversion input

For CLI usage, use the 'pdf-toolkit' command after installation.
"""

# Page ranges and page order
from pdf_toolkit.ranges import parse_individual, parse_groups, build_output_filename
from pdf_toolkit.page_order import PageOrderManager, Direction

# Operations
from pdf_toolkit.splitter import PDFSplitter, split_by_ranges, split_to_pages, extract_pages
from pdf_toolkit.merger import merge_documents
from pdf_toolkit.organizer import EditingSession, reorganize_pdf
from pdf_toolkit.compressor import compress_pdf, get_compression_info
from pdf_toolkit.watermark import add_watermark
from pdf_toolkit.metadata import edit_metadata
from pdf_toolkit.security import remove_password
from pdf_toolkit.converter import image_to_pdf, images_to_pdf, text_to_pdf
from pdf_toolkit.archive import build_archive, write_archive
from pdf_toolkit.document import get_pdf_info

# Data types
from pdf_toolkit.types import PDFInfo, InputFile, OutputDocument

# Exceptions
from pdf_toolkit.exceptions import (
    PDFToolkitException,
    ParseError,
    PageIndexError,
    ValidationError,
    PasswordRequiredError,
    InvalidPDFError,
    ConversionError,
)

# Utility functions
from pdf_toolkit.utils import format_file_size

__version__ = "1.0.0"
__author__ = "PDF Toolkit Contributors"
__license__ = "MIT"

__all__ = [
    # Page ranges and page order
    "parse_individual",
    "parse_groups",
    "build_output_filename",
    "PageOrderManager",
    "Direction",
    # Operations
    "PDFSplitter",
    "split_by_ranges",
    "split_to_pages",
    "extract_pages",
    "merge_documents",
    "EditingSession",
    "reorganize_pdf",
    "compress_pdf",
    "get_compression_info",
    "add_watermark",
    "edit_metadata",
    "remove_password",
    "image_to_pdf",
    "images_to_pdf",
    "text_to_pdf",
    "build_archive",
    "write_archive",
    "get_pdf_info",
    # Data types
    "PDFInfo",
    "InputFile",
    "OutputDocument",
    # Exceptions
    "PDFToolkitException",
    "ParseError",
    "PageIndexError",
    "ValidationError",
    "PasswordRequiredError",
    "InvalidPDFError",
    "ConversionError",
    # Utility functions
    "format_file_size",
    # Version info
    "__version__",
]
