"""
Custom exceptions for PDF Toolkit.

Every error raised by the library derives from :class:`PDFToolkitException`
and carries a human-readable message meant to be shown to the user verbatim.
"""


class PDFToolkitException(Exception):
    """Base exception for all PDF Toolkit errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF toolkit error occurred."


class ParseError(PDFToolkitException):
    """Raised when a page range expression is malformed or out of bounds."""

    @property
    def default_message(self) -> str:
        return "Invalid page range expression."


class PageIndexError(PDFToolkitException, IndexError):
    """Raised when a slot or page index falls outside the current bounds."""

    @property
    def default_message(self) -> str:
        return "Page index is out of bounds."


class ValidationError(PDFToolkitException):
    """Raised when a selection or option cannot produce a usable document."""

    @property
    def default_message(self) -> str:
        return "The requested operation cannot produce a valid document."


class PasswordRequiredError(PDFToolkitException):
    """Raised when a PDF needs a password or the supplied one is wrong."""

    @property
    def default_message(self) -> str:
        return "This PDF is password protected. Please enter the correct password."


class InvalidPDFError(PDFToolkitException):
    """Raised when PDF data is invalid or corrupted."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class ConversionError(PDFToolkitException):
    """Raised when a non-PDF input cannot be converted."""

    @property
    def default_message(self) -> str:
        return "Unsupported file for conversion."
