"""
Type definitions and dataclasses for PDF Toolkit.

This module defines data structures used throughout the library.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass
class PDFInfo:
    """
    PDF document information and metadata.

    Attributes:
        num_pages: Number of pages in the PDF
        file_size: Size of the source data in bytes
        title: PDF title metadata
        author: PDF author metadata
        subject: PDF subject metadata
        keywords: PDF keywords metadata
        creator: PDF creator application
        producer: PDF producer application
        is_encrypted: Whether the PDF is encrypted
    """
    num_pages: int
    file_size: int
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    keywords: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    is_encrypted: bool = False


@dataclass(frozen=True)
class InputFile:
    """
    A source file held in memory.

    Attributes:
        name: Original filename, used to derive output names
        content: Raw file bytes
    """
    name: str
    content: bytes

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "InputFile":
        source = Path(path)
        return cls(name=source.name, content=source.read_bytes())

    @property
    def base_name(self) -> str:
        """Filename without a trailing ``.pdf`` extension."""
        if self.name.lower().endswith(".pdf"):
            return self.name[:-4]
        return self.name

    @property
    def size(self) -> int:
        return len(self.content)

    def __repr__(self) -> str:
        return f"InputFile(name={self.name!r}, size={self.size})"


@dataclass(frozen=True)
class OutputDocument:
    """
    A produced document ready for download or archive packaging.

    Attributes:
        name: Output filename
        content: Serialized document bytes
    """
    name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def write_to(self, directory: Union[str, Path], name: Optional[str] = None) -> Path:
        """
        Write the document into ``directory`` and return the created path.

        ``name`` overrides the stored filename, e.g. to keep outputs that
        share a name from replacing each other.
        """
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        destination = target_dir / (name or self.name)
        destination.write_bytes(self.content)
        return destination

    def __repr__(self) -> str:
        return f"OutputDocument(name={self.name!r}, size={self.size})"
