"""Backend protocol for PDF operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence


@dataclass
class BackendDocument:
    """Represents a loaded PDF document with backend-specific helpers."""

    page_count: int
    file_size: int
    was_encrypted: bool = False

    def get_page(self, index: int) -> object:
        raise NotImplementedError

    def metadata(self) -> dict[str, str]:
        raise NotImplementedError


class PDFBackend(Protocol):
    """Protocol defining backend operations for PDF loading, assembly and saving."""

    def load(self, data: bytes, password: Optional[str] = None) -> BackendDocument:
        """Load PDF bytes and return a backend document wrapper."""

    def new_writer(self) -> Any:
        """Return an empty backend writer."""

    def copy_pages(
        self,
        document: BackendDocument,
        indices: Sequence[int],
        *,
        writer: Any = None,
        rotations: Optional[Mapping[int, int]] = None,
    ) -> Any:
        """Append ``indices`` of ``document`` to ``writer`` (or a new one) in order."""

    def clone(self, document: BackendDocument) -> Any:
        """Return a writer holding a full copy of ``document``."""

    def save(self, writer: Any) -> bytes:
        """Serialize a writer to bytes."""
