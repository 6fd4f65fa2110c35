"""ZIP packaging for operations that produce several documents."""

from __future__ import annotations

import io
from pathlib import Path, PurePath
from typing import Iterable, List, Set, Union
from zipfile import ZIP_DEFLATED, ZipFile

from .types import OutputDocument
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.archive")


def _unique_name(name: str, used: Set[str]) -> str:
    if name not in used:
        return name
    path = PurePath(name)
    counter = 2
    while True:
        candidate = f"{path.stem}_{counter}{path.suffix}"
        if candidate not in used:
            return candidate
        counter += 1


def archive_names(documents: Iterable[OutputDocument]) -> List[str]:
    """Return a unique filename per document, in order, for an archive or directory."""

    used: Set[str] = set()
    names: List[str] = []
    for document in documents:
        name = _unique_name(document.name, used)
        used.add(name)
        names.append(name)
    return names


def build_archive(documents: Iterable[OutputDocument]) -> bytes:
    """Create a deflated zip archive containing ``documents``."""

    documents = list(documents)
    buffer = io.BytesIO()
    with ZipFile(buffer, "w", compression=ZIP_DEFLATED) as archive:
        for document, name in zip(documents, archive_names(documents)):
            archive.writestr(name, document.content)
    LOGGER.debug("Packed %d document(s) into an archive", len(documents))
    return buffer.getvalue()


def write_archive(documents: Iterable[OutputDocument], destination: Union[str, Path]) -> Path:
    """Create a zip archive containing ``documents`` at ``destination``."""

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(build_archive(documents))
    return destination


__all__ = ["archive_names", "build_archive", "write_archive"]
