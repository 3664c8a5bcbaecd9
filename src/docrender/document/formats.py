"""Output image formats and document content types."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from docrender.errors.exceptions import DocumentError

if TYPE_CHECKING:
    from docrender.document.pdf import PDFDocument


class ImageFormat(StrEnum):
    PNG = "png"
    JPEG = "jpg"

    @property
    def mime_type(self) -> str:
        return "image/png" if self is ImageFormat.PNG else "image/jpeg"


def parse_image_format(value: str) -> ImageFormat:
    """Parse a user-supplied format name; empty means PNG."""
    normalized = value.strip().lower()
    if normalized in ("", "png"):
        return ImageFormat.PNG
    if normalized in ("jpg", "jpeg"):
        return ImageFormat.JPEG
    raise ValueError(f"Unsupported image format: {value}")


def _open_pdf(path: str | Path) -> PDFDocument:
    from docrender.document.pdf import PDFDocument

    return PDFDocument.open(path)


_OPENERS: dict[str, Callable[[str | Path], PDFDocument]] = {
    "application/pdf": _open_pdf,
}


def supported_formats() -> list[str]:
    return sorted(_OPENERS)


def is_supported(content_type: str) -> bool:
    return content_type in _OPENERS


def open_document(path: str | Path, content_type: str) -> PDFDocument:
    """Open a document by content type."""
    opener = _OPENERS.get(content_type)
    if opener is None:
        raise DocumentError(f"Unsupported content type: {content_type}", path=path)
    return opener(path)
