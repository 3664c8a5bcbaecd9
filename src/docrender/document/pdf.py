"""PDF documents opened with PyMuPDF: page count and bounds only."""

from __future__ import annotations

import logging
from pathlib import Path

import pymupdf

from docrender.cache.base import CacheStore
from docrender.document.page import render_page
from docrender.errors.exceptions import DocumentError
from docrender.render.base import Renderer

logger = logging.getLogger(__name__)


class PDFDocument:
    """An opened PDF. Rasterization is left to a ``Renderer``."""

    def __init__(self, path: str | Path, page_count: int) -> None:
        self._path = Path(path)
        self._page_count = page_count

    @classmethod
    def open(cls, path: str | Path) -> PDFDocument:
        path = Path(path)
        if not path.exists():
            raise DocumentError(f"File not found: {path}", path=path)
        try:
            with pymupdf.open(str(path)) as doc:
                if not doc.is_pdf:
                    raise DocumentError(f"Not a PDF document: {path}", path=path)
                page_count = doc.page_count
        except (RuntimeError, OSError, ValueError) as e:
            raise DocumentError(f"Failed to open PDF {path}: {e}", path=path) from e

        if page_count == 0:
            raise DocumentError(f"PDF has no pages: {path}", path=path)
        logger.debug("Opened %s (%d pages)", path, page_count)
        return cls(path, page_count)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def page_count(self) -> int:
        return self._page_count

    def extract_page(self, page_num: int) -> PDFPage:
        if not 1 <= page_num <= self._page_count:
            raise DocumentError(
                f"Page {page_num} out of range [1-{self._page_count}]",
                path=self._path,
                page_num=page_num,
            )
        return PDFPage(self, page_num)

    def extract_all_pages(self) -> list[PDFPage]:
        return [self.extract_page(n) for n in range(1, self._page_count + 1)]

    def close(self) -> None:
        # Nothing held open between calls; kept for symmetry with other formats
        pass

    def __enter__(self) -> PDFDocument:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class PDFPage:
    def __init__(self, document: PDFDocument, number: int) -> None:
        self._document = document
        self._number = number

    @property
    def number(self) -> int:
        return self._number

    @property
    def document(self) -> PDFDocument:
        return self._document

    def to_image(self, renderer: Renderer, cache: CacheStore | None = None) -> bytes:
        """Render this page, reusing a cached image when available."""
        return render_page(self._document.path, self._number, renderer, cache)
