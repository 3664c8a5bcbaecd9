"""Documents: opening PDFs and rendering their pages through the cache."""

from docrender.document.formats import (
    ImageFormat,
    is_supported,
    open_document,
    parse_image_format,
    supported_formats,
)
from docrender.document.page import render_page, render_to_bytes
from docrender.document.pdf import PDFDocument, PDFPage

__all__ = [
    "ImageFormat",
    "PDFDocument",
    "PDFPage",
    "is_supported",
    "open_document",
    "parse_image_format",
    "render_page",
    "render_to_bytes",
    "supported_formats",
]
