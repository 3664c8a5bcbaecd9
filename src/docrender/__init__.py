"""docrender: render document pages to images through a content-addressed cache."""

from docrender.cache import (
    CacheEntry,
    CacheRegistry,
    CacheStore,
    FilesystemCacheStore,
    build_cache_key,
    register_builtin_caches,
)
from docrender.core import Converter
from docrender.document import PDFDocument, PDFPage, render_page
from docrender.render import ImageMagickRenderer, Renderer, create_renderer

__version__ = "0.1.0"

__all__ = [
    "CacheEntry",
    "CacheRegistry",
    "CacheStore",
    "Converter",
    "FilesystemCacheStore",
    "ImageMagickRenderer",
    "PDFDocument",
    "PDFPage",
    "Renderer",
    "build_cache_key",
    "create_renderer",
    "register_builtin_caches",
    "render_page",
]
