"""Error handling: exception hierarchy shared by every subsystem."""

from docrender.errors.exceptions import (
    CacheClearError,
    CacheCorruptionError,
    CacheEntryNotFoundError,
    CacheError,
    CacheIOError,
    ConfigurationError,
    DocRenderError,
    DocumentError,
    PageLevelError,
    RenderError,
    UnknownCacheError,
)

__all__ = [
    "DocRenderError",
    "ConfigurationError",
    "UnknownCacheError",
    "CacheError",
    "CacheEntryNotFoundError",
    "CacheCorruptionError",
    "CacheIOError",
    "CacheClearError",
    "DocumentError",
    "RenderError",
    "PageLevelError",
]
