"""Cache subsystem: content-addressed, filesystem-backed page image cache."""

from docrender.cache.base import CacheStore
from docrender.cache.entry import CacheEntry
from docrender.cache.filesystem import FilesystemCacheStore, create_filesystem_cache
from docrender.cache.keys import (
    build_cache_key,
    encode_parameters,
    generate_key,
    suggested_filename,
)
from docrender.cache.registry import CacheRegistry, register_builtin_caches
from docrender.cache.stats import CacheStats, inspect_cache

__all__ = [
    "CacheEntry",
    "CacheRegistry",
    "CacheStats",
    "CacheStore",
    "FilesystemCacheStore",
    "build_cache_key",
    "create_filesystem_cache",
    "encode_parameters",
    "generate_key",
    "inspect_cache",
    "register_builtin_caches",
    "suggested_filename",
]
