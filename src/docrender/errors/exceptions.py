"""Custom exception hierarchy for docrender."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DocRenderError(Exception):
    """Base exception for all docrender errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(DocRenderError):
    """Missing or invalid configuration: fail fast at construction time."""

    def __init__(self, message: str = "", option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class UnknownCacheError(ConfigurationError):
    """Requested cache backend is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        listed = ", ".join(available) if available else "none"
        super().__init__(
            f"Unknown cache backend '{name}' (available: {listed})",
            option="name",
        )
        self.name = name
        self.available = available


class CacheError(DocRenderError):
    """Base class for cache store faults."""

    def __init__(self, message: str = "", key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class CacheEntryNotFoundError(CacheError):
    """No entry exists for the key: a normal cache miss, not a failure."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Cache entry not found: {key}", key=key)


class CacheCorruptionError(CacheError):
    """A key's storage location exists but is not in a valid state.

    Examples: key directory holding zero or several files, or a directory
    where the payload file was expected. Never repaired automatically.
    """

    def __init__(self, message: str = "", key: str | None = None, found: str = "") -> None:
        super().__init__(message, key=key)
        self.found = found


class CacheIOError(CacheError):
    """Filesystem or storage failure during a cache operation."""

    def __init__(
        self,
        message: str = "",
        key: str | None = None,
        operation: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message, key=key)
        self.operation = operation
        self.original = original


class CacheClearError(CacheError):
    """One or more entries could not be removed during a clear.

    Raised only after every entry has been attempted.
    """

    def __init__(self, failures: list[tuple[Path, Exception]]) -> None:
        details = "; ".join(f"{path}: {exc}" for path, exc in failures)
        super().__init__(f"Failed to remove {len(failures)} cache entries: {details}")
        self.failures = failures


class DocumentError(DocRenderError):
    """Document cannot be opened or a page is out of range."""

    def __init__(
        self,
        message: str = "",
        path: str | Path | None = None,
        page_num: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.page_num = page_num


class RenderError(DocRenderError):
    """The external renderer failed to produce an image."""

    def __init__(self, message: str = "", page_num: int = 0, output: str = "") -> None:
        super().__init__(message)
        self.page_num = page_num
        self.output = output


class PageLevelError(DocRenderError):
    """Error isolated to a single page: other pages continue."""

    def __init__(
        self,
        message: str = "",
        page_num: int = 0,
        inner: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.page_num = page_num
        self.inner = inner
