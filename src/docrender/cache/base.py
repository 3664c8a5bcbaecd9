"""Abstract cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docrender.cache.entry import CacheEntry


class CacheStore(ABC):
    """Persistent storage for rendered page images, keyed by cache key.

    Implementations must be safe for concurrent use from multiple threads.
    """

    @abstractmethod
    def get(self, key: str) -> CacheEntry:
        """Return the entry stored under ``key``.

        Raises ``CacheEntryNotFoundError`` on a miss. Any other exception
        means the store itself is malfunctioning.
        """

    @abstractmethod
    def set(self, entry: CacheEntry) -> None:
        """Store ``entry`` under ``entry.key``, replacing any existing entry."""

    @abstractmethod
    def invalidate(self, key: str) -> None:
        """Remove the entry for ``key``. Absent keys are not an error."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry.

        Continues past individual failures and raises ``CacheClearError``
        listing them once all entries were attempted.
        """
