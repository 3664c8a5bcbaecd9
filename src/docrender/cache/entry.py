"""Cache entry model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """A rendered page image stored under its derived cache key.

    ``filename`` is a human-readable suggestion (``<stem>.<page>.<ext>``) used
    only for the on-disk name, never for lookup.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    data: bytes
    filename: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)
