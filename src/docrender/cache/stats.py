"""Cache directory inspection and statistics models."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class CachedFile(BaseModel):
    name: str
    size_bytes: int


class KeyListing(BaseModel):
    key: str
    files: list[CachedFile] = Field(default_factory=list)


class CacheStats(BaseModel):
    """Aggregate statistics for a filesystem cache root."""

    directory: str
    exists: bool = True
    entries: int = 0
    files: int = 0
    size_bytes: int = 0
    listings: list[KeyListing] = Field(default_factory=list)

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)

    @property
    def status(self) -> str:
        if not self.exists:
            return "Missing"
        return "Active" if self.entries else "Empty"


def inspect_cache(directory: str | Path) -> CacheStats:
    """Walk a cache root and summarise its key directories.

    Stray files in the root and nested directories inside key directories
    are not counted.
    """
    root = Path(directory)
    if not root.is_dir():
        return CacheStats(directory=str(root), exists=False)

    stats = CacheStats(directory=str(root))
    for key_dir in sorted(root.iterdir()):
        if key_dir.is_symlink() or not key_dir.is_dir():
            continue
        stats.entries += 1
        listing = KeyListing(key=key_dir.name)
        try:
            children = sorted(key_dir.iterdir())
        except OSError as e:
            logger.warning("Cannot list cache entry %s: %s", key_dir, e)
            stats.listings.append(listing)
            continue
        for path in children:
            if not path.is_file():
                continue
            size = path.stat().st_size
            listing.files.append(CachedFile(name=path.name, size_bytes=size))
            stats.files += 1
            stats.size_bytes += size
        stats.listings.append(listing)
    return stats
