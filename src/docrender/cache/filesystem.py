"""Filesystem cache store: one directory per key.

Layout::

    <cache_root>/
      <key>/
        <suggested-filename>

Payloads are written to a temporary file in the cache root and moved into
place with ``os.replace`` so readers never observe a partial file.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from docrender.cache.base import CacheStore
from docrender.cache.entry import CacheEntry
from docrender.config.schema import CacheConfig
from docrender.errors.exceptions import (
    CacheClearError,
    CacheCorruptionError,
    CacheEntryNotFoundError,
    CacheIOError,
    ConfigurationError,
)

logger = logging.getLogger(__name__)

_TMP_SUFFIX = ".tmp"


class FilesystemCacheStore(CacheStore):
    """CacheStore backed by a directory tree.

    Holds no mutable state beyond the root path; all coordination between
    concurrent callers is left to the filesystem. Unrelated keys never touch
    the same directory. Concurrent writes to the same key are last-write-wins.
    """

    def __init__(self, directory: str | Path, log: logging.Logger | None = None) -> None:
        if not str(directory):
            raise ConfigurationError("directory option cannot be empty", option="directory")
        self._log = log or logger
        self._directory = Path(os.path.abspath(directory))

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to create cache directory {self._directory}: {e}",
                option="directory",
            ) from e

        self._check_writable()

    @property
    def directory(self) -> Path:
        return self._directory

    def get(self, key: str) -> CacheEntry:
        key_dir = self._key_dir(key)

        try:
            children = list(key_dir.iterdir())
        except FileNotFoundError:
            self._log.debug("cache.get key=%s found=False", key)
            raise CacheEntryNotFoundError(key) from None
        except NotADirectoryError:
            raise CacheCorruptionError(
                f"Cache corruption for {key}: expected directory, found file",
                key=key,
                found="file",
            ) from None
        except OSError as e:
            raise CacheIOError(
                f"Failed to read cache directory for {key}: {e}",
                key=key,
                operation="get",
                original=e,
            ) from e

        if len(children) != 1:
            raise CacheCorruptionError(
                f"Cache corruption for {key}: expected 1 file, found {len(children)}",
                key=key,
                found=str(len(children)),
            )

        path = children[0]
        if path.is_dir():
            raise CacheCorruptionError(
                f"Cache corruption for {key}: expected file, found directory {path.name}",
                key=key,
                found="directory",
            )

        try:
            data = path.read_bytes()
        except FileNotFoundError:
            # Invalidated between listing and reading
            raise CacheEntryNotFoundError(key) from None
        except OSError as e:
            raise CacheIOError(
                f"Failed to read cache file {path}: {e}",
                key=key,
                operation="get",
                original=e,
            ) from e

        self._log.debug("cache.get key=%s found=True size=%d", key, len(data))
        return CacheEntry(key=key, data=data, filename=path.name)

    def set(self, entry: CacheEntry) -> None:
        key_dir = self._key_dir(entry.key)
        _validate_component(entry.filename, "filename")
        target = key_dir / entry.filename

        tmp_path: str | None = None
        try:
            key_dir.mkdir(exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._directory, prefix=f".{entry.key}.", suffix=_TMP_SUFFIX
            )
            with os.fdopen(fd, "wb") as f:
                f.write(entry.data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, target)
            tmp_path = None
        except OSError as e:
            raise CacheIOError(
                f"Failed to write cache entry {entry.key}: {e}",
                key=entry.key,
                operation="set",
                original=e,
            ) from e
        finally:
            if tmp_path is not None:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_path)

        self._remove_stale_files(key_dir, keep=entry.filename)
        self._log.debug("cache.set key=%s size=%d", entry.key, len(entry.data))

    def invalidate(self, key: str) -> None:
        key_dir = self._key_dir(key)
        try:
            if key_dir.is_dir() and not key_dir.is_symlink():
                shutil.rmtree(key_dir)
            else:
                key_dir.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CacheIOError(
                f"Failed to invalidate cache entry {key}: {e}",
                key=key,
                operation="invalidate",
                original=e,
            ) from e

        self._log.debug("cache.invalidate key=%s", key)

    def clear(self) -> None:
        try:
            children = list(self._directory.iterdir())
        except OSError as e:
            raise CacheIOError(
                f"Failed to read cache directory {self._directory}: {e}",
                operation="clear",
                original=e,
            ) from e

        removed = 0
        failures: list[tuple[Path, Exception]] = []
        for path in children:
            # Only key directories; unrelated files in the root are left alone
            if path.is_symlink() or not path.is_dir():
                continue
            try:
                shutil.rmtree(path)
            except FileNotFoundError:
                continue
            except OSError as e:
                self._log.warning("cache.clear failed to remove %s: %s", path, e)
                failures.append((path, e))
                continue
            removed += 1

        self._log.info("cache.clear removed=%d failed=%d", removed, len(failures))
        if failures:
            raise CacheClearError(failures)

    def _key_dir(self, key: str) -> Path:
        _validate_component(key, "key")
        return self._directory / key

    def _check_writable(self) -> None:
        try:
            with tempfile.NamedTemporaryFile(dir=self._directory, prefix=".write-check-") as f:
                f.write(b"ok")
        except OSError as e:
            raise ConfigurationError(
                f"Cache directory {self._directory} is not writable: {e}",
                option="directory",
            ) from e

    def _remove_stale_files(self, key_dir: Path, keep: str) -> None:
        """Drop payloads left by an earlier entry stored under another filename."""
        with contextlib.suppress(FileNotFoundError):
            for path in key_dir.iterdir():
                if path.name != keep and path.is_file():
                    with contextlib.suppress(FileNotFoundError):
                        path.unlink()


def create_filesystem_cache(config: CacheConfig) -> FilesystemCacheStore:
    """Registry factory: build a FilesystemCacheStore from ``config.options``.

    Options:
      directory (str, required): cache root, created if missing.
    """
    directory = _parse_directory(config.options)
    return FilesystemCacheStore(directory)


def _parse_directory(options: dict[str, Any]) -> str:
    if "directory" not in options:
        raise ConfigurationError("directory option is required", option="directory")
    directory = options["directory"]
    if isinstance(directory, os.PathLike):
        directory = os.fspath(directory)
    if not isinstance(directory, str):
        raise ConfigurationError("directory option must be a string", option="directory")
    if not directory.strip():
        raise ConfigurationError("directory option cannot be empty", option="directory")
    return directory


def _validate_component(value: str, what: str) -> None:
    """Keys and filenames must be single, non-hidden path components."""
    if (
        not value
        or value in {".", ".."}
        or value.startswith(".")
        or "/" in value
        or (os.sep != "/" and os.sep in value)
    ):
        raise ValueError(f"Invalid cache {what}: {value!r}")
