"""Cache backend registry: look up cache stores by configured name."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from docrender.cache.base import CacheStore
from docrender.cache.filesystem import create_filesystem_cache
from docrender.config.schema import CacheConfig
from docrender.errors.exceptions import ConfigurationError, UnknownCacheError

logger = logging.getLogger(__name__)

CacheFactory = Callable[[CacheConfig], CacheStore]


class _ReadWriteLock:
    """Many concurrent readers or a single writer.

    Waiting writers block new readers so registration is not starved by a
    steady stream of lookups.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class CacheRegistry:
    """Thread-safe name → factory map for cache backends.

    Registration normally happens once at startup (see
    ``register_builtin_caches``); ``create`` and ``list_caches`` may then be
    called from any number of threads.
    """

    def __init__(self) -> None:
        self._factories: dict[str, CacheFactory] = {}
        self._lock = _ReadWriteLock()

    def register(self, name: str, factory: CacheFactory) -> None:
        """Register ``factory`` under ``name``, replacing any previous one.

        An empty name or a missing factory is a programming error and raises
        immediately.
        """
        if not name:
            raise ValueError("Cache backend name cannot be empty")
        if factory is None or not callable(factory):
            raise TypeError(f"Cache factory for '{name}' must be callable")

        with self._lock.write():
            self._factories[name] = factory
        logger.debug("Registered cache backend %s", name)

    def create(self, config: CacheConfig) -> CacheStore:
        """Instantiate the backend named by ``config.name``.

        Factory errors (e.g. a missing required option) propagate unchanged.
        """
        if not config.name:
            raise ConfigurationError("Cache name cannot be empty", option="name")

        with self._lock.read():
            factory = self._factories.get(config.name)
            available = sorted(self._factories)

        if factory is None:
            raise UnknownCacheError(config.name, available)

        return factory(config)

    def has(self, name: str) -> bool:
        with self._lock.read():
            return name in self._factories

    def list_caches(self) -> list[str]:
        """Return registered backend names in sorted order."""
        with self._lock.read():
            return sorted(self._factories)


def register_builtin_caches(registry: CacheRegistry | None = None) -> CacheRegistry:
    """Register the bundled backends and return the registry."""
    registry = registry or CacheRegistry()
    registry.register("filesystem", create_filesystem_cache)
    return registry
