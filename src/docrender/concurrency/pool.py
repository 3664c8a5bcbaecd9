"""Async dispatcher running blocking page renders on worker threads."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

from docrender.cache.base import CacheStore
from docrender.document.pdf import PDFPage
from docrender.errors.exceptions import PageLevelError
from docrender.render.base import Renderer
from docrender.types import PageResult

logger = logging.getLogger(__name__)


class RenderPool:
    """Renders pages concurrently, at most ``max_workers`` at a time.

    Each page render (cache lookup, external renderer, cache store) blocks,
    so it runs through ``asyncio.to_thread``. Pages sharing a cache key are
    not deduplicated; concurrent misses render redundantly.
    """

    def __init__(self, max_workers: int = 4) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def render_pages(
        self,
        pages: Sequence[PDFPage],
        renderer: Renderer,
        cache: CacheStore | None = None,
    ) -> list[PageResult]:
        """Render every page; results are returned in input order.

        A failing page becomes a ``PageResult`` carrying a ``PageLevelError``
        and does not stop the others.
        """
        semaphore = asyncio.Semaphore(self._max_workers)

        async def worker(page: PDFPage) -> PageResult:
            async with semaphore:
                start = time.perf_counter()
                try:
                    data = await asyncio.to_thread(page.to_image, renderer, cache)
                except Exception as e:
                    logger.error("Page %d failed: %s", page.number, e)
                    return PageResult(
                        page_number=page.number,
                        error=PageLevelError(str(e), page_num=page.number, inner=e),
                        elapsed_ms=(time.perf_counter() - start) * 1000,
                    )
                return PageResult(
                    page_number=page.number,
                    data=data,
                    elapsed_ms=(time.perf_counter() - start) * 1000,
                )

        return list(await asyncio.gather(*(worker(p) for p in pages)))
