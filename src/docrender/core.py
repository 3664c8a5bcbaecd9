"""Top-level entry point: the Converter composition root."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from docrender.cache.base import CacheStore
from docrender.cache.registry import CacheRegistry, register_builtin_caches
from docrender.concurrency.pool import RenderPool
from docrender.config.schema import AppConfig
from docrender.document.formats import ImageFormat
from docrender.document.pdf import PDFDocument
from docrender.render import create_renderer
from docrender.render.base import Renderer
from docrender.types import ConversionResult
from docrender.utils.encoding import encode_image_data_uri
from docrender.utils.pages import parse_page_spec

logger = logging.getLogger(__name__)


class Converter:
    """Wires configuration, cache backend, and renderer together.

    Cache backends are registered here, once, rather than at import time.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        registry: CacheRegistry | None = None,
        renderer: Renderer | None = None,
        cache: CacheStore | None = None,
    ) -> None:
        self._config = config or AppConfig()
        self._registry = registry or register_builtin_caches()
        self._renderer = renderer or create_renderer(self._config.renderer, self._config.image)
        if cache is not None:
            self._cache: CacheStore | None = cache
        elif self._config.cache_disabled:
            self._cache = None
        else:
            self._cache = self._registry.create(self._config.cache)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def registry(self) -> CacheRegistry:
        return self._registry

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def cache(self) -> CacheStore | None:
        return self._cache

    def convert(
        self,
        input_path: str | Path,
        output_dir: str | Path,
        page_spec: str = "",
        include_base64: bool = False,
    ) -> ConversionResult:
        return asyncio.run(
            self.convert_async(input_path, output_dir, page_spec, include_base64)
        )

    async def convert_async(
        self,
        input_path: str | Path,
        output_dir: str | Path,
        page_spec: str = "",
        include_base64: bool = False,
    ) -> ConversionResult:
        """Render the selected pages and write them to ``output_dir``.

        Files are named ``<stem>-page-<n>.<ext>``; with ``include_base64`` a
        ``.txt`` data URI is written next to each image.
        """
        start = time.perf_counter()
        input_path = Path(input_path)
        output_dir = Path(output_dir)

        with PDFDocument.open(input_path) as doc:
            page_numbers = parse_page_spec(page_spec, doc.page_count)
            pages = [doc.extract_page(n) for n in page_numbers]
            pool = RenderPool(max_workers=self._config.max_workers)
            results = await pool.render_pages(pages, self._renderer, self._cache)

        output_dir.mkdir(parents=True, exist_ok=True)
        ext = self._renderer.file_extension
        written: list[Path] = []
        for result in results:
            if not result.ok:
                continue
            image_path = output_dir / f"{input_path.stem}-page-{result.page_number}.{ext}"
            image_path.write_bytes(result.data)
            written.append(image_path)
            if include_base64:
                txt_path = image_path.with_suffix(".txt")
                txt_path.write_text(
                    encode_image_data_uri(result.data, ImageFormat(ext)), encoding="ascii"
                )
                written.append(txt_path)

        return ConversionResult(
            source=input_path,
            pages=results,
            written=written,
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )
