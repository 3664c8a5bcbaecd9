"""Cache-aware page rendering.

Policy: a cache miss renders and stores the result. A storage fault on
lookup is raised, never treated as a miss. A failed store after a
successful render is also raised, so callers always learn that the cache
is unreliable.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from docrender.cache.base import CacheStore
from docrender.cache.entry import CacheEntry
from docrender.cache.keys import build_cache_key, suggested_filename
from docrender.errors.exceptions import CacheEntryNotFoundError, RenderError
from docrender.render.base import Renderer

logger = logging.getLogger(__name__)


def render_page(
    document_path: str | Path,
    page_num: int,
    renderer: Renderer,
    cache: CacheStore | None = None,
) -> bytes:
    """Return image bytes for one page, consulting ``cache`` when given.

    ``cache=None`` disables caching entirely.
    """
    if cache is None:
        return render_to_bytes(document_path, page_num, renderer)

    key = build_cache_key(document_path, page_num, renderer)
    try:
        entry = cache.get(key)
    except CacheEntryNotFoundError:
        logger.debug("Cache miss for page %d of %s (%s)", page_num, document_path, key)
    else:
        logger.debug("Cache hit for page %d of %s (%s)", page_num, document_path, key)
        return entry.data

    data = render_to_bytes(document_path, page_num, renderer)
    cache.set(
        CacheEntry(
            key=key,
            data=data,
            filename=suggested_filename(document_path, page_num, renderer.file_extension),
        )
    )
    return data


def render_to_bytes(document_path: str | Path, page_num: int, renderer: Renderer) -> bytes:
    """Invoke the renderer into a scratch file and return its contents."""
    with tempfile.TemporaryDirectory(prefix="docrender-") as tmp_dir:
        output_path = Path(tmp_dir) / f"page-{page_num}.{renderer.file_extension}"
        renderer.render(document_path, page_num, output_path)
        try:
            return output_path.read_bytes()
        except FileNotFoundError as e:
            raise RenderError(
                f"Renderer produced no output for page {page_num}", page_num=page_num
            ) from e
