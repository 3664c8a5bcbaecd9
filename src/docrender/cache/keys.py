"""Cache key generation: canonical parameter strings hashed with SHA256.

A rendering request is first encoded as a canonical string::

    /abs/path/doc.pdf/1.png?dpi=300&quality=90&background=white&brightness=110

Mandatory parameters come first in a fixed order, followed by the renderer's
extra parameters exactly as the renderer returned them. Nothing is sorted or
deduplicated here; determinism relies on the renderer returning a stable order.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from docrender.config.schema import ImageSettings

if TYPE_CHECKING:
    from docrender.render.base import Renderer


def encode_parameters(
    document_path: str | Path,
    page_num: int,
    settings: ImageSettings,
    extra_params: Sequence[str] = (),
) -> str:
    """Build the canonical parameter string for one rendering request."""
    params = [
        f"dpi={settings.dpi}",
        f"quality={settings.quality}",
        *extra_params,
    ]
    return f"{document_path}/{page_num}.{settings.format}?{'&'.join(params)}"


def generate_key(canonical: str) -> str:
    """Hash a canonical parameter string into a 64-char hex cache key."""
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def build_cache_key(document_path: str | Path, page_num: int, renderer: Renderer) -> str:
    """Derive the cache key for rendering ``page_num`` of a document."""
    canonical = encode_parameters(
        os.path.abspath(document_path),
        page_num,
        renderer.settings,
        renderer.parameters(),
    )
    return generate_key(canonical)


def suggested_filename(document_path: str | Path, page_num: int, fmt: str) -> str:
    """Return ``<stem>.<page>.<fmt>`` for display in the cache directory."""
    return f"{Path(document_path).stem}.{page_num}.{fmt}"
