import os
import threading
from pathlib import Path

import pytest

from docrender.cache.filesystem import FilesystemCacheStore
from docrender.config.schema import ImageConfig, ImageMagickOptions, ImageSettings
from docrender.render.base import Renderer


class CountingRenderer(Renderer):
    """Renderer double: writes deterministic bytes and counts invocations."""

    def __init__(self, fmt="png", dpi=None, quality=None, **options):
        self._settings = ImageConfig(format=fmt, dpi=dpi, quality=quality, options=options).finalize()
        self._options = ImageMagickOptions.from_options(self._settings.options)
        self._lock = threading.Lock()
        self.calls = []

    @property
    def settings(self) -> ImageSettings:
        return self._settings

    def parameters(self):
        return self._options.parameters()

    def render(self, input_path, page_num, output_path):
        with self._lock:
            self.calls.append((str(input_path), page_num))
        payload = f"{Path(input_path).name}:{page_num}:{';'.join(self.parameters())}"
        Path(output_path).write_bytes(payload.encode() * 64)

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    """Keep user-level config and DOCRENDER_* variables out of tests."""
    from docrender.config import hierarchy

    monkeypatch.setattr(
        hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path_factory.mktemp("home") / "config.yaml"
    )
    for key in list(os.environ):
        if key.startswith("DOCRENDER_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_renderer():
    return CountingRenderer


@pytest.fixture
def renderer():
    return CountingRenderer()


@pytest.fixture
def cache_store(tmp_path):
    return FilesystemCacheStore(tmp_path / "cache")


@pytest.fixture
def sample_pdf(tmp_path):
    """Three-page PDF generated with PyMuPDF."""
    import pymupdf

    path = tmp_path / "sample.pdf"
    doc = pymupdf.open()
    for n in range(1, 4):
        page = doc.new_page(width=200, height=200)
        page.insert_text((40, 100), f"Page {n}", fontsize=24)
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    import base64
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4"
        "nGP4z8BQDwAEgAF/pooBPQAAAABJRU5ErkJggg=="
    )
