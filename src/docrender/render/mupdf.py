"""In-process renderer using PyMuPDF for rasterization and Pillow for filters."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pymupdf
from PIL import Image, ImageColor, ImageEnhance

from docrender.config.schema import ImageConfig, ImageMagickOptions, ImageSettings
from docrender.errors.exceptions import RenderError
from docrender.render.base import Renderer

logger = logging.getLogger(__name__)

_PDF_BASE_DPI = 72


class PyMuPDFRenderer(Renderer):
    """Renders pages without an external binary.

    Accepts the same options as ``ImageMagickRenderer`` and applies them in
    the same pipeline order: flatten → rotate → brightness/saturation →
    contrast → format-specific save.
    """

    def __init__(self, config: ImageConfig | None = None) -> None:
        self._settings = (config or ImageConfig()).finalize()
        self._options = ImageMagickOptions.from_options(self._settings.options)

    @property
    def settings(self) -> ImageSettings:
        return self._settings

    @property
    def options(self) -> ImageMagickOptions:
        return self._options

    def parameters(self) -> list[str]:
        return self._options.parameters()

    def render(self, input_path: str | Path, page_num: int, output_path: str | Path) -> None:
        try:
            background = ImageColor.getrgb(self._options.background)
        except ValueError as e:
            raise RenderError(
                f"Unknown background colour: {self._options.background}", page_num=page_num
            ) from e

        png_bytes = self._rasterize(input_path, page_num)
        img = Image.open(io.BytesIO(png_bytes)).convert("RGBA")
        img = self._flatten(img, background)
        img = self._apply_filters(img, background)

        try:
            if self._settings.format == "jpg":
                img.save(output_path, format="JPEG", quality=self._settings.quality)
            else:
                img.save(output_path, format="PNG")
        except OSError as e:
            raise RenderError(f"Failed to write {output_path}: {e}", page_num=page_num) from e

    def _rasterize(self, input_path: str | Path, page_num: int) -> bytes:
        zoom = self._settings.dpi / _PDF_BASE_DPI
        try:
            doc = pymupdf.open(str(input_path))
        except (RuntimeError, OSError, ValueError) as e:
            raise RenderError(f"Failed to open {input_path}: {e}", page_num=page_num) from e
        try:
            if not 1 <= page_num <= doc.page_count:
                raise RenderError(
                    f"Page {page_num} out of range [1-{doc.page_count}]", page_num=page_num
                )
            pix = doc[page_num - 1].get_pixmap(matrix=pymupdf.Matrix(zoom, zoom), alpha=True)
            return pix.tobytes("png")
        finally:
            doc.close()

    @staticmethod
    def _flatten(img: Image.Image, background: tuple[int, ...]) -> Image.Image:
        base = Image.new("RGBA", img.size, (*background[:3], 255))
        return Image.alpha_composite(base, img).convert("RGB")

    def _apply_filters(self, img: Image.Image, background: tuple[int, ...]) -> Image.Image:
        opts = self._options
        if opts.rotation:
            # Pillow rotates counter-clockwise
            img = img.rotate(-opts.rotation, expand=True, fillcolor=background[:3])
        if opts.brightness is not None and opts.brightness != 100:
            img = ImageEnhance.Brightness(img).enhance(opts.brightness / 100)
        if opts.saturation is not None and opts.saturation != 100:
            img = ImageEnhance.Color(img).enhance(opts.saturation / 100)
        if opts.contrast:
            img = ImageEnhance.Contrast(img).enhance(1 + opts.contrast / 100)
        return img
