"""Renderers: external and in-process page rasterizers."""

from __future__ import annotations

from docrender.config.schema import ImageConfig
from docrender.errors.exceptions import ConfigurationError
from docrender.render.base import Renderer
from docrender.render.imagemagick import ImageMagickRenderer, build_imagemagick_args
from docrender.render.mupdf import PyMuPDFRenderer

_RENDERERS: dict[str, type[Renderer]] = {
    "imagemagick": ImageMagickRenderer,
    "pymupdf": PyMuPDFRenderer,
}


def available_renderers() -> list[str]:
    return sorted(_RENDERERS)


def create_renderer(name: str, config: ImageConfig | None = None) -> Renderer:
    """Instantiate a renderer by name."""
    renderer_cls = _RENDERERS.get(name)
    if renderer_cls is None:
        raise ConfigurationError(
            f"Unknown renderer '{name}' (available: {', '.join(available_renderers())})",
            option="renderer",
        )
    return renderer_cls(config)


__all__ = [
    "ImageMagickRenderer",
    "PyMuPDFRenderer",
    "Renderer",
    "available_renderers",
    "build_imagemagick_args",
    "create_renderer",
]
