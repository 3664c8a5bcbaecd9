"""Renderer interface: turns one document page into an image file."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from docrender.config.schema import ImageSettings


class Renderer(ABC):
    """A rasterizer with immutable settings.

    ``settings`` supplies the mandatory fields of the cache key and
    ``parameters()`` the renderer-specific ones, in a stable order.
    """

    @property
    @abstractmethod
    def settings(self) -> ImageSettings:
        """Validated base settings (format, dpi, quality)."""

    @abstractmethod
    def parameters(self) -> list[str]:
        """Return ``key=value`` strings for every set renderer option."""

    @abstractmethod
    def render(self, input_path: str | Path, page_num: int, output_path: str | Path) -> None:
        """Render 1-indexed ``page_num`` of ``input_path`` to ``output_path``."""

    @property
    def file_extension(self) -> str:
        return self.settings.format
