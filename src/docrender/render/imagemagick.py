"""ImageMagick renderer: builds and runs ``magick`` commands."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from docrender.config.schema import ImageConfig, ImageMagickOptions, ImageSettings
from docrender.errors.exceptions import RenderError
from docrender.render.base import Renderer

logger = logging.getLogger(__name__)

_MAGICK_BINARY = "magick"
_NEUTRAL_BRIGHTNESS = 100
_NEUTRAL_SATURATION = 100


class ImageMagickRenderer(Renderer):
    """Renders PDF pages with ImageMagick.

    Configuration is finalized and validated at construction, so an invalid
    option set is rejected before any page is rendered. Safe to share
    between threads.
    """

    def __init__(self, config: ImageConfig | None = None, binary: str = _MAGICK_BINARY) -> None:
        self._settings = (config or ImageConfig()).finalize()
        self._options = ImageMagickOptions.from_options(self._settings.options)
        self._binary = binary

    @property
    def settings(self) -> ImageSettings:
        return self._settings

    @property
    def options(self) -> ImageMagickOptions:
        return self._options

    def parameters(self) -> list[str]:
        return self._options.parameters()

    def build_args(self, input_path: str | Path, page_num: int, output_path: str | Path) -> list[str]:
        return build_imagemagick_args(
            self._settings, self._options, input_path, page_num, output_path
        )

    def render(self, input_path: str | Path, page_num: int, output_path: str | Path) -> None:
        binary = shutil.which(self._binary)
        if binary is None:
            raise RenderError(
                f"ImageMagick binary '{self._binary}' not found on PATH", page_num=page_num
            )

        args = self.build_args(input_path, page_num, output_path)
        logger.debug("Running %s %s", self._binary, " ".join(args))
        try:
            subprocess.run(
                [binary, *args],
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            output = (e.stdout or "") + (e.stderr or "")
            raise RenderError(
                f"ImageMagick failed on page {page_num} (exit {e.returncode}): {output.strip()}",
                page_num=page_num,
                output=output,
            ) from e
        except OSError as e:
            raise RenderError(
                f"Failed to run ImageMagick on page {page_num}: {e}", page_num=page_num
            ) from e


def build_imagemagick_args(
    settings: ImageSettings,
    options: ImageMagickOptions,
    input_path: str | Path,
    page_num: int,
    output_path: str | Path,
) -> list[str]:
    """Build the argument list for ``magick``.

    Order:
      1. ``-density`` (must precede the input to affect rasterization)
      2. ``input[page_index]`` (0-indexed)
      3. ``-background`` / ``-flatten``
      4. filters: ``-rotate`` → ``-modulate`` → ``-brightness-contrast``
      5. ``-quality`` (JPEG only)
      6. output path

    Filters at their neutral value are omitted.
    """
    args = [
        "-density", str(settings.dpi),
        f"{input_path}[{page_num - 1}]",
        "-background", options.background,
        "-flatten",
    ]

    if options.rotation:
        args += ["-rotate", str(options.rotation)]

    brightness = options.brightness if options.brightness is not None else _NEUTRAL_BRIGHTNESS
    saturation = options.saturation if options.saturation is not None else _NEUTRAL_SATURATION
    if brightness != _NEUTRAL_BRIGHTNESS or saturation != _NEUTRAL_SATURATION:
        args += ["-modulate", f"{brightness},{saturation}"]

    if options.contrast:
        args += ["-brightness-contrast", f"0,{options.contrast}"]

    if settings.format == "jpg":
        args += ["-quality", str(settings.quality)]

    args.append(str(output_path))
    return args
