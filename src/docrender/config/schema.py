"""Pydantic models for renderer, cache, and logging configuration.

Image configuration is built in two stages: a mutable ``ImageConfig`` draft
that layers are merged into, and a frozen ``ImageSettings`` produced by
``ImageConfig.finalize()`` once defaults are applied and values validated.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from docrender.config.defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_CACHE_BACKEND,
    DEFAULT_CACHE_DIR,
    DEFAULT_DPI,
    DEFAULT_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_QUALITY,
    DEFAULT_RENDERER,
)
from docrender.errors.exceptions import ConfigurationError

_FORMAT_ALIASES = {"png": "png", "jpg": "jpg", "jpeg": "jpg"}


class LogLevel(StrEnum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    DISABLED = "disabled"


class LoggerConfig(BaseModel):
    level: LogLevel = LogLevel(DEFAULT_LOG_LEVEL)


class CacheConfig(BaseModel):
    """Names a cache backend and carries its implementation-specific options."""

    name: str = ""
    options: dict[str, Any] = Field(default_factory=dict)

    def merge(self, source: CacheConfig) -> None:
        if source.name:
            self.name = source.name
        self.options.update(source.options)


class ImageSettings(BaseModel):
    """Validated, immutable rendering settings shared by every renderer."""

    model_config = ConfigDict(frozen=True)

    format: str
    quality: int = Field(ge=1, le=100)
    dpi: int = Field(gt=0)
    options: dict[str, Any] = Field(default_factory=dict)


class ImageConfig(BaseModel):
    """Draft image configuration: every field optional until finalized."""

    format: str | None = None
    quality: int | None = None
    dpi: int | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    def merge(self, source: ImageConfig) -> None:
        """Overlay the fields that are set on ``source``."""
        if source.format:
            self.format = source.format
        if source.quality is not None:
            self.quality = source.quality
        if source.dpi is not None:
            self.dpi = source.dpi
        self.options.update(source.options)

    def finalize(self) -> ImageSettings:
        """Apply defaults, validate, and return frozen settings."""
        raw_format = (self.format or DEFAULT_FORMAT).strip().lower()
        fmt = _FORMAT_ALIASES.get(raw_format)
        if fmt is None:
            raise ConfigurationError(
                f"Unsupported image format: {self.format} (must be 'png' or 'jpg')",
                option="format",
            )
        try:
            return ImageSettings(
                format=fmt,
                quality=self.quality if self.quality is not None else DEFAULT_QUALITY,
                dpi=self.dpi if self.dpi is not None else DEFAULT_DPI,
                options=dict(self.options),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid image settings: {e}") from e


class ImageMagickOptions(BaseModel):
    """Renderer-specific filters parsed from ``ImageSettings.options``.

    Unset filters stay ``None`` so that "not configured" remains
    distinguishable from an explicit neutral value.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    background: str = Field(default=DEFAULT_BACKGROUND, min_length=1)
    brightness: int | None = Field(default=None, ge=0, le=200)  # 100 is neutral
    contrast: int | None = Field(default=None, ge=-100, le=100)  # 0 is neutral
    saturation: int | None = Field(default=None, ge=0, le=200)  # 100 is neutral
    rotation: int | None = Field(default=None, ge=0, le=360)

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> ImageMagickOptions:
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid renderer options: {e}") from e

    def parameters(self) -> list[str]:
        """Return ``key=value`` strings for every set option, alphabetically."""
        params = [f"background={self.background}"]
        for name in ("brightness", "contrast", "rotation", "saturation"):
            value = getattr(self, name)
            if value is not None:
                params.append(f"{name}={value}")
        return params


class AppConfig(BaseModel):
    cache: CacheConfig = Field(
        default_factory=lambda: CacheConfig(
            name=DEFAULT_CACHE_BACKEND, options={"directory": DEFAULT_CACHE_DIR}
        )
    )
    cache_disabled: bool = False
    image: ImageConfig = Field(default_factory=ImageConfig)
    renderer: str = DEFAULT_RENDERER
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)
    logging: LoggerConfig = Field(default_factory=LoggerConfig)


def build_app_config(merged: dict[str, Any]) -> AppConfig:
    """Build an AppConfig from the flat dict produced by the config hierarchy.

    A ``cache_dir`` set by any layer overrides ``cache_options.directory``;
    the temp-dir default applies only when neither is set.
    """
    cache = CacheConfig(
        name=merged.get("cache_backend") or DEFAULT_CACHE_BACKEND,
        options=dict(merged.get("cache_options") or {}),
    )
    if merged.get("cache_dir"):
        cache.merge(CacheConfig(options={"directory": str(merged["cache_dir"])}))
    cache.options.setdefault("directory", DEFAULT_CACHE_DIR)

    max_workers = merged.get("max_workers")
    try:
        return AppConfig(
            cache=cache,
            cache_disabled=bool(merged.get("cache_disabled", False)),
            image=ImageConfig(
                format=merged.get("format"),
                quality=merged.get("quality"),
                dpi=merged.get("dpi"),
                options=dict(merged.get("image_options") or {}),
            ),
            renderer=merged.get("renderer") or DEFAULT_RENDERER,
            max_workers=DEFAULT_MAX_WORKERS if max_workers is None else max_workers,
            logging=LoggerConfig(level=merged.get("log_level") or DEFAULT_LOG_LEVEL),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
