"""Configuration: defaults, layered hierarchy, and validated settings models."""

from docrender.config.hierarchy import load_config_hierarchy
from docrender.config.logger import configure_logging
from docrender.config.schema import (
    AppConfig,
    CacheConfig,
    ImageConfig,
    ImageMagickOptions,
    ImageSettings,
    LoggerConfig,
    LogLevel,
    build_app_config,
)

__all__ = [
    "AppConfig",
    "CacheConfig",
    "ImageConfig",
    "ImageMagickOptions",
    "ImageSettings",
    "LoggerConfig",
    "LogLevel",
    "build_app_config",
    "configure_logging",
    "load_config_hierarchy",
]
