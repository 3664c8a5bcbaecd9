"""Layered configuration loading.

Layers, lowest priority first:
  1. Package defaults
  2. User config      (~/.docrender/config.yaml)
  3. Project config   (nearest docrender.yaml at or above the cwd)
  4. Environment      (DOCRENDER_*)
  5. Explicit keyword overrides (CLI flags); ``None`` means "not given"

Mapping values such as ``image_options`` merge key by key across layers.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml

from docrender.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".docrender" / "config.yaml"
_PROJECT_CONFIG_NAME = "docrender.yaml"
_ENV_PREFIX = "DOCRENDER_"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Config keys readable from DOCRENDER_<KEY>, with their parsers
_ENV_PARSERS: dict[str, Callable[[str], Any]] = {
    "format": str,
    "dpi": int,
    "quality": int,
    "renderer": str,
    "cache_backend": str,
    "cache_dir": str,
    "cache_disabled": _parse_bool,
    "max_workers": int,
    "log_level": str,
}


def load_config_hierarchy(**overrides: Any) -> dict[str, Any]:
    """Resolve the effective configuration as a flat dict."""
    merged = get_defaults()
    for source, layer in _layers(overrides):
        logger.debug("Applying config layer %s: %s", source, sorted(layer))
        _merge_into(merged, layer)
    return merged


def _layers(overrides: Mapping[str, Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    candidates = [_GLOBAL_CONFIG_PATH]
    project = _find_project_config()
    if project is not None:
        candidates.append(project)
    for path in candidates:
        layer = _read_config_file(path)
        if layer:
            yield str(path), layer

    env = _read_env()
    if env:
        yield "environment", env

    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        yield "arguments", explicit


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> None:
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            target[key] = {**current, **value}
        else:
            target[key] = value


def _read_config_file(path: Path) -> dict[str, Any] | None:
    """Parse a YAML mapping from ``path``; unreadable files are skipped."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level must be a mapping", path)
        return None
    return data


def _find_project_config(start: Path | None = None) -> Path | None:
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def _read_env() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key in _ENV_PARSERS:
        raw = os.environ.get(_ENV_PREFIX + key.upper())
        if raw is not None:
            values[key] = _parse_env_value(key, raw)
    return values


def _parse_env_value(key: str, raw: str) -> Any:
    """Convert one environment string; unparseable numbers are kept as text
    so that validation reports them against the right option."""
    parser = _ENV_PARSERS.get(key, str)
    try:
        return parser(raw)
    except ValueError:
        logger.warning("%s%s=%r is not a valid %s", _ENV_PREFIX, key.upper(), raw, parser.__name__)
        return raw
