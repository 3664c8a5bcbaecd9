"""Page selection syntax for the command line.

Supports: ``3``, ``1,3,5``, ``2:5``, ``2:``, ``:3``, and empty (all pages).
Unlike range specs, explicit lists keep the order given.
"""

from __future__ import annotations


def parse_page_spec(spec: str, page_count: int) -> list[int]:
    """Resolve a page spec to concrete 1-based page numbers."""
    spec = spec.strip()
    if not spec:
        return list(range(1, page_count + 1))

    if ":" in spec:
        return _parse_range(spec, page_count)

    if "," in spec:
        return [_parse_page(part, page_count) for part in spec.split(",")]

    return [_parse_page(spec, page_count)]


def _parse_range(spec: str, page_count: int) -> list[int]:
    parts = spec.split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid range syntax: {spec}")

    start = _parse_bound(parts[0], default=1, label="start")
    end = _parse_bound(parts[1], default=page_count, label="end")

    if start > end:
        raise ValueError(f"Start page ({start}) must be <= end page ({end})")
    if end > page_count:
        raise ValueError(f"End page ({end}) exceeds document page count ({page_count})")
    return list(range(start, end + 1))


def _parse_bound(text: str, default: int, label: str) -> int:
    text = text.strip()
    if not text:
        return default
    try:
        value = int(text)
    except ValueError:
        raise ValueError(f"Invalid {label} page: {text}") from None
    if value < 1:
        raise ValueError(f"Invalid {label} page: {text}")
    return value


def _parse_page(text: str, page_count: int) -> int:
    try:
        page = int(text.strip())
    except ValueError:
        raise ValueError(f"Invalid page number: {text}") from None
    if not 1 <= page <= page_count:
        raise ValueError(f"Page {page} out of range (1-{page_count})")
    return page
