"""Shared Pydantic models for docrender."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from docrender.errors.exceptions import PageLevelError


class PageResult(BaseModel):
    """Outcome of rendering one page in a batch."""

    model_config = {"arbitrary_types_allowed": True}

    page_number: int
    data: bytes = b""
    error: PageLevelError | None = None
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


class ConversionResult(BaseModel):
    """Files written for one converted document."""

    source: Path
    pages: list[PageResult]
    written: list[Path] = Field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def pages_failed(self) -> list[int]:
        return [p.page_number for p in self.pages if not p.ok]
