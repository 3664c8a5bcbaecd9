"""Concurrency: bounded parallel page rendering."""

from docrender.concurrency.pool import RenderPool

__all__ = ["RenderPool"]
