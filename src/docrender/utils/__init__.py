"""Utility helpers for page specs and image encoding."""
