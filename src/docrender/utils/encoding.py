"""Base64 data URI encoding for rendered images."""

from __future__ import annotations

import base64

from docrender.document.formats import ImageFormat


def image_to_base64(image_bytes: bytes) -> str:
    """Encode raw image bytes to a base64 string."""
    return base64.b64encode(image_bytes).decode("ascii")


def encode_image_data_uri(image_bytes: bytes, fmt: ImageFormat | str) -> str:
    """Return ``data:<mime>;base64,<payload>`` for an image."""
    if not image_bytes:
        raise ValueError("Image data is empty")
    mime = ImageFormat(fmt).mime_type
    return f"data:{mime};base64,{image_to_base64(image_bytes)}"
