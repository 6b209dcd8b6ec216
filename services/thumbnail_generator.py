"""Preview generator service.

Provides a small OOP wrapper around Pillow that turns an `ImagePayload`
into a downscaled PNG preview. The preview fits within `max_size` pixels
and is returned as a `data:image/png;base64,...` URL the browser page can
display directly, independent of how the classification call turns out.

Public class: `ThumbnailGenerator`

Example:
    tg = ThumbnailGenerator(max_size=(512, 512))
    preview_url = tg.create_preview(payload)
"""
from __future__ import annotations

import base64
import io
from typing import Tuple

from PIL import Image

from models.vision_models import ImagePayload


class ThumbnailGenerator:
    """Generate preview images from encoded uploads.

    Args:
        max_size: Maximum width and height for the preview. Defaults to (512, 512).
        background: Optional background color used when flattening images with alpha.
            If None, images with alpha are flattened against white.
    """

    def __init__(self, max_size: Tuple[int, int] = (512, 512), background: Tuple[int, int, int] | None = None):
        self.max_size = max_size
        self.background = background or (255, 255, 255)

    def create_thumbnail_from_base64(self, data: str | bytes) -> str:
        """Create a thumbnail from base64-encoded image data.

        Args:
            data: Base64-encoded image data (either `str` or `bytes`).

        Returns:
            A base64-encoded PNG string of the thumbnail.

        Raises:
            ValueError: If the provided data cannot be decoded or opened as an image.
        """
        data_bytes = data.encode("utf-8") if isinstance(data, str) else data

        try:
            raw = base64.b64decode(data_bytes, validate=True)
        except Exception as exc:
            raise ValueError("Invalid base64 data provided") from exc

        try:
            src = Image.open(io.BytesIO(raw))
            src.load()
        except Exception as exc:
            raise ValueError("Decoded bytes are not a supported image format") from exc

        src = src.convert("RGBA")
        src.thumbnail(self.max_size, Image.LANCZOS)

        # Flatten alpha against the background color
        background = Image.new("RGB", src.size, self.background)
        background.paste(src, mask=src.split()[3])

        out_io = io.BytesIO()
        background.save(out_io, format="PNG", optimize=True)
        return base64.b64encode(out_io.getvalue()).decode("utf-8")

    def create_preview(self, payload: ImagePayload) -> str:
        """Return a PNG data URL previewing the uploaded image."""
        thumb_b64 = self.create_thumbnail_from_base64(payload.encoded_data)
        return f"data:image/png;base64,{thumb_b64}"
