"""Validation and encoding helpers for uploaded images."""

from __future__ import annotations

import base64
import re
from typing import Optional, Protocol

from models.vision_models import ImagePayload
from utils.errors import InvalidInputKind, IOFailure

_DATA_URL_PREFIX = re.compile(r"^\s*data:[^,]*?;base64,", re.IGNORECASE)


class ImageUpload(Protocol):
    """The subset of FastAPI's `UploadFile` the encoder relies on."""

    filename: Optional[str]
    content_type: Optional[str]

    async def read(self) -> bytes:  # pragma: no cover - protocol
        ...


def normalize_media_type(content_type: Optional[str]) -> str:
    """Lower-case a Content-Type value and drop parameters such as `; charset=`."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def ensure_image_media_type(content_type: Optional[str]) -> str:
    """Return the normalized media type, or raise if it is not an `image/*` type."""
    media_type = normalize_media_type(content_type)
    if not media_type.startswith("image/"):
        raise InvalidInputKind(f"Expected an image upload, got '{content_type or 'unknown'}'.")
    return media_type


def strip_data_url_prefix(encoded: str) -> str:
    """Remove a leading `data:<type>;base64,` scheme so only the raw payload remains."""
    return _DATA_URL_PREFIX.sub("", encoded, count=1).strip()


def encode_image_bytes(raw: bytes, media_type: str) -> ImagePayload:
    """Base64-encode already-read image bytes into an ImagePayload."""
    encoded = base64.b64encode(raw).decode("ascii")
    return ImagePayload(encoded_data=strip_data_url_prefix(encoded), media_type=media_type)


async def encode_upload(upload: ImageUpload) -> ImagePayload:
    """Validate an uploaded image and encode it for transport.

    The media type is checked before anything is read, so non-image uploads
    are rejected without touching their contents.

    Raises:
        InvalidInputKind: The upload does not declare an `image/*` media type.
        IOFailure: The contents could not be read or were empty.
    """
    media_type = ensure_image_media_type(upload.content_type)
    try:
        raw = await upload.read()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise IOFailure(f"Unable to read uploaded image '{upload.filename or 'upload'}'.") from exc
    if not raw:
        raise IOFailure("Uploaded image is empty.")
    return encode_image_bytes(raw, media_type)
