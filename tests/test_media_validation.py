import base64

import pytest

from tests.fakes import FakeUpload, jpeg_bytes, png_bytes
from utils.errors import InvalidInputKind, IOFailure
from utils.media_validation import (
    encode_image_bytes,
    encode_upload,
    ensure_image_media_type,
    strip_data_url_prefix,
)


@pytest.mark.asyncio
async def test_encode_upload_keeps_media_type_and_raw_base64():
    raw = jpeg_bytes()
    upload = FakeUpload(raw, "image/jpeg", filename="cat.jpg")

    payload = await encode_upload(upload)

    assert payload.media_type == "image/jpeg"
    assert "base64," not in payload.encoded_data
    assert not payload.encoded_data.startswith("data:")
    assert base64.b64decode(payload.encoded_data) == raw
    assert upload.reads == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None, ""])
async def test_encode_upload_rejects_non_images_without_reading(content_type):
    upload = FakeUpload(b"%PDF-1.4", content_type, filename="doc.pdf")

    with pytest.raises(InvalidInputKind):
        await encode_upload(upload)

    assert upload.reads == 0


@pytest.mark.asyncio
async def test_encode_upload_wraps_read_errors():
    upload = FakeUpload(b"", "image/png", error=OSError("disk went away"))

    with pytest.raises(IOFailure) as excinfo:
        await encode_upload(upload)

    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_encode_upload_rejects_empty_file():
    with pytest.raises(IOFailure):
        await encode_upload(FakeUpload(b"", "image/png"))


def test_media_type_is_normalized():
    assert ensure_image_media_type("Image/PNG; charset=binary") == "image/png"


def test_strip_data_url_prefix():
    assert strip_data_url_prefix("data:image/jpeg;base64,QUJD") == "QUJD"
    assert strip_data_url_prefix("QUJD") == "QUJD"


def test_encode_image_bytes_round_trips_contents():
    raw = png_bytes()
    payload = encode_image_bytes(raw, "image/png")
    assert base64.b64decode(payload.encoded_data) == raw
    assert payload.as_data_url().startswith("data:image/png;base64,")
