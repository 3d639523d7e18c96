"""
Module: codec.image_codec

Purpose:
    Decode/encode boundary between encoded image files and the raw
    RasterImage buffers the rest of the toolkit works on. Also handles
    the base64 data URLs the image generator returns and the browser
    preview consumes.

Key Functions:
    - decode(): Encoded bytes to RasterImage
    - encode(): RasterImage to encoded bytes (PNG by default)
    - decode_data_url(): "data:<mime>;base64,..." to RasterImage
    - encode_data_url(): RasterImage to a PNG data URL

Dependencies:
    - PIL.Image: Format detection, decoding and encoding
    - base64 (std)

Used By:
    - extractor.pipeline: process_encoded_sheet
    - cli: Reading and writing files
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re

from PIL import Image, UnidentifiedImageError

from sticker_toolkit.core.errors import DecodeError
from sticker_toolkit.core.models import RasterImage

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "PNG"

_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*),(?P<data>.*)$", re.DOTALL)


def decode(data: bytes) -> RasterImage:
    """
    Decode an encoded image of any format Pillow understands.

    Args:
        data: Encoded image bytes

    Returns:
        RasterImage in RGBA (images without alpha become fully opaque)

    Raises:
        DecodeError: If data is empty, truncated, or not an image
    """
    if not data:
        raise DecodeError("No image data received")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            raster = RasterImage.from_pil(img)
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Could not decode image ({len(data)} bytes): {exc}") from exc

    logger.debug(f"Decoded {raster.width}x{raster.height} image")
    return raster


def encode(image: RasterImage, format: str = DEFAULT_FORMAT) -> bytes:
    """
    Encode an image, PNG (lossless, with alpha) by default.

    Args:
        image: Image to encode
        format: Pillow format name

    Returns:
        Encoded bytes
    """
    buffer = io.BytesIO()
    image.to_pil().save(buffer, format=format)
    return buffer.getvalue()


def decode_data_url(url: str) -> RasterImage:
    """
    Decode a base64 data URL such as "data:image/png;base64,iVBOR...".

    Raises:
        DecodeError: If the URL is malformed, not base64, or not an image
    """
    match = _DATA_URL_PATTERN.match(url.strip())
    if not match:
        raise DecodeError("Not a data URL")
    if ";base64" not in match.group("params"):
        raise DecodeError("Only base64 data URLs are supported")

    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid base64 payload: {exc}") from exc

    return decode(payload)


def encode_data_url(image: RasterImage) -> str:
    """Encode an image as a PNG data URL for direct display."""
    payload = base64.b64encode(encode(image)).decode("ascii")
    return f"data:image/png;base64,{payload}"
