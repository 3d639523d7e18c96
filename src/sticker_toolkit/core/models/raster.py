"""
Module: raster

Purpose:
    Provides the RasterImage dataclass - an immutable RGBA8 pixel buffer
    that every stage of the sticker pipeline consumes and produces.
    Stages never edit a buffer in place; each transformation allocates
    a new RasterImage, so slots reused across generations never alias.

Key Functions:
    - RasterImage.new(): Allocate a filled buffer
    - RasterImage.from_array(): Copy from a numpy array
    - RasterImage.from_pil(): Copy from a Pillow image
    - RasterImage.as_array(): Read-only numpy view
    - RasterImage.to_pil(): Convert to a Pillow image

Dependencies:
    - numpy: Array views for vectorised pixel work
    - PIL.Image: Conversion at the crop/paste seams

Used By:
    - extractor.chroma_key, extractor.slicer
    - builder.composer
    - codec.image_codec
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image

CHANNELS = 4

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True, slots=True)
class RasterImage:
    """
    Immutable RGBA image with 8 bits per channel.

    Pixels are stored row by row, top to bottom, each pixel as four
    bytes (red, green, blue, alpha).

    Attributes:
        width: Width in pixels
        height: Height in pixels
        pixels: Raw RGBA buffer

    Invariants:
        - width > 0 and height > 0
        - len(pixels) == width * height * 4

    Example:
        >>> img = RasterImage.new(2, 1, fill=(255, 0, 0, 255))
        >>> img.pixel(1, 0)
        (255, 0, 0, 255)
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        """Validate buffer shape on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive: {self.width}x{self.height}"
            )
        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            raise ValueError(
                f"Buffer length {len(self.pixels)} does not match "
                f"{self.width}x{self.height}x{CHANNELS} = {expected}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def new(cls, width: int, height: int, fill: RGBA = (0, 0, 0, 0)) -> RasterImage:
        """Allocate an image filled with a single colour (transparent by default)."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive: {width}x{height}")
        return cls(width, height, bytes(fill) * (width * height))

    @classmethod
    def from_array(cls, array: np.ndarray) -> RasterImage:
        """
        Copy pixels from a numpy array.

        Args:
            array: uint8 array shaped (H, W, 4), or (H, W, 3) which
                gains an opaque alpha channel.

        Returns:
            New RasterImage that owns a copy of the data

        Raises:
            ValueError: If the array is not (H, W, 3|4)
        """
        if array.ndim != 3 or array.shape[2] not in (3, CHANNELS):
            raise ValueError(f"Expected an (H, W, 3|4) array, got shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array.astype(np.uint8), alpha], axis=2)
        height, width = array.shape[:2]
        data = np.ascontiguousarray(array, dtype=np.uint8).tobytes()
        return cls(width, height, data)

    @classmethod
    def from_pil(cls, image: Image.Image) -> RasterImage:
        """Copy a Pillow image of any mode, converting to RGBA."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(image.width, image.height, image.tobytes())

    # ─────────────────────────────────────────────────────────────────────────
    # Access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels, matching Pillow's convention."""
        return (self.width, self.height)

    def as_array(self) -> np.ndarray:
        """
        Read-only (H, W, 4) uint8 view of the buffer.

        The view shares memory with this image; numpy refuses writes
        because the underlying bytes object is immutable.
        """
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS
        )

    def to_pil(self) -> Image.Image:
        """Return a new Pillow RGBA image holding a copy of the pixels."""
        return Image.frombytes("RGBA", self.size, self.pixels)

    def pixel(self, x: int, y: int) -> RGBA:
        """RGBA tuple at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height}")
        offset = (y * self.width + x) * CHANNELS
        r, g, b, a = self.pixels[offset:offset + CHANNELS]
        return (r, g, b, a)

    def __repr__(self) -> str:
        return f"RasterImage({self.width}x{self.height})"
