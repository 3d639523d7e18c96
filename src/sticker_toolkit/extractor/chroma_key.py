"""
Module: extractor.chroma_key

Purpose:
    Converts a sheet rendered on a flat chroma-key background into an
    image with a real alpha channel. Background pixels become
    transparent, edge pixels get a soft alpha ramp, and the key colour
    bleeding into those edges is suppressed so no green fringe shows
    once a sticker sits on a chat background.

Key Functions:
    - extract(): Key out the background of an image
    - color_distance(): Weighted distance of each pixel to the key colour
    - background_fraction(): Share of fully transparent pixels

Dependencies:
    - numpy: Vectorised per-pixel classification
    - extractor.config: ChromaKeyConfig

Used By:
    - extractor.pipeline: First stage of process_sheet
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from sticker_toolkit.core.models import RasterImage

from .config import ChromaKeyConfig

logger = logging.getLogger(__name__)


def color_distance(rgb: np.ndarray, config: ChromaKeyConfig) -> np.ndarray:
    """
    Weighted Euclidean distance of each pixel to the key colour.

    Args:
        rgb: Array whose last axis holds red, green, blue
        config: Key colour and channel weights

    Returns:
        Float array with the shape of rgb minus its last axis

    Example:
        >>> color_distance(np.array([[0, 255, 0]]), ChromaKeyConfig())
        array([0.])
    """
    diff = rgb[..., :3].astype(np.float64) - np.asarray(config.key_color, dtype=np.float64)
    weights = np.asarray(config.channel_weights, dtype=np.float64)
    return np.sqrt((diff * diff * weights).sum(axis=-1))


def _keyed_alpha(distance: np.ndarray, config: ChromaKeyConfig) -> np.ndarray:
    """Map distances to alpha: 0 below inner, 255 from outer, linear between."""
    span = config.outer_threshold - config.inner_threshold
    ramp = (distance - config.inner_threshold) * (255.0 / span)
    return np.clip(np.rint(ramp), 0, 255).astype(np.uint8)


def _suppress_spill(pixels: np.ndarray, mask: np.ndarray, key_channel: int) -> None:
    """
    Clamp the key channel to the mean of the other two where mask is set.

    Operates on the freshly allocated output array only.
    """
    others = [c for c in range(3) if c != key_channel]
    mean = (pixels[..., others[0]].astype(np.uint16) + pixels[..., others[1]]) // 2
    channel = pixels[..., key_channel]
    clamped = np.minimum(channel, mean).astype(np.uint8)
    pixels[..., key_channel] = np.where(mask, clamped, channel)


def extract(
    image: RasterImage,
    aggressive: bool = True,
    *,
    config: Optional[ChromaKeyConfig] = None,
) -> RasterImage:
    """
    Replace a chroma-key background with transparency.

    Every pixel's alpha is recomputed from its distance to the key
    colour, capped by the alpha it already had. Pixels inside the key
    band (keyed alpha below 255) have the key channel pulled down to the
    mean of the other two channels. Pixels outside it keep their colour
    byte for byte, whatever alpha they came with.

    Because spill suppression only moves colours away from a saturated
    key, running extract twice with the same settings gives the same
    result as running it once.

    Args:
        image: Sheet to key
        aggressive: Use the wide tolerance band of the final pass.
            False selects the conservative preview band.
        config: Explicit settings; overrides `aggressive` when given

    Returns:
        New RasterImage of the same size. If no pixel is close enough
        to the key colour to be touched, the pixels are returned
        unchanged.

    Example:
        >>> keyed = extract(sheet)
        >>> keyed.pixel(0, 0)[3]  # corner was pure green
        0
    """
    config = config or ChromaKeyConfig.for_mode(aggressive)

    source = image.as_array()
    distance = color_distance(source, config)

    if not np.any(distance < config.outer_threshold):
        logger.debug(f"No key colour found in {image.width}x{image.height} image; leaving as is")
        return RasterImage(image.width, image.height, image.pixels)

    keyed = _keyed_alpha(distance, config)

    result = source.copy()
    result[..., 3] = np.minimum(keyed, source[..., 3])
    if config.suppress_spill:
        # Keyed alpha only: existing transparency alone never triggers spill
        _suppress_spill(result, keyed < 255, config.key_channel)

    return RasterImage.from_array(result)


def background_fraction(image: RasterImage) -> float:
    """Fraction of pixels that are fully transparent."""
    alpha = image.as_array()[..., 3]
    return float(np.count_nonzero(alpha == 0)) / alpha.size
