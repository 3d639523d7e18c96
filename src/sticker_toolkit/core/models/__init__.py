"""
Core Models Package

Immutable data models shared by the extractor and builder.

All models in this package are frozen dataclasses, so they are safe to
pass between threads and never change underneath a caller that holds a
reference from an earlier generation.
"""

from .raster import RasterImage
from .grid import GridLayout, StickerSlot, DEFAULT_LAYOUT

__all__ = [
    "RasterImage",
    "GridLayout",
    "StickerSlot",
    "DEFAULT_LAYOUT",
]
