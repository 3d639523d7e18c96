"""
Sticker Toolkit Core Package

Data models and error kinds used by every other subpackage.

1. **Immutable pixel buffers**
   - RasterImage wraps a bytes object; operations return new images.

2. **One index mapping**
   - GridLayout owns the row-major index <-> (row, column) mapping used
     by both slicing and composition.
"""

from .errors import (
    StickerSheetError,
    DimensionError,
    IncompleteSheetError,
    ShapeMismatchError,
    DecodeError,
)
from .models import RasterImage, GridLayout, StickerSlot, DEFAULT_LAYOUT

__all__ = [
    # errors
    "StickerSheetError",
    "DimensionError",
    "IncompleteSheetError",
    "ShapeMismatchError",
    "DecodeError",
    # models
    "RasterImage",
    "GridLayout",
    "StickerSlot",
    "DEFAULT_LAYOUT",
]
