"""
Module: core.errors

Purpose:
    Exception hierarchy for the sticker toolkit. Callers can tell a
    malformed generator result (DimensionError) apart from their own
    bookkeeping bugs (ShapeMismatchError) and from codec failures
    (DecodeError), and decide whether to retry generation or abort.

Key Classes:
    - StickerSheetError: Base class for all toolkit errors
    - DimensionError: Sheet not evenly divisible by the grid
    - IncompleteSheetError: Fewer slots than the caller expected
    - ShapeMismatchError: Inconsistent composition input
    - DecodeError: Encoded image could not be decoded

Used By:
    - extractor.slicer, builder.composer, builder.merge, codec
"""

from __future__ import annotations


class StickerSheetError(Exception):
    """Base class for errors raised by the sticker toolkit."""
    pass


class DimensionError(StickerSheetError):
    """Sheet dimensions are not evenly divisible by the requested grid."""
    pass


class IncompleteSheetError(DimensionError):
    """Slicing produced fewer slots than the caller requested."""
    pass


class ShapeMismatchError(StickerSheetError):
    """Slot count or slot sizes do not match the composition layout."""
    pass


class DecodeError(StickerSheetError):
    """Encoded image data could not be turned into a RasterImage."""
    pass
