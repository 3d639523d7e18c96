"""
Module: builder

Purpose:
    Recombines stickers into one sheet for preview and download.

Key Functions:
    - compose(): Lay slots out on a grid
    - merge_slots(): Choose kept or fresh sticker per index

Dependencies:
    - PIL: Canvas allocation and pasting
    - sticker_toolkit.core.models: RasterImage, GridLayout, StickerSlot

Used By:
    - sticker_toolkit.cli
"""

from .composer import compose, slot_images
from .merge import merge_slots

__all__ = [
    "compose",
    "slot_images",
    "merge_slots",
]
