"""
Module: extractor.slicer

Purpose:
    Cuts a keyed sheet into its individual stickers. Each grid cell is
    cropped into its own buffer, in row-major reading order.

Key Functions:
    - slice_sheet(): Split a sheet into StickerSlots
    - require_complete(): Reject results with missing slots

Dependencies:
    - PIL.Image: Cell cropping
    - core.models: RasterImage, GridLayout, StickerSlot

Used By:
    - extractor.pipeline: Second stage of process_sheet
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from sticker_toolkit.core.errors import DimensionError, IncompleteSheetError
from sticker_toolkit.core.models import GridLayout, RasterImage, StickerSlot

logger = logging.getLogger(__name__)


def slice_sheet(image: RasterImage, layout: GridLayout) -> List[StickerSlot]:
    """
    Split a sheet into equally sized stickers.

    Args:
        image: Sheet to split
        layout: Grid the sheet was rendered with

    Returns:
        One StickerSlot per cell ordered by index = row * columns + column.
        Every slot owns a copy of its pixels.

    Raises:
        DimensionError: If the width is not divisible by layout.columns or
            the height is not divisible by layout.rows. Partial cells are
            never produced.

    Example:
        >>> slots = slice_sheet(sheet_1024, GridLayout(4, 4))
        >>> len(slots), slots[0].image.size
        (16, (256, 256))
    """
    if image.width % layout.columns:
        raise DimensionError(
            f"Sheet width {image.width} is not divisible by {layout.columns} columns"
        )
    if image.height % layout.rows:
        raise DimensionError(
            f"Sheet height {image.height} is not divisible by {layout.rows} rows"
        )

    cell_width = image.width // layout.columns
    cell_height = image.height // layout.rows

    sheet = image.to_pil()
    slots: List[StickerSlot] = []
    for index in range(layout.cell_count):
        box = layout.cell_box(index, cell_width, cell_height)
        cell = RasterImage.from_pil(sheet.crop(box))
        slots.append(StickerSlot(image=cell, index=index))

    logger.debug(
        f"Sliced {image.width}x{image.height} sheet into {len(slots)} "
        f"cells of {cell_width}x{cell_height}"
    )
    return slots


def require_complete(slots: Sequence[StickerSlot], expected_count: int) -> None:
    """
    Check that slicing produced every sticker the caller asked for.

    Raises:
        IncompleteSheetError: If fewer than expected_count slots exist
    """
    if len(slots) < expected_count:
        raise IncompleteSheetError(
            f"Generated sheet is incomplete: {len(slots)} of {expected_count} stickers"
        )
