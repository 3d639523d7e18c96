"""
Module: builder.composer

Purpose:
    Lays an ordered sequence of same-sized stickers back out on a
    regular grid to form one preview/export sheet. Pure placement:
    pixel values, including alpha, are copied without blending.

Key Functions:
    - compose(): Build a sheet from ordered slots

Dependencies:
    - PIL.Image: Canvas allocation and pasting
    - core.models: RasterImage, GridLayout, StickerSlot

Used By:
    - cli: compose and regenerate commands
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Union

from PIL import Image

from sticker_toolkit.core.errors import ShapeMismatchError
from sticker_toolkit.core.models import GridLayout, RasterImage, StickerSlot

logger = logging.getLogger(__name__)

SlotLike = Union[RasterImage, StickerSlot]


def slot_images(slots: Sequence[SlotLike]) -> List[RasterImage]:
    """Unwrap StickerSlots, passing plain RasterImages through."""
    return [s.image if isinstance(s, StickerSlot) else s for s in slots]


def compose(slots: Sequence[SlotLike], layout: GridLayout) -> RasterImage:
    """
    Compose stickers into a single sheet.

    Slot i lands in cell layout.position(i), the exact inverse of
    slice_sheet, so composing an untouched slice result reproduces the
    original sheet.

    Args:
        slots: One image (or StickerSlot) per cell, row-major
        layout: Grid to lay the slots out on

    Returns:
        New RasterImage of (cell_width * columns, cell_height * rows)

    Raises:
        ShapeMismatchError: If len(slots) != layout.cell_count or the
            slots do not all share one size. Checked before any
            pixels are touched.

    Example:
        >>> sheet = compose(slots, GridLayout(4, 4))
        >>> sheet.size
        (1024, 1024)
    """
    images = slot_images(slots)

    if len(images) != layout.cell_count:
        raise ShapeMismatchError(
            f"Expected {layout.cell_count} slots for a {layout} grid, got {len(images)}"
        )

    cell_width, cell_height = images[0].size
    for index, img in enumerate(images):
        if img.size != (cell_width, cell_height):
            raise ShapeMismatchError(
                f"Slot {index} is {img.width}x{img.height}, "
                f"expected {cell_width}x{cell_height}"
            )

    # Transparent canvas; paste without a mask replaces RGBA outright
    canvas = Image.new(
        "RGBA",
        (cell_width * layout.columns, cell_height * layout.rows),
        (0, 0, 0, 0),
    )
    for index, img in enumerate(images):
        left, top, _, _ = layout.cell_box(index, cell_width, cell_height)
        canvas.paste(img.to_pil(), (left, top))

    logger.debug(f"Composed {len(images)} slots into {canvas.width}x{canvas.height} sheet")
    return RasterImage.from_pil(canvas)
