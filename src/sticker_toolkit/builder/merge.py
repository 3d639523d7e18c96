"""
Module: builder.merge

Purpose:
    Caller-side selection between stickers kept from an earlier
    generation and freshly sliced ones. The composer has no notion of
    kept cells; this helper builds the per-index choice before compose()
    is called.

Key Functions:
    - merge_slots(): Pick kept or fresh image per index
"""

from __future__ import annotations

from typing import AbstractSet, List, Sequence

from sticker_toolkit.core.errors import ShapeMismatchError
from sticker_toolkit.core.models import RasterImage

from .composer import SlotLike, slot_images


def merge_slots(
    previous: Sequence[SlotLike],
    fresh: Sequence[SlotLike],
    keep: AbstractSet[int] = frozenset(),
) -> List[RasterImage]:
    """
    Merge kept stickers from a previous pass with a fresh pass.

    Args:
        previous: Stickers from the earlier generation (empty on the first run)
        fresh: Stickers sliced from the new sheet
        keep: Zero-based indices whose previous sticker is retained

    Returns:
        List with previous[i] where i is in keep, fresh[i] otherwise

    Raises:
        ShapeMismatchError: If previous and fresh differ in length, or a
            kept index has no previous sticker

    Example:
        >>> merged = merge_slots(old_slots, new_slots, keep={0, 5})
        >>> merged[0] is old_slots[0].image
        True
    """
    previous_images = slot_images(previous)
    fresh_images = slot_images(fresh)

    if not previous_images:
        if keep:
            raise ShapeMismatchError(
                f"Cannot keep slots {sorted(keep)} without a previous generation"
            )
        return fresh_images

    if len(previous_images) != len(fresh_images):
        raise ShapeMismatchError(
            f"Previous generation has {len(previous_images)} slots, "
            f"fresh one has {len(fresh_images)}"
        )

    out_of_range = [i for i in keep if not 0 <= i < len(previous_images)]
    if out_of_range:
        raise ShapeMismatchError(f"Kept slot indices out of range: {sorted(out_of_range)}")

    return [
        previous_images[i] if i in keep else fresh_images[i]
        for i in range(len(fresh_images))
    ]
