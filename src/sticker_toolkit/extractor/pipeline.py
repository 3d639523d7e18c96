"""
Module: extractor.pipeline

Purpose:
    Orchestrates turning a generated sheet into individual stickers:
    key out the background, slice the grid, and reject incomplete
    results. Also runs several independent sheets concurrently.

Key Functions:
    - process_sheet(): Keyed sheet + stickers from a RasterImage
    - process_encoded_sheet(): Same, starting from bytes or a data URL
    - process_batch(): Several sheets on a thread pool

Key Classes:
    - SheetResult: Container for pipeline output

Dependencies:
    - concurrent.futures: Thread pool for batches
    - extractor.chroma_key: Background removal
    - extractor.slicer: Grid slicing
    - codec: Decoding encoded sheets

Used By:
    - sticker_toolkit.cli: split and regenerate commands
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from sticker_toolkit.codec import decode, decode_data_url
from sticker_toolkit.core.models import DEFAULT_LAYOUT, GridLayout, RasterImage, StickerSlot

from .chroma_key import background_fraction, extract
from .config import ExtractionConfig
from .slicer import require_complete, slice_sheet
from .timing import TimingLog, timed_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetResult:
    """
    Result of processing one generated sheet.

    Attributes:
        transparent_sheet: Whole sheet after background removal.
        slots: Stickers in row-major order.
        layout: Grid the sheet was sliced with.
        background_fraction: Share of fully transparent pixels.
        timings: Phase durations for this sheet.
    """
    transparent_sheet: RasterImage
    slots: Tuple[StickerSlot, ...]
    layout: GridLayout
    background_fraction: float
    timings: TimingLog = field(default_factory=TimingLog, compare=False)

    @property
    def images(self) -> List[RasterImage]:
        """Sticker images without their indices, ready for compose()."""
        return [slot.image for slot in self.slots]


def process_sheet(
    sheet: RasterImage,
    layout: GridLayout = DEFAULT_LAYOUT,
    *,
    config: Optional[ExtractionConfig] = None,
    sheet_id: str = "sheet",
) -> SheetResult:
    """
    Turn a generated sheet into transparent stickers.

    Pipeline:
    1. Key out the chroma background (aggressive band unless configured)
    2. Slice the keyed sheet into layout.cell_count stickers
    3. Reject the result if any sticker is missing

    Args:
        sheet: Decoded sheet from the generator.
        layout: Grid the generator was asked for.
        config: Optional extraction configuration.
        sheet_id: Name used in logs and timings.

    Returns:
        SheetResult with the keyed sheet and its stickers.

    Raises:
        DimensionError: If the sheet does not divide evenly into the grid.
        IncompleteSheetError: If fewer stickers than cells were produced.

    Example:
        >>> result = process_sheet(sheet, GridLayout(4, 4))
        >>> len(result.slots)
        16
    """
    config = config or ExtractionConfig()
    timings = TimingLog()

    logger.info(f"Processing {sheet_id}: {sheet.width}x{sheet.height} on a {layout} grid")

    with timed_phase(timings, sheet_id, "chroma_key"):
        keyed = extract(sheet, config.aggressive, config=config.chroma_config)

    with timed_phase(timings, sheet_id, "slice"):
        slots = slice_sheet(keyed, layout)

    require_complete(slots, layout.cell_count)

    fraction = background_fraction(keyed)
    logger.info(
        f"{sheet_id}: {len(slots)} stickers, {fraction:.1%} background removed"
    )
    logger.debug(f"{sheet_id} timings: {timings.sheet_timings.get(sheet_id, {})}")

    return SheetResult(
        transparent_sheet=keyed,
        slots=tuple(slots),
        layout=layout,
        background_fraction=fraction,
        timings=timings,
    )


def process_encoded_sheet(
    data: Union[bytes, str],
    layout: GridLayout = DEFAULT_LAYOUT,
    *,
    config: Optional[ExtractionConfig] = None,
    sheet_id: str = "sheet",
) -> SheetResult:
    """
    Decode a sheet and run process_sheet on it.

    Args:
        data: Encoded image bytes, or a base64 data URL string.

    Raises:
        DecodeError: If the data cannot be decoded. Callers typically
            retry generation on this, unlike on DimensionError.
    """
    sheet = decode_data_url(data) if isinstance(data, str) else decode(data)
    return process_sheet(sheet, layout, config=config, sheet_id=sheet_id)


def process_batch(
    sheets: Sequence[RasterImage],
    layout: GridLayout = DEFAULT_LAYOUT,
    *,
    config: Optional[ExtractionConfig] = None,
) -> List[SheetResult]:
    """
    Process independent sheets concurrently.

    Sheets share no state, so each runs on its own worker thread.

    Args:
        sheets: Decoded sheets.
        layout: Grid used for every sheet.
        config: Extraction configuration (max_workers sizes the pool).

    Returns:
        Results in the same order as sheets.

    Raises:
        DimensionError: Re-raised from the first failing sheet.
    """
    config = config or ExtractionConfig()
    if not sheets:
        return []

    workers = min(config.max_workers, len(sheets))
    logger.info(f"Processing {len(sheets)} sheets with {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(process_sheet, sheet, layout, config=config, sheet_id=f"sheet-{i}")
            for i, sheet in enumerate(sheets)
        ]
        results = [future.result() for future in futures]

    if logger.isEnabledFor(logging.DEBUG):
        combined = TimingLog()
        for result in results:
            combined.merge(result.timings)
        logger.debug(combined.summary())

    return results
