"""
Module: grid

Purpose:
    Provides GridLayout (the logical column/row structure of a sticker
    sheet) and StickerSlot (one pose cut out of a sheet). Both are
    frozen; the index mapping here is shared by the slicer and the
    composer so that the two are exact inverses.

Key Classes:
    - GridLayout: Immutable (columns, rows) pair with row-major mapping
    - StickerSlot: (RasterImage, index) pair produced by slicing

Dependencies:
    - dataclasses (std)
    - core.models.raster: RasterImage

Used By:
    - extractor.slicer
    - extractor.pipeline
    - builder.composer
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from sticker_toolkit.common.thresholds import GRID_THRESHOLDS

from .raster import RasterImage

_LAYOUT_PATTERN = re.compile(r"^\s*(\d+)\s*[xX×]\s*(\d+)\s*$")


@dataclass(frozen=True, slots=True)
class GridLayout:
    """
    Logical grid of a sticker sheet.

    Cells are numbered row-major from zero: index = row * columns + column,
    which matches the left-to-right, top-to-bottom order users read
    "sticker #1" through "#N" in.

    Attributes:
        columns: Number of cells per row
        rows: Number of rows

    Invariants:
        - columns > 0
        - rows > 0

    Example:
        >>> layout = GridLayout(columns=4, rows=4)
        >>> layout.cell_count
        16
        >>> layout.position(5)
        (1, 1)
    """

    columns: int
    rows: int

    def __post_init__(self) -> None:
        """Validate layout on construction."""
        for name in ("columns", "rows"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer: {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive: {value}")

    @classmethod
    def parse(cls, text: str) -> GridLayout:
        """
        Parse a "COLUMNSxROWS" string such as "4x4".

        Raises:
            ValueError: If text is not of that form
        """
        match = _LAYOUT_PATTERN.match(text)
        if not match:
            raise ValueError(f"Grid must look like '4x4', got {text!r}")
        return cls(columns=int(match.group(1)), rows=int(match.group(2)))

    @property
    def cell_count(self) -> int:
        """Total number of cells (columns * rows)."""
        return self.columns * self.rows

    def position(self, index: int) -> Tuple[int, int]:
        """
        Map a row-major index to (row, column).

        Raises:
            IndexError: If index is outside the grid
        """
        if not 0 <= index < self.cell_count:
            raise IndexError(f"Cell index {index} outside {self}")
        return divmod(index, self.columns)

    def index_of(self, row: int, column: int) -> int:
        """Map (row, column) to the row-major index."""
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise IndexError(f"Cell ({row}, {column}) outside {self}")
        return row * self.columns + column

    def cell_box(self, index: int, cell_width: int, cell_height: int) -> Tuple[int, int, int, int]:
        """
        Pixel box (left, top, right, bottom) of a cell.

        Right and bottom are exclusive, as Pillow's crop expects.
        """
        row, column = self.position(index)
        left = column * cell_width
        top = row * cell_height
        return (left, top, left + cell_width, top + cell_height)

    def __str__(self) -> str:
        return f"{self.columns}x{self.rows}"


DEFAULT_LAYOUT = GridLayout(
    columns=GRID_THRESHOLDS.default_columns,
    rows=GRID_THRESHOLDS.default_rows,
)


@dataclass(frozen=True, slots=True)
class StickerSlot:
    """
    One sticker cut from a sheet.

    Attributes:
        image: The sticker's own pixel buffer (never shared with the sheet)
        index: Zero-based row-major position in the source grid
    """

    image: RasterImage
    index: int

    @property
    def label(self) -> str:
        """One-based label shown to users, e.g. "#1"."""
        return f"#{self.index + 1}"
