import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to sys.path so we can import sticker_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from sticker_toolkit.core.models import GridLayout, RasterImage  # noqa: E402

GREEN = (0, 255, 0)

# Sixteen distinct, clearly non-green colours for per-cell sheets
CELL_COLORS = [
    (255, 0, 0), (0, 0, 255), (255, 255, 0), (255, 0, 255),
    (0, 255, 255), (128, 0, 0), (0, 0, 128), (128, 128, 0),
    (128, 0, 128), (0, 128, 128), (192, 192, 192), (64, 64, 64),
    (255, 128, 0), (128, 64, 255), (255, 200, 150), (20, 20, 20),
]


def cell_sheet(layout: GridLayout, cell_size: int, colors=None, alpha: int = 255) -> RasterImage:
    """Sheet with one solid colour per cell, row-major."""
    colors = colors or CELL_COLORS
    arr = np.zeros((layout.rows * cell_size, layout.columns * cell_size, 4), dtype=np.uint8)
    for index in range(layout.cell_count):
        row, col = layout.position(index)
        arr[row * cell_size:(row + 1) * cell_size, col * cell_size:(col + 1) * cell_size] = (
            *colors[index % len(colors)], alpha
        )
    return RasterImage.from_array(arr)


def character_sheet(layout: GridLayout, cell_size: int) -> RasterImage:
    """
    Green-screen sheet with a square "character" in every cell.

    Each character has an opaque interior, a dark outline, and a ring of
    half-green fringe pixels around it, like an anti-aliased render.
    """
    arr = np.zeros((layout.rows * cell_size, layout.columns * cell_size, 4), dtype=np.uint8)
    arr[...] = (*GREEN, 255)
    q = cell_size // 4
    for index in range(layout.cell_count):
        row, col = layout.position(index)
        top, left = row * cell_size, col * cell_size
        # Fringe ring
        arr[top + q - 1:top + 3 * q + 1, left + q - 1:left + 3 * q + 1] = (60, 180, 50, 255)
        # Outline
        arr[top + q:top + 3 * q, left + q:left + 3 * q] = (20, 20, 20, 255)
        # Interior (skin tone)
        arr[top + q + 1:top + 3 * q - 1, left + q + 1:left + 3 * q - 1] = (230, 180, 150, 255)
    return RasterImage.from_array(arr)


# Common test fixtures
@pytest.fixture
def layout_4x4():
    """Reference 4x4 layout."""
    return GridLayout(columns=4, rows=4)


@pytest.fixture
def colored_sheet(layout_4x4):
    """64x64 sheet with a distinct colour in each 16x16 cell."""
    return cell_sheet(layout_4x4, 16)


@pytest.fixture
def green_sheet(layout_4x4):
    """Generated-style sheet: characters on a pure green background."""
    return character_sheet(layout_4x4, 16)


@pytest.fixture
def make_cell_sheet():
    """Factory for per-cell colour sheets of any layout."""
    return cell_sheet


@pytest.fixture
def make_character_sheet():
    """Factory for green-screen character sheets of any layout."""
    return character_sheet


@pytest.fixture
def cell_colors():
    """Colours used by cell sheets, indexed by slot."""
    return CELL_COLORS
