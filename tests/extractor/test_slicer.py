"""
Tests for extractor.slicer

Test Coverage:
- slice_sheet(): cell sizes, row-major order, copying
- DimensionError on sheets not divisible by the grid
- require_complete(): incomplete results rejected
"""
import pytest

from sticker_toolkit.core.errors import DimensionError, IncompleteSheetError
from sticker_toolkit.core.models import GridLayout, RasterImage, StickerSlot
from sticker_toolkit.extractor import require_complete, slice_sheet


def test_slice_sheet_cell_count_and_size(colored_sheet, layout_4x4):
    """4x4 grid on a 64x64 sheet gives sixteen 16x16 stickers."""
    # Act
    slots = slice_sheet(colored_sheet, layout_4x4)

    # Assert
    assert len(slots) == 16
    assert all(slot.image.size == (16, 16) for slot in slots)


def test_slice_sheet_row_major_order(colored_sheet, layout_4x4, cell_colors):
    """Slot i carries the colour of cell i: (0,0) red, (0,1) blue, ..."""
    # Act
    slots = slice_sheet(colored_sheet, layout_4x4)

    # Assert
    assert slots[0].image.pixel(0, 0)[:3] == (255, 0, 0)
    assert slots[1].image.pixel(0, 0)[:3] == (0, 0, 255)
    for i, slot in enumerate(slots):
        assert slot.index == i
        assert slot.image.pixel(8, 8)[:3] == cell_colors[i]


def test_slice_sheet_cells_are_uniform(colored_sheet, layout_4x4, cell_colors):
    """No pixel from a neighbouring cell bleeds into a slot."""
    for i, slot in enumerate(slice_sheet(colored_sheet, layout_4x4)):
        corners = [slot.image.pixel(x, y) for x in (0, 15) for y in (0, 15)]
        assert all(c[:3] == cell_colors[i] for c in corners)


def test_slice_sheet_non_square_grid(make_cell_sheet, cell_colors):
    """3 columns x 2 rows maps index 3 to the second row, first column."""
    # Arrange
    layout = GridLayout(columns=3, rows=2)
    sheet = make_cell_sheet(layout, 10)

    # Act
    slots = slice_sheet(sheet, layout)

    # Assert
    assert len(slots) == 6
    assert slots[3].image.pixel(0, 0)[:3] == cell_colors[3]
    assert all(s.image.size == (10, 10) for s in slots)


def test_slice_sheet_keeps_alpha(make_cell_sheet, layout_4x4):
    """Alpha values are copied along with colour."""
    sheet = make_cell_sheet(layout_4x4, 4, alpha=77)
    assert all(s.image.pixel(1, 1)[3] == 77 for s in slice_sheet(sheet, layout_4x4))


def test_slice_sheet_slots_do_not_alias_sheet(colored_sheet, layout_4x4):
    """Each slot owns its own buffer."""
    slots = slice_sheet(colored_sheet, layout_4x4)
    assert all(slot.image.pixels is not colored_sheet.pixels for slot in slots)


def test_slice_sheet_single_cell_returns_copy(colored_sheet):
    """A 1x1 layout yields the whole sheet."""
    slots = slice_sheet(colored_sheet, GridLayout(1, 1))
    assert len(slots) == 1
    assert slots[0].image == colored_sheet


def test_slice_sheet_rejects_indivisible_width(layout_4x4):
    """101x100 cannot be split into 4 columns."""
    with pytest.raises(DimensionError, match="width 101"):
        slice_sheet(RasterImage.new(101, 100), layout_4x4)


def test_slice_sheet_rejects_indivisible_height(layout_4x4):
    """100x102 cannot be split into 4 rows."""
    with pytest.raises(DimensionError, match="height 102"):
        slice_sheet(RasterImage.new(100, 102), layout_4x4)


def test_slice_sheet_accepts_100x100_on_4x4(layout_4x4):
    """100 / 4 = 25, so this one is fine."""
    slots = slice_sheet(RasterImage.new(100, 100), layout_4x4)
    assert slots[15].image.size == (25, 25)


def test_require_complete_passes_full_set():
    slots = [StickerSlot(RasterImage.new(1, 1), i) for i in range(16)]
    require_complete(slots, 16)


def test_require_complete_rejects_short_set():
    """Fewer slots than expected is an incomplete generation."""
    slots = [StickerSlot(RasterImage.new(1, 1), i) for i in range(15)]
    with pytest.raises(IncompleteSheetError, match="15 of 16"):
        require_complete(slots, 16)


def test_incomplete_sheet_is_a_dimension_error():
    """Callers catching DimensionError also see incomplete sheets."""
    assert issubclass(IncompleteSheetError, DimensionError)
