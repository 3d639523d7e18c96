"""
Tests for builder.composer

Test Coverage:
- compose(): sheet size, placement, transparency of the canvas
- Round trip with slice_sheet
- ShapeMismatchError on count or size mismatch
"""
import pytest

from sticker_toolkit.builder import compose
from sticker_toolkit.core.errors import ShapeMismatchError
from sticker_toolkit.core.models import GridLayout, RasterImage, StickerSlot
from sticker_toolkit.extractor import extract, slice_sheet


def _solid(color, size=(4, 4)):
    return RasterImage.new(size[0], size[1], fill=color)


def test_compose_size(layout_4x4):
    """Output is cell size times grid size."""
    slots = [_solid((i, 0, 0, 255), (5, 3)) for i in range(16)]
    assert compose(slots, layout_4x4).size == (20, 12)


def test_compose_places_row_major():
    """Slot i lands at (column * w, row * h)."""
    # Arrange
    layout = GridLayout(columns=3, rows=2)
    slots = [_solid((10 * i, 0, 0, 255)) for i in range(6)]

    # Act
    sheet = compose(slots, layout)

    # Assert
    assert sheet.pixel(0, 0)[0] == 0
    assert sheet.pixel(4, 0)[0] == 10
    assert sheet.pixel(8, 3)[0] == 20
    assert sheet.pixel(0, 4)[0] == 30
    assert sheet.pixel(11, 7)[0] == 50


def test_compose_copies_alpha_without_blending():
    """Semi-transparent and fully transparent slots keep their exact bytes."""
    # Arrange
    layout = GridLayout(2, 1)
    slots = [_solid((200, 100, 50, 128)), _solid((1, 2, 3, 0))]

    # Act
    sheet = compose(slots, layout)

    # Assert
    assert sheet.pixel(0, 0) == (200, 100, 50, 128)
    assert sheet.pixel(7, 3) == (1, 2, 3, 0)


def test_compose_accepts_sticker_slots(layout_4x4):
    """StickerSlots are unwrapped."""
    slots = [StickerSlot(_solid((0, 0, i, 255)), i) for i in range(16)]
    assert compose(slots, layout_4x4).pixel(12, 12)[2] == 15


def test_round_trip_plain_sheet(colored_sheet, layout_4x4):
    """compose(slice_sheet(s)) is pixel-identical to s."""
    assert compose(slice_sheet(colored_sheet, layout_4x4), layout_4x4) == colored_sheet


def test_round_trip_keyed_sheet(green_sheet, layout_4x4):
    """Round trip also holds for keyed sheets with soft alpha."""
    keyed = extract(green_sheet, True)
    assert compose(slice_sheet(keyed, layout_4x4), layout_4x4) == keyed


@pytest.mark.parametrize("columns,rows,cell", [(1, 1, 7), (5, 1, 3), (2, 6, 4)])
def test_round_trip_other_layouts(make_cell_sheet, columns, rows, cell):
    layout = GridLayout(columns, rows)
    sheet = make_cell_sheet(layout, cell)
    assert compose(slice_sheet(sheet, layout), layout) == sheet


def test_compose_rejects_wrong_count(layout_4x4):
    """15 slots cannot fill a 16-cell grid."""
    slots = [_solid((0, 0, 0, 255)) for _ in range(15)]
    with pytest.raises(ShapeMismatchError, match="Expected 16 slots"):
        compose(slots, layout_4x4)


def test_compose_rejects_too_many(layout_4x4):
    slots = [_solid((0, 0, 0, 255)) for _ in range(17)]
    with pytest.raises(ShapeMismatchError):
        compose(slots, layout_4x4)


def test_compose_rejects_mixed_sizes(layout_4x4):
    """All slots must share one resolution."""
    slots = [_solid((0, 0, 0, 255)) for _ in range(16)]
    slots[9] = _solid((0, 0, 0, 255), (4, 5))
    with pytest.raises(ShapeMismatchError, match="Slot 9"):
        compose(slots, layout_4x4)


def test_compose_empty_sequence(layout_4x4):
    with pytest.raises(ShapeMismatchError):
        compose([], layout_4x4)
