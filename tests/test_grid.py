import numpy as np

from stickersheet.geometry import Rect
from stickersheet.processors.grid import grid_cells, grid_fallback, should_fall_back


def test_grid_cells_layout():
    cells = grid_cells(400, 400, columns=4, rows=4, margin=15)

    assert len(cells) == 16
    assert cells[0] == Rect(15, 84, 15, 84)
    assert cells[1] == Rect(115, 184, 15, 84)
    assert cells[4] == Rect(15, 84, 115, 184)
    assert cells[-1] == Rect(315, 384, 315, 384)


def test_grid_cells_are_deterministic():
    assert grid_cells(1023, 777, 4, 4, 10) == grid_cells(1023, 777, 4, 4, 10)


def test_grid_cells_handle_fractional_cell_sizes():
    cells = grid_cells(10, 10, columns=3, rows=1, margin=0)

    assert [(c.min_x, c.max_x) for c in cells] == [(0, 2), (3, 5), (6, 9)]


def test_fallback_refines_each_cell_to_its_largest_object():
    mask = np.zeros((200, 200), dtype=np.uint8)
    mask[20:60, 30:80] = 1  # sticker in cell (0, 0)
    mask[10:20, 88:94] = 1  # debris bleeding in near the cell edge
    mask[120:180, 120:190] = 1  # sticker in cell (1, 1)

    rects = grid_fallback(mask, columns=2, rows=2, margin=5, refine=True)

    assert rects == [
        Rect(30, 79, 20, 59),
        Rect(105, 194, 5, 94),  # empty cell keeps its raw rect
        Rect(5, 94, 105, 194),
        Rect(120, 189, 120, 179),
    ]


def test_fallback_without_refinement_returns_raw_cells():
    mask = np.ones((100, 100), dtype=np.uint8)

    assert grid_fallback(mask, 2, 2, 10, refine=False) == grid_cells(100, 100, 2, 2, 10)


def test_trigger_needs_few_regions_and_large_coverage():
    big = [Rect(0, 299, 0, 299)]
    small = [Rect(0, 49, 0, 49)]

    assert should_fall_back(big, 400, 400, trigger_count=10, trigger_coverage=0.5)
    assert not should_fall_back(small, 400, 400, trigger_count=10, trigger_coverage=0.5)
    assert should_fall_back(small, 400, 400, trigger_count=10, trigger_coverage=0.0)
    assert not should_fall_back(big * 10, 400, 400, trigger_count=10, trigger_coverage=0.0)
