import numpy as np
import pytest

from stickersheet.geometry import Rect
from stickersheet.processors.labeling import find_components, largest_component_in_rect


def test_finds_components_in_row_major_discovery_order():
    mask = np.zeros((20, 20), dtype=np.uint8)
    mask[10:15, 1:4] = 1
    mask[2:5, 12:18] = 1

    components = find_components(mask)

    assert [c.rect for c in components] == [Rect(12, 17, 2, 4), Rect(1, 3, 10, 14)]
    assert [c.pixel_count for c in components] == [18, 15]


def test_diagonal_pixels_join_only_with_eight_connectivity():
    mask = np.zeros((5, 5), dtype=np.uint8)
    mask[1, 1] = mask[2, 2] = mask[3, 3] = 1

    assert len(find_components(mask, connectivity=4)) == 3
    assert len(find_components(mask, connectivity=8)) == 1


def test_rejects_unknown_connectivity():
    with pytest.raises(ValueError):
        find_components(np.ones((3, 3), dtype=np.uint8), connectivity=6)


def test_noise_filter_uses_pixel_count_and_span():
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[5:8, 5:8] = 1  # speck
    mask[20:80, 10:12] = 1  # thin line, too narrow
    mask[30:60, 40:70] = 1  # real blob

    components = find_components(mask, min_pixels=100, min_span=20)

    assert [c.rect for c in components] == [Rect(40, 69, 30, 59)]


def test_large_component_does_not_recurse():
    mask = np.ones((400, 400), dtype=np.uint8)

    components = find_components(mask)

    assert len(components) == 1
    assert components[0].pixel_count == 160000


def test_largest_component_is_confined_to_rect():
    mask = np.zeros((50, 50), dtype=np.uint8)
    mask[10:30, 10:30] = 1  # main object
    mask[0:50, 38:42] = 1  # neighbour limb crossing the cell edge
    cell = Rect(5, 39, 5, 39)

    assert largest_component_in_rect(mask, cell) == Rect(10, 29, 10, 29)


def test_largest_component_in_empty_rect_is_none():
    mask = np.zeros((20, 20), dtype=np.uint8)
    assert largest_component_in_rect(mask, Rect(2, 10, 2, 10)) is None
    assert largest_component_in_rect(mask, Rect(30, 40, 30, 40)) is None
