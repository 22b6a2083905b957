"""
Connected-component labeling with an explicit stack.

Sheets are routinely several megapixels, so traversal never recurses:
pending pixels live on a plain list used as a stack of flat indices.
"""

from dataclasses import dataclass

import numpy as np

from ..geometry import Rect

NEIGHBORS_4 = ((1, 0), (-1, 0), (0, 1), (0, -1))
NEIGHBORS_8 = NEIGHBORS_4 + ((1, 1), (1, -1), (-1, 1), (-1, -1))


@dataclass(frozen=True)
class Component:
    rect: Rect
    pixel_count: int


def neighbor_offsets(connectivity: int) -> tuple:
    if connectivity == 4:
        return NEIGHBORS_4
    if connectivity == 8:
        return NEIGHBORS_8
    raise ValueError(f"Connectivity must be 4 or 8, got {connectivity}")


def flood_fill(
    cells: bytes,
    width: int,
    height: int,
    start: int,
    visited: bytearray,
    connectivity: int = 4,
) -> Component:
    """
    Collect the component containing flat index `start`.

    Args:
        cells: Row-major mask, one byte per pixel (non-zero is foreground)
        width: Mask width
        height: Mask height
        start: Flat index of an unvisited foreground pixel
        visited: Row-major visited flags, updated in place
        connectivity: 4 or 8

    Returns:
        The component's bounding box and pixel count
    """
    offsets = neighbor_offsets(connectivity)
    start_y, start_x = divmod(start, width)
    min_x = max_x = start_x
    min_y = max_y = start_y
    count = 0

    visited[start] = 1
    stack = [start]
    while stack:
        idx = stack.pop()
        cy, cx = divmod(idx, width)
        if cx < min_x:
            min_x = cx
        elif cx > max_x:
            max_x = cx
        if cy < min_y:
            min_y = cy
        elif cy > max_y:
            max_y = cy
        count += 1

        for dx, dy in offsets:
            nx = cx + dx
            ny = cy + dy
            if 0 <= nx < width and 0 <= ny < height:
                n_idx = ny * width + nx
                if cells[n_idx] and not visited[n_idx]:
                    visited[n_idx] = 1
                    stack.append(n_idx)

    return Component(Rect(min_x, max_x, min_y, max_y), count)


def iter_components(mask: np.ndarray, connectivity: int = 4):
    """Yield every component of `mask` in row-major discovery order."""
    height, width = mask.shape
    cells = np.ascontiguousarray(mask, dtype=np.uint8).tobytes()
    visited = bytearray(width * height)

    for start in np.flatnonzero(mask).tolist():
        if visited[start]:
            continue
        yield flood_fill(cells, width, height, start, visited, connectivity)


def find_components(
    mask: np.ndarray,
    min_pixels: int = 0,
    min_span: int = 0,
    connectivity: int = 4,
) -> list[Component]:
    """
    Label the mask and drop anti-aliasing specks.

    A component survives when it has more than `min_pixels` pixels and its
    extent (max - min) exceeds `min_span` on both axes.
    """
    kept = []
    for component in iter_components(mask, connectivity):
        rect = component.rect
        if component.pixel_count <= min_pixels:
            continue
        if rect.max_x - rect.min_x <= min_span or rect.max_y - rect.min_y <= min_span:
            continue
        kept.append(component)
    return kept


def largest_component_in_rect(mask: np.ndarray, rect: Rect) -> Rect | None:
    """
    Bounding box of the biggest 4-connected component confined to `rect`.

    Pixels outside `rect` are ignored, so a neighbour's limb poking into the
    rect is measured only by the part inside it. Returns None if the rect
    holds no foreground.
    """
    height, width = mask.shape
    rect = rect.clamp(width, height)
    if not rect.is_valid:
        return None

    rows, cols = rect.to_slices()
    best = None
    for component in iter_components(mask[rows, cols], connectivity=4):
        if best is None or component.pixel_count > best.pixel_count:
            best = component

    if best is None:
        return None
    local = best.rect
    return Rect(
        local.min_x + rect.min_x,
        local.max_x + rect.min_x,
        local.min_y + rect.min_y,
        local.max_y + rect.min_y,
    )
