"""
Deterministic grid fallback.

When stickers are fused so badly that organic segmentation finds only a
handful of huge blobs, the sheet is cut along the fixed layout the image
generator was asked to produce instead.
"""

import math

import numpy as np

from ..config import GRID_COLUMNS, GRID_MARGIN, GRID_ROWS
from ..geometry import Rect
from .labeling import largest_component_in_rect


def grid_cells(
    width: int,
    height: int,
    columns: int = GRID_COLUMNS,
    rows: int = GRID_ROWS,
    margin: int = GRID_MARGIN,
) -> list[Rect]:
    """
    Cut the image into columns x rows cells, each shrunk by `margin`.

    Cells are emitted row by row and depend only on the arguments. A cell
    narrower than 2 * margin comes out invalid; callers filter those.
    """
    cell_w = width / columns
    cell_h = height / rows
    cells = []
    for r in range(rows):
        for c in range(columns):
            cells.append(
                Rect(
                    min_x=math.floor(c * cell_w + margin),
                    max_x=math.floor((c + 1) * cell_w - margin) - 1,
                    min_y=math.floor(r * cell_h + margin),
                    max_y=math.floor((r + 1) * cell_h - margin) - 1,
                )
            )
    return cells


def grid_fallback(
    original_mask: np.ndarray,
    columns: int = GRID_COLUMNS,
    rows: int = GRID_ROWS,
    margin: int = GRID_MARGIN,
    refine: bool = True,
) -> list[Rect]:
    """
    Grid rects for a fused sheet.

    With `refine`, each cell shrinks to its largest connected component,
    which drops debris bleeding in from neighbouring cells. Empty cells
    keep their raw rect and are later skipped by extraction.
    """
    height, width = original_mask.shape
    result = []
    for cell in grid_cells(width, height, columns, rows, margin):
        cell = cell.clamp(width, height)
        if not cell.is_valid:
            continue
        refined = largest_component_in_rect(original_mask, cell) if refine else None
        result.append(refined or cell)
    return result


def should_fall_back(
    rects: list[Rect],
    width: int,
    height: int,
    trigger_count: int,
    trigger_coverage: float,
) -> bool:
    """
    True when organic segmentation looks like it fused stickers together.

    That is: fewer than `trigger_count` regions, and those regions' boxes
    together cover at least `trigger_coverage` of the image. A coverage of
    0.0 makes the count alone decide.
    """
    if len(rects) >= trigger_count:
        return False
    covered = sum(rect.area for rect in rects) / float(width * height)
    return covered >= trigger_coverage
