"""
Region growth: undo erosion by flooding back over the original mask.

Each merged seed restarts from its centroid and floods the un-eroded
foreground with 8-connectivity. All regions share one claimed map, so a
pixel belongs to at most one region. Regions advance one ring per round,
in seed order, which splits a thin bridge between two stickers roughly
in the middle instead of handing the whole neighbour to whichever seed
happens to start first.
"""

import logging
from array import array
from dataclasses import dataclass

import numpy as np

from ..geometry import Rect
from .labeling import NEIGHBORS_8

logger = logging.getLogger(__name__)


@dataclass
class GrowthResult:
    """
    rects[k] is the restored box of region k + 1. labels holds 0 for
    unclaimed pixels and k + 1 for pixels claimed by that region.
    """

    rects: list[Rect]
    seeds: list[Rect]
    labels: np.ndarray


def order_seeds(seeds: list[Rect]) -> list[Rect]:
    """Row-major order of top-left corners, so contested pixels resolve reproducibly."""
    return sorted(seeds, key=lambda r: (r.min_y, r.min_x, r.max_y, r.max_x))


def _start_pixel(mask: np.ndarray, owner: np.ndarray, seed: Rect) -> tuple[int, int] | None:
    """Seed centroid, or the nearest free foreground pixel inside the seed when the centroid misses."""
    height, width = mask.shape
    cx, cy = seed.center
    if 0 <= cx < width and 0 <= cy < height and mask[cy, cx] and owner[cy, cx] == 0:
        return cx, cy

    box = seed.clamp(width, height)
    if not box.is_valid:
        return None
    rows, cols = box.to_slices()
    free = (mask[rows, cols] != 0) & (owner[rows, cols] == 0)
    ys, xs = np.nonzero(free)
    if len(xs) == 0:
        return None

    xs = xs + box.min_x
    ys = ys + box.min_y
    nearest = int(np.argmin((xs - cx) ** 2 + (ys - cy) ** 2))
    return int(xs[nearest]), int(ys[nearest])


def grow_regions(original_mask: np.ndarray, seeds: list[Rect], limit: int | None = None) -> GrowthResult:
    """
    Restore true sticker boundaries from eroded seeds.

    Args:
        original_mask: Un-eroded foreground mask, (H, W) of 0/1; never written
        seeds: Seed boxes found on the eroded mask
        limit: If set, a region may not leave its seed box expanded by this many pixels

    Returns:
        GrowthResult with one rect per region that found a starting pixel
    """
    height, width = original_mask.shape
    cells = np.ascontiguousarray(original_mask, dtype=np.uint8).tobytes()
    owner = array("i", bytes(4 * width * height))
    owner_view = np.frombuffer(owner, dtype=np.intc).reshape(height, width)

    kept_seeds = []
    bounds = []
    boxes = []
    frontiers = []

    for seed in order_seeds(seeds):
        start = _start_pixel(original_mask, owner_view, seed)
        if start is None:
            logger.debug("Skipping seed %s: no free foreground to grow from", seed)
            continue

        label = len(kept_seeds) + 1
        sx, sy = start
        owner[sy * width + sx] = label
        kept_seeds.append(seed)
        frontiers.append([sy * width + sx])
        boxes.append([sx, sx, sy, sy])
        if limit is None:
            bounds.append(Rect(0, width - 1, 0, height - 1))
        else:
            bounds.append(seed.expand(limit).clamp(width, height))

    active = True
    while active:
        active = False
        for k, frontier in enumerate(frontiers):
            if not frontier:
                continue
            label = k + 1
            lo_x, hi_x = bounds[k].min_x, bounds[k].max_x
            lo_y, hi_y = bounds[k].min_y, bounds[k].max_y
            box = boxes[k]
            ring = []

            for idx in frontier:
                cy, cx = divmod(idx, width)
                for dx, dy in NEIGHBORS_8:
                    nx = cx + dx
                    ny = cy + dy
                    if not (lo_x <= nx <= hi_x and lo_y <= ny <= hi_y):
                        continue
                    n_idx = ny * width + nx
                    if not cells[n_idx] or owner[n_idx]:
                        continue
                    owner[n_idx] = label
                    ring.append(n_idx)
                    if nx < box[0]:
                        box[0] = nx
                    elif nx > box[1]:
                        box[1] = nx
                    if ny < box[2]:
                        box[2] = ny
                    elif ny > box[3]:
                        box[3] = ny

            frontiers[k] = ring
            if ring:
                active = True

    rects = [
        Rect(box[0], box[1], box[2], box[3]).union(seed.clamp(width, height))
        for box, seed in zip(boxes, kept_seeds)
    ]
    labels = owner_view.astype(np.int32)
    return GrowthResult(rects=rects, seeds=kept_seeds, labels=labels)
