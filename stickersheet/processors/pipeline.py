"""
Sticker sheet segmentation pipeline.

Mask -> solidify -> erode -> label seeds -> merge -> grow back over the
original mask -> (grid fallback) -> extract one sticker per region.

Everything runs synchronously on a single thread. Masks and claimed maps
are created per call and shared by later stages in strict order.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from ..config import SegmentationConfig
from ..geometry import Rect
from ..segment import StickerSegment
from .extractor import extract_sticker_from_rect
from .grid import grid_fallback, should_fall_back
from .grow import grow_regions
from .labeling import find_components
from .mask import build_binary_mask, load_raster
from .merge import merge_rects
from .morphology import dilate, erode

logger = logging.getLogger(__name__)

NOTHING_DETECTED = "No stickers detected. Try again with a cleaner white background."


class ProgressReporter:
    """
    Forward status messages to an optional callback.

    Messages are logged too. A failing callback is logged and otherwise
    ignored; progress reporting never aborts segmentation.
    """

    def __init__(self, callback: Callable[[str], None] | None = None):
        self.callback = callback

    def __call__(self, message: str) -> None:
        logger.info(message)
        if self.callback is None:
            return
        try:
            self.callback(message)
        except Exception:
            logger.warning("Progress callback raised on %r", message, exc_info=True)


@dataclass
class SegmentationResult:
    """Final regions of a sheet, before extraction."""

    rects: list[Rect]
    used_grid: bool
    labels: np.ndarray | None = field(default=None, repr=False)
    raster: np.ndarray | None = field(default=None, repr=False)


def segment_regions(
    image,
    config: SegmentationConfig | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> SegmentationResult:
    """
    Find one bounding box per sticker without extracting anything.

    Args:
        image: PIL Image or pixel ndarray of the sheet
        config: Tunables (defaults if omitted)
        on_progress: Optional status callback

    Returns:
        SegmentationResult. `labels` is the region footprint map when regions
        were grown organically, None after the grid fallback.

    Raises:
        SurfaceError: if the image cannot be turned into an RGBA buffer
    """
    config = config or SegmentationConfig()
    progress = on_progress if isinstance(on_progress, ProgressReporter) else ProgressReporter(on_progress)

    raster = load_raster(image)
    height, width = raster.shape[:2]

    progress("Preprocessing image...")
    original = build_binary_mask(raster, config.mask_threshold, config.alpha_cutoff)
    working = original

    if config.close_radius > 0:
        progress("Solidifying shapes...")
        working = dilate(working, config.close_radius)

    progress("Separating touching stickers...")
    working = erode(working, config.erosion_passes)

    progress("Locating sticker cores...")
    components = find_components(
        working,
        min_pixels=config.min_component_pixels,
        min_span=config.min_component_span,
        connectivity=4,
    )
    seeds = [component.rect for component in components]
    labels = None

    if config.grow_regions:
        seeds = merge_rects(seeds, config.seed_merge_distance)
        progress(f"Found {len(seeds)} sticker cores")
        progress("Restoring sticker boundaries...")
        growth = grow_regions(original, seeds, limit=config.grow_limit)
        rects = growth.rects
        labels = growth.labels
    else:
        padded = [seed.expand(config.seed_padding).clamp(width, height) for seed in seeds]
        rects = merge_rects(padded, config.rect_merge_distance)
        progress(f"Found {len(rects)} sticker cores")

    used_grid = False
    if config.grid_fallback and should_fall_back(
        rects, width, height, config.grid_trigger_count, config.grid_trigger_coverage
    ):
        progress(
            f"Sticking detected. Forcing {config.grid_columns}x{config.grid_rows} grid split..."
        )
        rects = grid_fallback(
            original,
            columns=config.grid_columns,
            rows=config.grid_rows,
            margin=config.grid_margin,
            refine=config.grid_refine,
        )
        labels = None
        used_grid = True

    rects = [rect for rect in rects if rect.is_valid]
    return SegmentationResult(rects=rects, used_grid=used_grid, labels=labels, raster=raster)


def process_sticker_sheet(
    image,
    on_progress: Callable[[str], None] | None = None,
    config: SegmentationConfig | None = None,
) -> list[StickerSegment]:
    """
    Split a sticker sheet into individual outlined stickers.

    Rects that yield nothing are skipped silently. An empty list means no
    sticker was found at all; callers should ask for a cleaner image rather
    than treat it as a crash.

    Args:
        image: PIL Image or pixel ndarray of the sheet
        on_progress: Optional callback receiving short status strings
        config: Tunables (defaults if omitted)

    Returns:
        Stickers named sticker_1, sticker_2, ... in region order

    Raises:
        SurfaceError: if the image cannot be turned into an RGBA buffer
    """
    config = config or SegmentationConfig()
    progress = ProgressReporter(on_progress)

    result = segment_regions(image, config, progress)
    height, width = result.raster.shape[:2]

    progress(f"Finalizing {len(result.rects)} stickers...")
    segments = []
    for rect in result.rects:
        extract_rect = rect.expand(config.extract_margin).clamp(width, height)
        segment = extract_sticker_from_rect(
            result.raster, extract_rect, f"sticker_{len(segments) + 1}", config
        )
        if segment is None:
            logger.debug("No sticker in %s, skipping", rect)
            continue
        segments.append(segment)

    if not segments:
        progress(NOTHING_DETECTED)
    return segments
