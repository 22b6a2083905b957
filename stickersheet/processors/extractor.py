import logging
import math
import uuid

import numpy as np
from PIL import Image

from ..config import SegmentationConfig
from ..geometry import Rect
from ..segment import StickerSegment
from .cleanup import alpha_bbox, cut_out_background, pad_to_content
from .mask import load_raster

logger = logging.getLogger(__name__)


def _as_raster(source) -> np.ndarray:
    if (
        isinstance(source, np.ndarray)
        and source.dtype == np.uint8
        and source.ndim == 3
        and source.shape[2] == 4
    ):
        return source
    return load_raster(source)


def make_silhouette(rgba: np.ndarray, color: tuple = (255, 255, 255)) -> np.ndarray:
    """Same alpha as the artwork, every colour channel set to `color`."""
    silhouette = rgba.copy()
    silhouette[:, :, :3] = np.asarray(color, dtype=np.uint8)
    return silhouette


def stroke_offsets(width: int, steps: int) -> list[tuple[int, int]]:
    """
    Canvas positions for the silhouette copies forming the outline.

    `steps` points evenly spaced on a circle of radius `width` around
    (width, width), followed by (width, width) itself.
    """
    offsets = []
    for i in range(steps):
        angle = (i / steps) * 2 * math.pi
        offsets.append((round(width + math.cos(angle) * width), round(width + math.sin(angle) * width)))
    offsets.append((width, width))
    return offsets


def composite_sticker(
    art: np.ndarray,
    stroke_width: int,
    stroke_steps: int,
    stroke_color: tuple = (255, 255, 255),
) -> Image.Image:
    """
    Lay the artwork over a thick rounded outline.

    The outline approximates a dilation by `stroke_width`: the silhouette is
    stamped at every stroke offset, then the artwork is drawn centered on top.
    The canvas grows by `stroke_width` on every side.
    """
    height, width = art.shape[:2]
    art_im = Image.fromarray(art)
    silhouette_im = Image.fromarray(make_silhouette(art, stroke_color))

    canvas = Image.new("RGBA", (width + 2 * stroke_width, height + 2 * stroke_width), (0, 0, 0, 0))
    for offset in stroke_offsets(stroke_width, stroke_steps):
        canvas.alpha_composite(silhouette_im, dest=offset)
    canvas.alpha_composite(art_im, dest=(stroke_width, stroke_width))
    return canvas


def extract_sticker_from_rect(
    source,
    rect: Rect,
    default_name: str = "sticker",
    config: SegmentationConfig | None = None,
) -> StickerSegment | None:
    """
    Cut one sticker out of the sheet.

    Args:
        source: RGBA ndarray of the whole sheet (or anything load_raster accepts)
        rect: Region to extract, in sheet coordinates
        default_name: Display name given to the sticker
        config: Padding, threshold and stroke settings (defaults if omitted)

    Returns:
        The sticker, or None when the rect is empty or holds only background
    """
    config = config or SegmentationConfig()
    raster = _as_raster(source)
    height, width = raster.shape[:2]

    if not rect.is_valid:
        return None
    crop = rect.expand(config.crop_padding).clamp(width, height)
    if not crop.is_valid:
        logger.debug("Skipping %s: crop falls outside the %dx%d sheet", rect, width, height)
        return None

    rows, cols = crop.to_slices()
    cut = cut_out_background(raster[rows, cols].copy(), config.cutout_threshold, config.alpha_cutoff)

    box = alpha_bbox(cut)
    if box is None:
        logger.debug("Skipping %s: no foreground after background removal", rect)
        return None

    art = pad_to_content(cut, box, config.sticker_padding)
    image = composite_sticker(art, config.stroke_width, config.stroke_steps, config.stroke_color)

    content_box = Rect(
        crop.min_x + box.min_x,
        crop.min_x + box.max_x,
        crop.min_y + box.min_y,
        crop.min_y + box.max_y,
    )
    return StickerSegment(
        id=str(uuid.uuid4()),
        image=image,
        source_x=crop.min_x,
        source_y=crop.min_y,
        width=image.width,
        height=image.height,
        display_name=default_name,
        content_box=content_box,
    )
