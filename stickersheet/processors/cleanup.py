import numpy as np

from ..config import ALPHA_CUTOFF, CUTOUT_THRESHOLD, STICKER_PADDING
from ..geometry import Rect
from ..models import WhiteThresholdClassifier


def cut_out_background(
    rgba: np.ndarray, threshold: int = CUTOUT_THRESHOLD, alpha_cutoff: int = ALPHA_CUTOFF
) -> np.ndarray:
    """
    Die-cut: make near-white pixels transparent.

    Args:
        rgba: Array of shape (H, W, 4), uint8
        threshold: Strict brightness threshold for the second background pass

    Returns:
        New RGBA array with background alpha set to 0
    """
    return WhiteThresholdClassifier(threshold=threshold, alpha_cutoff=alpha_cutoff).remove(rgba)


def alpha_bbox(rgba: np.ndarray) -> Rect | None:
    """Tight box around every pixel with non-zero alpha, or None if fully transparent."""
    ys, xs = np.nonzero(rgba[:, :, 3])
    if len(xs) == 0:
        return None
    return Rect(int(xs.min()), int(xs.max()), int(ys.min()), int(ys.max()))


def pad_to_content(rgba: np.ndarray, box: Rect, pad: int = STICKER_PADDING) -> np.ndarray:
    """
    Crop to `box` and surround it with `pad` transparent pixels on every side.

    Unlike clamped trimming, the result is always exactly
    (box.height + 2 * pad, box.width + 2 * pad).
    """
    rows, cols = box.to_slices()
    content = rgba[rows, cols]
    padded = np.zeros((box.height + 2 * pad, box.width + 2 * pad, 4), dtype=np.uint8)
    padded[pad:pad + box.height, pad:pad + box.width] = content
    return padded
