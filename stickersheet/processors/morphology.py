"""
Binary morphology over foreground masks.

Erosion separates stickers whose outlines touch; dilation bridges the one
or two pixel gaps inside a face (eyes, mouth strokes) so that erosion does
not shatter it into sub-regions. Every operation returns a new array and
leaves its input untouched.
"""

import logging

import cv2
import numpy as np

from ..config import MAX_EROSION_PASSES

logger = logging.getLogger(__name__)

_CROSS = cv2.getStructuringElement(cv2.MORPH_CROSS, (3, 3))


def _square(radius: int) -> np.ndarray:
    return np.ones((2 * radius + 1, 2 * radius + 1), dtype=np.uint8)


def erode(mask: np.ndarray, passes: int) -> np.ndarray:
    """
    Shrink the foreground with a 4-neighbour cross, one generation per pass.

    An interior foreground pixel with any background 4-neighbour becomes
    background in the next generation. Pixels on the outermost rows and
    columns are carried over unchanged.

    Args:
        mask: uint8 array of shape (H, W), values 0/1
        passes: Number of generations, capped at MAX_EROSION_PASSES

    Returns:
        New eroded mask
    """
    if passes > MAX_EROSION_PASSES:
        logger.warning("Clamping erosion passes from %d to %d", passes, MAX_EROSION_PASSES)
        passes = MAX_EROSION_PASSES

    current = mask.copy()
    for _ in range(max(0, passes)):
        nxt = cv2.erode(current, _CROSS)
        nxt[0, :] = current[0, :]
        nxt[-1, :] = current[-1, :]
        nxt[:, 0] = current[:, 0]
        nxt[:, -1] = current[:, -1]
        current = nxt
    return current


def dilate(mask: np.ndarray, radius: int) -> np.ndarray:
    """Set every pixel within Chebyshev distance `radius` of the foreground."""
    if radius <= 0:
        return mask.copy()
    return cv2.dilate(mask, _square(radius))


def close_gaps(mask: np.ndarray, radius: int) -> np.ndarray:
    """Morphological closing: fill holes up to ~2*radius wide without growing the outline."""
    if radius <= 0:
        return mask.copy()
    return cv2.morphologyEx(mask, cv2.MORPH_CLOSE, _square(radius))
