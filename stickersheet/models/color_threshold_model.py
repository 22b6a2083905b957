import numpy as np

from ..config import ALPHA_CUTOFF, MASK_THRESHOLD
from .base import BackgroundClassifier


def is_background(
    r: int, g: int, b: int, a: int, threshold: int = MASK_THRESHOLD, alpha_cutoff: int = ALPHA_CUTOFF
) -> bool:
    """Single-pixel form of WhiteThresholdClassifier.classify."""
    if a < alpha_cutoff:
        return True
    return r > threshold and g > threshold and b > threshold


class WhiteThresholdClassifier(BackgroundClassifier):
    """
    Background classifier for near-white sheets.

    Best for: AI-generated sticker sheets, whose backgrounds are close to but
    rarely exactly pure white and carry faint shadows and anti-aliased edges.

    A pixel is background when it is (nearly) transparent or when every colour
    channel is brighter than the threshold. Raising the threshold keeps more
    off-white pixels as foreground; lowering it eats faint shadows but risks
    removing light-coloured artwork.
    """

    def __init__(self, threshold: int = MASK_THRESHOLD, alpha_cutoff: int = ALPHA_CUTOFF):
        """
        Initialize the classifier.

        Args:
            threshold: Channel value (0-255) every RGB channel must exceed
            alpha_cutoff: Pixels with alpha below this are treated as transparent
        """
        self.threshold = threshold
        self.alpha_cutoff = alpha_cutoff

    def classify(self, rgba: np.ndarray) -> np.ndarray:
        transparent = rgba[:, :, 3] < self.alpha_cutoff
        bright = np.all(rgba[:, :, :3] > self.threshold, axis=2)
        return transparent | bright
