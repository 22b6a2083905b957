from abc import ABC, abstractmethod

import numpy as np


class BackgroundClassifier(ABC):
    """Abstract base class for per-pixel background classifiers."""

    @abstractmethod
    def classify(self, rgba: np.ndarray) -> np.ndarray:
        """
        Decide which pixels belong to the background.

        Args:
            rgba: Array of shape (H, W, 4), uint8

        Returns:
            Boolean array of shape (H, W), True where the pixel is background
        """
        pass

    def remove(self, rgba: np.ndarray) -> np.ndarray:
        """
        Return a copy of the image with background pixels made transparent.

        Args:
            rgba: Array of shape (H, W, 4), uint8

        Returns:
            New RGBA array; colour channels untouched, alpha zeroed on background
        """
        result = rgba.copy()
        result[self.classify(rgba), 3] = 0
        return result
