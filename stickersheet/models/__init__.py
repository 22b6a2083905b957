from .base import BackgroundClassifier
from .color_threshold_model import WhiteThresholdClassifier, is_background

__all__ = [
    "BackgroundClassifier",
    "WhiteThresholdClassifier",
    "is_background",
]
