"""
Sticker sheet segmentation: split a sheet of drawings on a near-white
background into individual die-cut, outlined stickers.
"""

__version__ = "1.0.0"

from .config import SegmentationConfig
from .errors import StickerSheetError, SurfaceError
from .geometry import Rect
from .segment import StickerSegment
from .processors import extract_sticker_from_rect, process_sticker_sheet, segment_regions

__all__ = [
    "SegmentationConfig",
    "StickerSheetError",
    "SurfaceError",
    "Rect",
    "StickerSegment",
    "extract_sticker_from_rect",
    "process_sticker_sheet",
    "segment_regions",
]
