from .mask import build_binary_mask, load_raster, open_raster
from .morphology import erode, dilate, close_gaps
from .labeling import find_components, largest_component_in_rect
from .merge import merge_rects
from .grow import grow_regions
from .grid import grid_cells, grid_fallback
from .extractor import extract_sticker_from_rect
from .pipeline import process_sticker_sheet, segment_regions

__all__ = [
    "build_binary_mask",
    "load_raster",
    "open_raster",
    "erode",
    "dilate",
    "close_gaps",
    "find_components",
    "largest_component_in_rect",
    "merge_rects",
    "grow_regions",
    "grid_cells",
    "grid_fallback",
    "extract_sticker_from_rect",
    "process_sticker_sheet",
    "segment_regions",
]
