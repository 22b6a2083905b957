import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUTS_DIR = Path(os.getenv("STICKERSHEET_OUTPUT_DIR", PROJECT_ROOT / "data" / "outputs"))

# Background classification
ALPHA_CUTOFF = 20
MASK_THRESHOLD = 235  # lenient tier, coarse mask
CUTOUT_THRESHOLD = 240  # strict tier, die-cut pass inside extraction

# Morphology
CLOSE_RADIUS = 2
EROSION_PASSES = 3
MAX_EROSION_PASSES = 6

# Component labeling
MIN_COMPONENT_PIXELS = 100
MIN_COMPONENT_SPAN = 20

# Merging
SEED_MERGE_DISTANCE = 30
RECT_MERGE_DISTANCE = 5
SEED_PADDING = 10

# Grid fallback (must match the sheet layout requested from the generator)
GRID_TRIGGER_COUNT = 10
GRID_TRIGGER_COVERAGE = 0.5
GRID_COLUMNS = 4
GRID_ROWS = 4
GRID_MARGIN = 15

# Extraction
EXTRACT_MARGIN = 5
CROP_PADDING = 5
STICKER_PADDING = 16
STROKE_WIDTH = 6
STROKE_STEPS = 24
STROKE_COLOR = (255, 255, 255)

# Manual crops smaller than this are treated as accidental clicks
MIN_MANUAL_SPAN = 5


@dataclass
class SegmentationConfig:
    """
    Tunables for a single sticker sheet run.

    Defaults come from the module-level constants above. Erosion passes
    above MAX_EROSION_PASSES are clamped, since heavier erosion severs
    necks and limbs that region growth cannot always restore.
    """

    mask_threshold: int = MASK_THRESHOLD
    cutout_threshold: int = CUTOUT_THRESHOLD
    alpha_cutoff: int = ALPHA_CUTOFF
    close_radius: int = CLOSE_RADIUS
    erosion_passes: int = EROSION_PASSES
    min_component_pixels: int = MIN_COMPONENT_PIXELS
    min_component_span: int = MIN_COMPONENT_SPAN
    seed_merge_distance: int = SEED_MERGE_DISTANCE
    rect_merge_distance: int = RECT_MERGE_DISTANCE
    seed_padding: int = SEED_PADDING
    grow_regions: bool = True
    grow_limit: int | None = None
    grid_fallback: bool = True
    grid_trigger_count: int = GRID_TRIGGER_COUNT
    grid_trigger_coverage: float = GRID_TRIGGER_COVERAGE
    grid_columns: int = GRID_COLUMNS
    grid_rows: int = GRID_ROWS
    grid_margin: int = GRID_MARGIN
    grid_refine: bool = True
    extract_margin: int = EXTRACT_MARGIN
    crop_padding: int = CROP_PADDING
    sticker_padding: int = STICKER_PADDING
    stroke_width: int = STROKE_WIDTH
    stroke_steps: int = STROKE_STEPS
    stroke_color: tuple = field(default=STROKE_COLOR)

    def __post_init__(self):
        for name in ("mask_threshold", "cutout_threshold", "alpha_cutoff"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be within 0..255, got {value}")

        non_negative = (
            "close_radius",
            "erosion_passes",
            "min_component_pixels",
            "min_component_span",
            "seed_merge_distance",
            "rect_merge_distance",
            "seed_padding",
            "grid_trigger_count",
            "grid_margin",
            "extract_margin",
            "crop_padding",
            "sticker_padding",
            "stroke_width",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

        if self.grid_columns <= 0 or self.grid_rows <= 0:
            raise ValueError(
                f"Grid must have at least one cell, got {self.grid_columns}x{self.grid_rows}"
            )
        if self.stroke_steps <= 0:
            raise ValueError(f"stroke_steps must be positive, got {self.stroke_steps}")
        if not 0.0 <= self.grid_trigger_coverage <= 1.0:
            raise ValueError(
                f"grid_trigger_coverage must be within 0..1, got {self.grid_trigger_coverage}"
            )
        if self.grow_limit is not None and self.grow_limit < 0:
            raise ValueError(f"grow_limit must be non-negative, got {self.grow_limit}")

        if self.erosion_passes > MAX_EROSION_PASSES:
            logger.warning(
                "Clamping erosion passes from %d to %d", self.erosion_passes, MAX_EROSION_PASSES
            )
            self.erosion_passes = MAX_EROSION_PASSES

        self.stroke_color = tuple(int(c) for c in self.stroke_color)
        if len(self.stroke_color) != 3:
            raise ValueError(f"stroke_color must be an RGB triple, got {self.stroke_color}")
