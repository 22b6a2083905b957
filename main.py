#!/usr/bin/env python3
"""
Sticker Sheet Segmentation CLI

Splits a sticker sheet into stickers: Mask → Erode → Seeds → Grow → Extract
"""

import argparse
import logging
import re
import sys
from pathlib import Path

from stickersheet.config import (
    EROSION_PASSES,
    GRID_COLUMNS,
    GRID_ROWS,
    MIN_MANUAL_SPAN,
    OUTPUTS_DIR,
    SEED_MERGE_DISTANCE,
    STROKE_WIDTH,
    SegmentationConfig,
)
from stickersheet.errors import SurfaceError
from stickersheet.geometry import Rect
from stickersheet.processors.extractor import extract_sticker_from_rect
from stickersheet.processors.mask import open_raster
from stickersheet.processors.pipeline import process_sticker_sheet

EXIT_NOTHING_DETECTED = 2


def parse_grid(value: str) -> tuple[int, int]:
    """Parse a COLSxROWS grid layout such as 4x4."""
    match = re.fullmatch(r"\s*(\d+)\s*[xX]\s*(\d+)\s*", value)
    if not match or int(match.group(1)) == 0 or int(match.group(2)) == 0:
        raise argparse.ArgumentTypeError(f"Expected COLSxROWS like 4x4, got {value!r}")
    return int(match.group(1)), int(match.group(2))


def parse_rect(value: str) -> Rect:
    """Parse MINX,MINY,MAXX,MAXY into a Rect."""
    parts = value.split(",")
    try:
        x0, y0, x1, y1 = (int(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected MINX,MINY,MAXX,MAXY, got {value!r}")
    return Rect.from_corners(x0, y0, x1, y1)


def split_sheet(
    input_path: str,
    output_dir: str | None = None,
    config: SegmentationConfig | None = None,
    rect: Rect | None = None,
    name: str = "sticker",
) -> dict:
    """
    Split a sticker sheet (or one manual selection of it) into PNG files.

    Args:
        input_path: Path to the sticker sheet image
        output_dir: Directory to save stickers (default: data/outputs)
        config: Segmentation tunables
        rect: If given, extract only this selection instead of the whole sheet
        name: Display name for a manual selection

    Returns:
        Dictionary of sticker name to output file path
    """
    output_dir = Path(output_dir) if output_dir else OUTPUTS_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    config = config or SegmentationConfig()

    raster = open_raster(input_path)

    if rect is not None:
        segment = extract_sticker_from_rect(raster, rect, name, config)
        segments = [segment] if segment is not None else []
    else:
        segments = process_sticker_sheet(raster, on_progress=print, config=config)

    outputs = {}
    for segment in segments:
        path = output_dir / f"{segment.display_name}.png"
        segment.image.save(path, "PNG")
        print(f"Wrote {path}")
        outputs[segment.display_name] = str(path)

    return outputs


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Split a sticker sheet into individual outlined stickers",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input", help="Path to the sticker sheet image")
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory to save stickers (default: data/outputs)",
    )
    parser.add_argument(
        "--erosion-passes",
        type=int,
        default=EROSION_PASSES,
        help="Erosion passes used to separate touching stickers (max 6)",
    )
    parser.add_argument(
        "--merge-distance",
        type=int,
        default=SEED_MERGE_DISTANCE,
        help="Seeds closer than this many pixels are merged into one sticker",
    )
    parser.add_argument(
        "--grid",
        type=parse_grid,
        default=(GRID_COLUMNS, GRID_ROWS),
        help="Fallback grid layout as COLSxROWS",
    )
    parser.add_argument(
        "--no-grid-fallback",
        action="store_true",
        help="Never fall back to a fixed grid split",
    )
    parser.add_argument(
        "--stroke-width",
        type=int,
        default=STROKE_WIDTH,
        help="Width of the white outline around each sticker",
    )
    parser.add_argument(
        "--rect",
        type=parse_rect,
        default=None,
        help="Extract a single sticker from MINX,MINY,MAXX,MAXY instead of the whole sheet",
    )
    parser.add_argument(
        "--name",
        default="sticker",
        help="Name of the sticker extracted with --rect",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not Path(args.input).exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    if args.rect is not None:
        span_x = args.rect.max_x - args.rect.min_x
        span_y = args.rect.max_y - args.rect.min_y
        if span_x <= MIN_MANUAL_SPAN or span_y <= MIN_MANUAL_SPAN:
            print(f"Error: Selection must span more than {MIN_MANUAL_SPAN}px", file=sys.stderr)
            sys.exit(1)

    try:
        config = SegmentationConfig(
            erosion_passes=args.erosion_passes,
            seed_merge_distance=args.merge_distance,
            grid_columns=args.grid[0],
            grid_rows=args.grid[1],
            grid_fallback=not args.no_grid_fallback,
            stroke_width=args.stroke_width,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Processing: {args.input}")
    try:
        outputs = split_sheet(
            args.input,
            output_dir=args.output_dir,
            config=config,
            rect=args.rect,
            name=args.name,
        )
    except SurfaceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not outputs:
        # the sheet pipeline already reported NOTHING_DETECTED through progress
        if args.rect is not None:
            print("No sticker found in the selection.", file=sys.stderr)
        sys.exit(EXIT_NOTHING_DETECTED)

    print(f"\nDone! Generated {len(outputs)} stickers.")


if __name__ == "__main__":
    main()
