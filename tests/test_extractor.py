import numpy as np
import pytest
from PIL import Image, ImageDraw

from stickersheet.config import SegmentationConfig
from stickersheet.geometry import Rect
from stickersheet.processors.extractor import extract_sticker_from_rect, stroke_offsets

from conftest import fill_rect, white_canvas


def test_extracts_tight_content_box(single_square):
    segment = extract_sticker_from_rect(single_square, Rect(120, 280, 120, 280), "square")

    assert segment is not None
    assert segment.content_box == Rect(150, 249, 150, 249)
    assert (segment.source_x, segment.source_y) == (115, 115)
    assert segment.display_name == "square"
    assert not segment.naming_in_progress


def test_dimensions_are_content_plus_padding_plus_stroke():
    canvas = white_canvas(300, 200)
    image = Image.fromarray(canvas)
    ImageDraw.Draw(image).ellipse((40, 30, 170, 120), fill=(30, 160, 60, 255))
    config = SegmentationConfig(sticker_padding=10, stroke_width=4)

    segment = extract_sticker_from_rect(np.array(image), Rect(20, 200, 10, 150), "blob", config)

    box = segment.content_box
    assert segment.width == box.width + 2 * 10 + 2 * 4
    assert segment.height == box.height + 2 * 10 + 2 * 4
    assert segment.image.size == (segment.width, segment.height)


def test_default_padding_and_stroke(single_square):
    segment = extract_sticker_from_rect(single_square, Rect(145, 254, 145, 254))

    assert (segment.width, segment.height) == (100 + 32 + 12, 100 + 32 + 12)


def test_outline_surrounds_artwork(single_square):
    segment = extract_sticker_from_rect(single_square, Rect(145, 254, 145, 254))
    pixels = segment.pixels
    # artwork starts at stroke (6) + padding (16) = 22 on each axis
    assert tuple(pixels[72, 72]) == (0, 0, 0, 255)
    assert tuple(pixels[72, 16]) == (255, 255, 255, 255)
    assert tuple(pixels[16, 72]) == (255, 255, 255, 255)
    assert pixels[0, 0, 3] == 0
    assert pixels[72, 15, 3] == 0


def test_background_is_die_cut(single_square):
    segment = extract_sticker_from_rect(single_square, Rect(145, 254, 145, 254))
    pixels = segment.pixels

    # the padding ring between the outline and the canvas edge stays clear
    assert (pixels[:5, :, 3] == 0).all()
    assert (pixels[-5:, :, 3] == 0).all()


def test_rect_over_plain_background_yields_nothing(single_square):
    assert extract_sticker_from_rect(single_square, Rect(10, 80, 10, 80)) is None


def test_invalid_or_outside_rect_yields_nothing(single_square):
    assert extract_sticker_from_rect(single_square, Rect(50, 40, 10, 80)) is None
    assert extract_sticker_from_rect(single_square, Rect(500, 600, 500, 600)) is None


def test_faint_shadow_is_removed_by_strict_pass():
    canvas = fill_rect(white_canvas(200, 200), 60, 60, 120, 120, color=(200, 30, 30))
    fill_rect(canvas, 120, 60, 130, 120, color=(245, 245, 245))  # near-white shadow

    segment = extract_sticker_from_rect(canvas, Rect(50, 140, 50, 140))

    assert segment.content_box == Rect(60, 119, 60, 119)


def test_source_is_not_modified(single_square):
    before = single_square.copy()
    extract_sticker_from_rect(single_square, Rect(145, 254, 145, 254))
    assert np.array_equal(single_square, before)


def test_accepts_pil_images(single_square):
    segment = extract_sticker_from_rect(Image.fromarray(single_square).convert("RGB"), Rect(145, 254, 145, 254))
    assert segment.content_box == Rect(150, 249, 150, 249)


@pytest.mark.parametrize("width,steps", [(6, 24), (3, 8)])
def test_stroke_offsets_circle_the_center(width, steps):
    offsets = stroke_offsets(width, steps)

    assert len(offsets) == steps + 1
    assert offsets[-1] == (width, width)
    assert offsets[0] == (2 * width, width)
    for x, y in offsets:
        assert 0 <= x <= 2 * width and 0 <= y <= 2 * width


def test_segment_ids_are_unique(single_square):
    first = extract_sticker_from_rect(single_square, Rect(145, 254, 145, 254))
    second = extract_sticker_from_rect(single_square, Rect(145, 254, 145, 254))
    assert first.id != second.id
