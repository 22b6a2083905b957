import io

import numpy as np
import pytest
from PIL import Image

from stickersheet.config import SegmentationConfig


def white_canvas(width: int = 400, height: int = 400) -> np.ndarray:
    return np.full((height, width, 4), 255, dtype=np.uint8)


def fill_rect(canvas: np.ndarray, x0: int, y0: int, x1: int, y1: int, color=(0, 0, 0)) -> np.ndarray:
    """Paint the half-open box [x0, x1) x [y0, y1) with an opaque colour."""
    canvas[y0:y1, x0:x1, :3] = color
    canvas[y0:y1, x0:x1, 3] = 255
    return canvas


def to_png(canvas: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(canvas).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def single_square():
    """400x400 sheet with one 100x100 black square covering pixels 150..249."""
    return fill_rect(white_canvas(), 150, 150, 250, 250)


@pytest.fixture
def two_squares_apart():
    """Two 50x50 squares whose facing edges are 40px apart."""
    canvas = white_canvas()
    fill_rect(canvas, 100, 175, 150, 225)
    fill_rect(canvas, 190, 175, 240, 225)
    return canvas


@pytest.fixture
def two_squares_touching():
    canvas = white_canvas()
    fill_rect(canvas, 100, 175, 150, 225)
    fill_rect(canvas, 150, 175, 200, 225)
    return canvas


@pytest.fixture
def bridged_squares():
    """Two 60x60 squares joined by a 2px tall, 60px long bridge."""
    canvas = white_canvas()
    fill_rect(canvas, 40, 170, 100, 230)
    fill_rect(canvas, 160, 170, 220, 230)
    fill_rect(canvas, 100, 199, 160, 201)
    return canvas


@pytest.fixture
def fused_sheet():
    """Stickers fused into one blob covering most of the sheet."""
    return fill_rect(white_canvas(), 20, 20, 380, 380, color=(40, 90, 160))


@pytest.fixture
def default_config():
    return SegmentationConfig()
