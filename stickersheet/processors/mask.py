import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..config import ALPHA_CUTOFF, MASK_THRESHOLD
from ..errors import SurfaceError
from ..models import WhiteThresholdClassifier


def load_raster(image) -> np.ndarray:
    """
    Turn a decoded image into a private RGBA pixel buffer.

    Args:
        image: PIL Image, or ndarray shaped (H, W), (H, W, 3) or (H, W, 4)

    Returns:
        Writable uint8 array of shape (H, W, 4), never sharing memory with the input

    Raises:
        SurfaceError: if the input cannot be represented as an RGBA surface
    """
    if isinstance(image, Image.Image):
        try:
            arr = np.array(image.convert("RGBA"))
        except (OSError, ValueError) as e:
            raise SurfaceError(f"Could not convert image to RGBA: {e}") from e
    elif isinstance(image, np.ndarray):
        arr = _array_to_rgba(image)
    else:
        raise SurfaceError(f"Unsupported image type: {type(image).__name__}")

    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise SurfaceError(f"Image has no pixels: {arr.shape[1]}x{arr.shape[0]}")

    return np.ascontiguousarray(arr, dtype=np.uint8)


def _array_to_rgba(arr: np.ndarray) -> np.ndarray:
    if arr.dtype != np.uint8:
        raise SurfaceError(f"Expected uint8 pixels, got {arr.dtype}")

    if arr.ndim == 2:
        rgb = np.repeat(arr[:, :, None], 3, axis=2)
    elif arr.ndim == 3 and arr.shape[2] == 3:
        rgb = arr
    elif arr.ndim == 3 and arr.shape[2] == 4:
        return arr.copy()
    else:
        raise SurfaceError(f"Expected (H, W), (H, W, 3) or (H, W, 4) pixels, got {arr.shape}")

    alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)


def open_raster(data) -> np.ndarray:
    """
    Decode an image file (path or raw bytes) into an RGBA pixel buffer.

    Raises:
        SurfaceError: if the data is not a readable image
    """
    source = io.BytesIO(data) if isinstance(data, (bytes, bytearray)) else data
    try:
        with Image.open(source) as im:
            im.load()
            return load_raster(im)
    except (UnidentifiedImageError, OSError) as e:
        raise SurfaceError(f"Could not read image: {e}") from e


def build_binary_mask(
    rgba: np.ndarray, threshold: int = MASK_THRESHOLD, alpha_cutoff: int = ALPHA_CUTOFF
) -> np.ndarray:
    """
    Build the foreground mask of an RGBA buffer.

    Args:
        rgba: Array of shape (H, W, 4), uint8
        threshold: Brightness above which a pixel counts as background

    Returns:
        uint8 array of shape (H, W), 1 for foreground and 0 for background
    """
    classifier = WhiteThresholdClassifier(threshold=threshold, alpha_cutoff=alpha_cutoff)
    return (~classifier.classify(rgba)).astype(np.uint8)
