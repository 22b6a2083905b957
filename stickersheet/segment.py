import base64
import io
from dataclasses import dataclass, field

import numpy as np
from PIL import Image

from .geometry import Rect

# Assignable after creation by whoever names the stickers
_MUTABLE_FIELDS = frozenset({"display_name", "naming_in_progress"})


@dataclass
class StickerSegment:
    """
    One extracted sticker.

    The image is an RGBA die-cut with its outline already composited.
    source_x/source_y is the top-left of the crop taken from the sheet and
    content_box the tight artwork box in sheet coordinates.
    """

    id: str
    image: Image.Image
    source_x: int
    source_y: int
    width: int
    height: int
    display_name: str
    content_box: Rect
    naming_in_progress: bool = False
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False) and name not in _MUTABLE_FIELDS:
            raise AttributeError(f"StickerSegment.{name} is read-only")
        super().__setattr__(name, value)

    @property
    def pixels(self) -> np.ndarray:
        """RGBA pixel buffer of shape (height, width, 4)."""
        return np.asarray(self.image)

    def rename(self, name: str) -> None:
        self.display_name = name
        self.naming_in_progress = False

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, "PNG")
        return buffer.getvalue()

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.to_png_bytes()).decode()
        return f"data:image/png;base64,{encoded}"

    def as_dict(self) -> dict:
        """JSON-friendly summary, PNG included as base64."""
        return {
            "id": self.id,
            "name": self.display_name,
            "source_x": self.source_x,
            "source_y": self.source_y,
            "width": self.width,
            "height": self.height,
            "content_box": self.content_box.as_dict(),
            "png_base64": base64.b64encode(self.to_png_bytes()).decode(),
        }
