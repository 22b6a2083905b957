from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned bounding box in pixel coordinates.

    Both ends are inclusive, so a single pixel at (x, y) is
    Rect(x, x, y, y) with width and height 1.
    """

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @classmethod
    def from_corners(cls, x0: int, y0: int, x1: int, y1: int) -> "Rect":
        """Build a rect from two inclusive corners given in any order."""
        return cls(min(x0, x1), max(x0, x1), min(y0, y1), max(y0, y1))

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def area(self) -> int:
        if not self.is_valid:
            return 0
        return self.width * self.height

    @property
    def is_valid(self) -> bool:
        return self.max_x >= self.min_x and self.max_y >= self.min_y

    @property
    def center(self) -> tuple[int, int]:
        return (self.min_x + self.max_x) // 2, (self.min_y + self.max_y) // 2

    def gap(self, other: "Rect") -> tuple[int, int]:
        """Axis-aligned gap to another rect, 0 on an axis where they overlap."""
        dx = max(0, self.min_x - other.max_x, other.min_x - self.max_x)
        dy = max(0, self.min_y - other.max_y, other.min_y - self.max_y)
        return dx, dy

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.min_x, other.min_x),
            max(self.max_x, other.max_x),
            min(self.min_y, other.min_y),
            max(self.max_y, other.max_y),
        )

    def expand(self, amount: int) -> "Rect":
        return Rect(
            self.min_x - amount,
            self.max_x + amount,
            self.min_y - amount,
            self.max_y + amount,
        )

    def clamp(self, width: int, height: int) -> "Rect":
        """Clip to an image of the given size. The result may be invalid."""
        return Rect(
            max(0, self.min_x),
            min(width - 1, self.max_x),
            max(0, self.min_y),
            min(height - 1, self.max_y),
        )

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def to_slices(self) -> tuple[slice, slice]:
        """Row and column slices selecting this rect from an (H, W, ...) array."""
        return slice(self.min_y, self.max_y + 1), slice(self.min_x, self.max_x + 1)

    def as_dict(self) -> dict:
        return {
            "min_x": self.min_x,
            "max_x": self.max_x,
            "min_y": self.min_y,
            "max_y": self.max_y,
        }
