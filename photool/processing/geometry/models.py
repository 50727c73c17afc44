"""
Data models for geometry operations.
"""

from dataclasses import dataclass
from typing import Tuple

from ..errors import InvalidRegion

# Slack for float error when checking that a rectangle fits in the unit square
BOUNDS_EPSILON = 1e-9

QUARTER_TURNS = (0, 90, 180, 270)


def clamp_unit(value: float) -> float:
    """Clamp a coordinate to the normalized [0, 1] range."""
    return min(1.0, max(0.0, float(value)))


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle in normalized (0-1) image coordinates."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_points(cls, anchor: Tuple[float, float], current: Tuple[float, float]) -> 'CropRect':
        """
        Rectangle spanned by two corners, in either order.

        Both points are clamped to [0, 1] first.
        """
        ax, ay = clamp_unit(anchor[0]), clamp_unit(anchor[1])
        cx, cy = clamp_unit(current[0]), clamp_unit(current[1])
        return cls(
            x=min(ax, cx),
            y=min(ay, cy),
            width=abs(ax - cx),
            height=abs(ay - cy),
        )

    @classmethod
    def full(cls) -> 'CropRect':
        return cls(0.0, 0.0, 1.0, 1.0)

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def validate(self) -> None:
        """
        Check the rectangle lies inside the unit square and has area.

        Raises:
            InvalidRegion: If any bound is violated
        """
        values = (self.x, self.y, self.width, self.height)
        if any(v < 0 or v > 1 for v in values):
            raise InvalidRegion(f"Crop values must be within [0, 1]: {self}")
        if self.is_degenerate:
            raise InvalidRegion("Select an area to crop first")
        if self.x + self.width > 1 + BOUNDS_EPSILON or self.y + self.height > 1 + BOUNDS_EPSILON:
            raise InvalidRegion(f"Crop rectangle extends past the image: {self}")

    def to_pixels(self, width: int, height: int) -> Tuple[int, int, int, int]:
        """
        Pixel box (left, top, width, height) for an image of the given size.

        Coordinates are rounded half up and clipped to the image.
        """
        left = min(width, _round_half_up(self.x * width))
        top = min(height, _round_half_up(self.y * height))
        right = min(width, left + _round_half_up(self.width * width))
        bottom = min(height, top + _round_half_up(self.height * height))
        return left, top, right - left, bottom - top


@dataclass
class TransformState:
    """Cumulative rotation and mirror state of the current image."""
    rotation_degrees: int = 0
    flipped: bool = False

    def reset(self) -> None:
        self.rotation_degrees = 0
        self.flipped = False


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
