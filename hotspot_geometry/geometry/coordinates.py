"""
Coordinate Spaces
=================

Conversion between normalized image coordinates and pixel coordinates of a
canvas of known size.
"""

from dataclasses import dataclass
from typing import Tuple

from hotspot_geometry.geometry.shapes import Point


@dataclass(frozen=True)
class CanvasDimensions:
    """
    Pixel size of a drawing surface.

    Not validated: a zero-sized axis maps everything to 0.
    """
    width: float
    height: float

    @property
    def min_side(self) -> float:
        return min(self.width, self.height)

    @classmethod
    def from_frame(cls, frame) -> 'CanvasDimensions':
        """Dimensions of an HxW(xC) image array."""
        height, width = frame.shape[:2]
        return cls(width=width, height=height)

    def as_wh(self) -> Tuple[float, float]:
        return self.width, self.height


def to_pixel_point(point: Point, dims: CanvasDimensions) -> Tuple[float, float]:
    """Normalized point -> (px, py)."""
    return point.x * dims.width, point.y * dims.height


def to_normalized_point(px: float, py: float, dims: CanvasDimensions) -> Point:
    """
    Pixel position on the canvas -> normalized point.

    Used to turn pointer positions into hit-test queries.
    """
    x = px / dims.width if dims.width else 0.0
    y = py / dims.height if dims.height else 0.0
    return Point(x=x, y=y)
