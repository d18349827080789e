"""
Derived Geometry Module
=======================

Shapes and measures computed from other shapes.

- Polygon bounding rectangle
- Rectangle -> circle approximation (inscribed / circumscribed)
- Circle-circle overlap
- Rectangle centroid and intersection-over-union
"""

import math
from enum import Enum
from typing import Union

from hotspot_geometry.geometry.shapes import Circle, Point, Polygon, Rectangle


class CircleFitMode(str, Enum):
    """How a circle approximates a rectangle."""
    INSCRIBED = "inscribed"            # Fits inside: radius = shorter side / 2
    CIRCUMSCRIBED = "circumscribed"    # Contains it: radius = diagonal / 2


def polygon_bounds(polygon: Polygon) -> Rectangle:
    """
    Smallest axis-aligned rectangle containing every vertex.

    An empty polygon yields a zero-area rectangle at the origin.
    """
    if not polygon.points:
        return Rectangle(x=0.0, y=0.0, width=0.0, height=0.0)

    first = polygon.points[0]
    min_x = max_x = first.x
    min_y = max_y = first.y

    for point in polygon.points:
        min_x = min(min_x, point.x)
        max_x = max(max_x, point.x)
        min_y = min(min_y, point.y)
        max_y = max(max_y, point.y)

    return Rectangle(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def rectangle_center(rect: Rectangle) -> Point:
    return Point(x=rect.x + rect.width / 2, y=rect.y + rect.height / 2)


def rectangle_to_circle(
    rect: Rectangle,
    mode: Union[CircleFitMode, str] = CircleFitMode.INSCRIBED,
) -> Circle:
    """
    Approximate a rectangle by a circle centered on its centroid.

    Args:
        rect: Rectangle to convert
        mode: "inscribed" (circle fits inside) or "circumscribed"
              (circle contains the rectangle)

    Returns:
        Circle approximating the rectangle

    Raises:
        ValueError: If mode is not a known CircleFitMode
    """
    mode = CircleFitMode(mode)
    center = rectangle_center(rect)

    if mode is CircleFitMode.INSCRIBED:
        radius = min(rect.width, rect.height) / 2
    else:
        radius = math.sqrt(rect.width * rect.width + rect.height * rect.height) / 2

    return Circle(center_x=center.x, center_y=center.y, radius=radius)


def circles_overlap(first: Circle, second: Circle) -> bool:
    """
    True if the circles share interior area.

    Strict inequality: tangent circles do not overlap.
    """
    dx = first.center_x - second.center_x
    dy = first.center_y - second.center_y
    radius_sum = first.radius + second.radius
    return dx * dx + dy * dy < radius_sum * radius_sum


def rectangle_iou(first: Rectangle, second: Rectangle) -> float:
    """
    Intersection over union of two rectangles.

    Returns:
        IoU in [0, 1] for well-formed rectangles, 0.0 if the union is empty
    """
    left = max(first.x, second.x)
    top = max(first.y, second.y)
    right = min(first.x + first.width, second.x + second.width)
    bottom = min(first.y + first.height, second.y + second.height)

    intersection = max(0.0, right - left) * max(0.0, bottom - top)
    union = first.area + second.area - intersection

    return intersection / union if union > 0 else 0.0
