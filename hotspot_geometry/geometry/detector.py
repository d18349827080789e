"""
Hotspot Detector Module
=======================

Stateless detection logic - applies hit-testing to many shapes or points.

Design:
- Pure functions (no state)
- Returns boolean masks, callers decide what a hit means (no "winner" on
  overlap)
- Vectorised numpy predicates agree with the scalar ones in hit_testing
- Thread-safe (no mutations)
"""

from typing import Sequence

import numpy as np

from hotspot_geometry.geometry.hit_testing import hit_test
from hotspot_geometry.geometry.shapes import (
    Circle,
    HitTestable,
    Point,
    Polygon,
    Rectangle,
)


class HotspotDetector:
    """
    Stateless detector for applying shape geometry to query points.

    Design Philosophy:
    - All methods are static (no instance state)
    - Masks line up with the input order

    Usage:
        mask = HotspotDetector.detect_point(shapes, Point(x=0.4, y=0.2))
        hit_ids = [hid for hid, hit in zip(ids, mask) if hit]

        inside = HotspotDetector.detect_points(polygon, np.array([[0.1, 0.2], [0.5, 0.5]]))
    """

    @staticmethod
    def detect_point(shapes: Sequence[HitTestable], point: Point) -> np.ndarray:
        """
        Detect which shapes contain a point.

        Args:
            shapes: Hit-testable shapes
            point: Normalized query point

        Returns:
            Boolean mask of shape (len(shapes),) where True = inside
        """
        if len(shapes) == 0:
            return np.array([], dtype=bool)

        return np.array([hit_test(point, shape) for shape in shapes], dtype=bool)

    @staticmethod
    def detect_points(shape: HitTestable, points: np.ndarray) -> np.ndarray:
        """
        Detect which points fall inside one shape.

        Args:
            shape: Hit-testable shape
            points: Nx2 array of normalized (x, y) points

        Returns:
            Boolean mask of shape (N,) where True = inside

        Raises:
            ValueError: If points is not an Nx2 array
            TypeError: If the shape is not hit-testable
        """
        points = np.asarray(points, dtype=float)
        if points.size == 0:
            return np.array([], dtype=bool)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"points must be Nx2 array, got shape {points.shape}")

        xs = points[:, 0]
        ys = points[:, 1]

        if isinstance(shape, Rectangle):
            return (
                (xs >= shape.x) & (xs <= shape.x + shape.width)
                & (ys >= shape.y) & (ys <= shape.y + shape.height)
            )

        if isinstance(shape, Circle):
            dx = xs - shape.center_x
            dy = ys - shape.center_y
            return dx * dx + dy * dy <= shape.radius * shape.radius

        if isinstance(shape, Polygon):
            return HotspotDetector._polygon_mask(shape, xs, ys)

        raise TypeError(f"Shape is not hit-testable: {type(shape).__name__}")

    @staticmethod
    def _polygon_mask(polygon: Polygon, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Ray casting over all points at once, one pass per edge."""
        inside = np.zeros(len(xs), dtype=bool)
        if polygon.is_degenerate:
            return inside

        vertices = np.array([(p.x, p.y) for p in polygon.points], dtype=float)

        j = len(vertices) - 1
        for i in range(len(vertices)):
            xi, yi = vertices[i]
            xj, yj = vertices[j]

            straddles = (yi > ys) != (yj > ys)
            # Horizontal edges divide by zero, but they never straddle
            with np.errstate(divide='ignore', invalid='ignore'):
                x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
                inside ^= straddles & (xs < x_cross)

            j = i

        return inside
