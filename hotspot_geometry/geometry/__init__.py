"""
Geometry Layer
==============

Bounded Context: Pure geometric shapes and spatial queries.

Responsibilities:
- Shape representation (immutable)
- Point-in-shape tests (rectangle, circle, polygon)
- Derived shapes (bounds, circle approximation, overlap, IoU)
- Normalized <-> pixel coordinate conversion
- NO state, NO drawing, NO format reconciliation

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Degenerate input yields defined results, never exceptions
- Zero side effects
"""

from hotspot_geometry.geometry.shapes import (
    Point,
    Rectangle,
    Circle,
    Ellipse,
    Polygon,
    Shape,
    HitTestable,
    ShapeKind,
    shape_from_dict,
    shape_to_dict,
)
from hotspot_geometry.geometry.hit_testing import (
    point_in_rectangle,
    point_in_circle,
    point_in_polygon,
    hit_test,
)
from hotspot_geometry.geometry.derived import (
    CircleFitMode,
    polygon_bounds,
    rectangle_center,
    rectangle_to_circle,
    circles_overlap,
    rectangle_iou,
)
from hotspot_geometry.geometry.coordinates import (
    CanvasDimensions,
    to_pixel_point,
    to_normalized_point,
)
from hotspot_geometry.geometry.detector import HotspotDetector

__all__ = [
    # Shapes
    "Point",
    "Rectangle",
    "Circle",
    "Ellipse",
    "Polygon",
    "Shape",
    "HitTestable",
    "ShapeKind",
    "shape_from_dict",
    "shape_to_dict",
    # Hit-testing
    "point_in_rectangle",
    "point_in_circle",
    "point_in_polygon",
    "hit_test",
    "HotspotDetector",
    # Derived
    "CircleFitMode",
    "polygon_bounds",
    "rectangle_center",
    "rectangle_to_circle",
    "circles_overlap",
    "rectangle_iou",
    # Coordinates
    "CanvasDimensions",
    "to_pixel_point",
    "to_normalized_point",
]
