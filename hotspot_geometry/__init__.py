"""
Hotspot Geometry v1.0
=====================

Bounded Context: Clickable hotspots over photographs.

Annotations are stored as normalized shapes (coordinates are fractions of the
image width/height). This package answers "is this point inside that shape",
"how do I draw that shape on a canvas of this size" and "turn this bounding
box into the canonical encoding".

Design Philosophy:
- Separation of Concerns: Geometry, Boxes, Rendering separated
- Immutable values in, new values out; no retained state
- Degenerate input yields defined results, never crashes
- One error at the data boundary: InvalidShapeError

Architecture:

    hotspot_geometry/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # Point, Rectangle, Circle, Ellipse, Polygon
    │   ├── hit_testing.py # point_in_rectangle / circle / polygon
    │   ├── derived.py     # bounds, rectangle_to_circle, circles_overlap, IoU
    │   ├── coordinates.py # normalized <-> pixel
    │   └── detector.py    # HotspotDetector (vectorised hit masks)
    │
    ├── boxes/             # Legacy bounding box reconciliation
    │   ├── formats.py     # FlatBox, NestedBox, detect_format
    │   └── reconcile.py   # to_nested_format, to_flat_format, normalize_for_boundary
    │
    ├── rendering/         # Visualization (stateless drawing)
    │   ├── style.py       # DrawStyle
    │   ├── surface.py     # DrawingSurface, FrameSurface
    │   ├── projection.py  # render_rectangle / circle / ellipse / polygon
    │   └── visualizer.py  # HotspotVisualizer
    │
    ├── config.py          # RenderConfig (YAML)
    └── cli.py             # hotspot-geometry command

Usage:

    # 1. Normalize boxes at the data boundary
    from hotspot_geometry import normalize_for_boundary, to_canonical

    nested = normalize_for_boundary({"x": 0.1, "y": 0.1, "width": 0.2, "height": 0.2})
    rect = to_canonical(nested)

    # 2. Hit-test (stateless)
    from hotspot_geometry import Point, Circle, hit_test

    hit_test(Point(x=0.2, y=0.2), rect)                       # True
    hit_test(Point(x=0.61, y=0.5), Circle(0.5, 0.5, 0.1))     # False

    # 3. Render (stateless)
    from hotspot_geometry import FrameSurface, CanvasDimensions, DrawStyle, render_shape

    surface = FrameSurface(frame)
    render_shape(surface, rect, CanvasDimensions.from_frame(frame),
                 DrawStyle(stroke_style="#00ff00", line_width=2))
"""

# Geometry Layer (immutable, stateless)
from hotspot_geometry.geometry import (
    Point,
    Rectangle,
    Circle,
    Ellipse,
    Polygon,
    Shape,
    ShapeKind,
    point_in_rectangle,
    point_in_circle,
    point_in_polygon,
    hit_test,
    HotspotDetector,
    CircleFitMode,
    polygon_bounds,
    rectangle_to_circle,
    circles_overlap,
    rectangle_iou,
    CanvasDimensions,
)

# Boxes Layer
from hotspot_geometry.boxes import (
    InvalidShapeError,
    FlatBox,
    NestedBox,
    to_nested_format,
    to_flat_format,
    normalize_for_boundary,
    normalize_batch,
    to_canonical,
)

# Rendering Layer (stateless)
from hotspot_geometry.rendering import (
    DrawStyle,
    FrameSurface,
    render_rectangle,
    render_circle,
    render_ellipse,
    render_polygon,
    render_shape,
    HotspotVisualizer,
)

__all__ = [
    # Geometry
    "Point",
    "Rectangle",
    "Circle",
    "Ellipse",
    "Polygon",
    "Shape",
    "ShapeKind",
    "point_in_rectangle",
    "point_in_circle",
    "point_in_polygon",
    "hit_test",
    "HotspotDetector",
    "CircleFitMode",
    "polygon_bounds",
    "rectangle_to_circle",
    "circles_overlap",
    "rectangle_iou",
    "CanvasDimensions",
    # Boxes
    "InvalidShapeError",
    "FlatBox",
    "NestedBox",
    "to_nested_format",
    "to_flat_format",
    "normalize_for_boundary",
    "normalize_batch",
    "to_canonical",
    # Rendering
    "DrawStyle",
    "FrameSurface",
    "render_rectangle",
    "render_circle",
    "render_ellipse",
    "render_polygon",
    "render_shape",
    "HotspotVisualizer",
]

__version__ = "1.0.0"
