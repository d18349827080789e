"""
Geometric Shapes Module
========================

Pure geometric representations - NO state, NO side effects.

All coordinates are normalized to the image: x is a fraction of the image
width, y a fraction of its height, origin at the top-left corner, y growing
downward. Values outside [0, 1] are legal; they simply describe a region
outside the visible image.

Design:
- Immutable shapes (frozen dataclass pattern)
- Closed set of variants tagged by ShapeKind
- Wire format (camelCase dicts) handled by to_dict()/from_dict()
- Thread-safe by design (immutability)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Tuple, Union


class ShapeKind(str, Enum):
    """Shape variant tag."""
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    POLYGON = "polygon"


@dataclass(frozen=True)
class Point:
    """
    Normalized 2D coordinate.

    Example:
        >>> Point(x=0.5, y=0.25).to_dict()
        {'x': 0.5, 'y': 0.25}
    """
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Point':
        return cls(x=float(data['x']), y=float(data['y']))


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned box; (x, y) is the top-left corner.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent (expected >= 0)
        height: Vertical extent (expected >= 0)
    """
    kind: ClassVar[ShapeKind] = ShapeKind.RECTANGLE

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Rectangle':
        return cls(
            x=float(data['x']),
            y=float(data['y']),
            width=float(data['width']),
            height=float(data['height']),
        )


@dataclass(frozen=True)
class Circle:
    """
    Circle given by center and radius (expected >= 0).
    """
    kind: ClassVar[ShapeKind] = ShapeKind.CIRCLE

    center_x: float
    center_y: float
    radius: float

    @property
    def center(self) -> Point:
        return Point(x=self.center_x, y=self.center_y)

    def to_dict(self) -> Dict[str, float]:
        return {'centerX': self.center_x, 'centerY': self.center_y, 'radius': self.radius}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Circle':
        return cls(
            center_x=float(data['centerX']),
            center_y=float(data['centerY']),
            radius=float(data['radius']),
        )


@dataclass(frozen=True)
class Ellipse:
    """
    Axis-aligned ellipse with independent horizontal/vertical radii.

    Draw-only: hit-testing does not support ellipses.
    """
    kind: ClassVar[ShapeKind] = ShapeKind.ELLIPSE

    center_x: float
    center_y: float
    radius_x: float
    radius_y: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'centerX': self.center_x,
            'centerY': self.center_y,
            'radiusX': self.radius_x,
            'radiusY': self.radius_y,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ellipse':
        return cls(
            center_x=float(data['centerX']),
            center_y=float(data['centerY']),
            radius_x=float(data['radiusX']),
            radius_y=float(data['radiusY']),
        )


@dataclass(frozen=True)
class Polygon:
    """
    Ordered vertex list, implicitly closed (last vertex connects to first).

    Fewer than 3 points is a degenerate polygon: it contains nothing and
    renders nothing, but constructing one is allowed since polygons pass
    through such states while being authored.

    Attributes:
        points: Tuple of vertices (any iterable is converted to a tuple)
    """
    kind: ClassVar[ShapeKind] = ShapeKind.POLYGON

    points: Tuple[Point, ...]

    def __post_init__(self):
        # Freeze the vertex sequence (using object.__setattr__ for frozen dataclass)
        if not isinstance(self.points, tuple):
            object.__setattr__(self, 'points', tuple(self.points))

    @property
    def is_degenerate(self) -> bool:
        return len(self.points) < 3

    def to_dict(self) -> Dict[str, Any]:
        return {'points': [point.to_dict() for point in self.points]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Polygon':
        return cls(points=tuple(Point.from_dict(p) for p in data.get('points', [])))

    @classmethod
    def from_xy(cls, coordinates: Iterable[Tuple[float, float]]) -> 'Polygon':
        """Build from (x, y) pairs, e.g. rows of an Nx2 array."""
        return cls(points=tuple(Point(x=float(x), y=float(y)) for x, y in coordinates))


Shape = Union[Rectangle, Circle, Ellipse, Polygon]
HitTestable = Union[Rectangle, Circle, Polygon]

_SHAPE_TYPES = {
    ShapeKind.RECTANGLE: Rectangle,
    ShapeKind.CIRCLE: Circle,
    ShapeKind.ELLIPSE: Ellipse,
    ShapeKind.POLYGON: Polygon,
}


def shape_to_dict(shape: Shape) -> Dict[str, Any]:
    """Serialize a shape with its "type" tag."""
    return {'type': shape.kind.value, **shape.to_dict()}


def shape_from_dict(data: Dict[str, Any]) -> Shape:
    """
    Deserialize a tagged shape dict.

    Args:
        data: Dict with a "type" key (rectangle, circle, ellipse, polygon)
              plus that shape's wire fields

    Returns:
        Shape instance

    Raises:
        ValueError: If the tag is missing/unknown or fields are missing
    """
    if 'type' not in data:
        raise ValueError(f"Shape dict has no 'type' field: {data}")

    try:
        kind = ShapeKind(data['type'])
    except ValueError:
        raise ValueError(
            f"Unknown shape type: {data['type']!r}. "
            f"Must be one of {[k.value for k in ShapeKind]}"
        )

    try:
        return _SHAPE_TYPES[kind].from_dict(data)
    except KeyError as e:
        raise ValueError(f"Missing required {kind.value} field: {e}")
    except TypeError as e:
        raise ValueError(f"Invalid {kind.value} data: {e}")
