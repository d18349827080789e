"""
Legacy Bounding Box Encodings
=============================

Bounded Context: Bounding box wire formats

Two producers write boxes into the same conceptual field:

- flat:   {"x", "y", "width", "height"}
- nested: {"topLeft": {"x", "y"}, "bottomRight": {"x", "y"}, "width", "height"}

Both are kept as distinct immutable types so the format of any value is
unambiguous. Raw mappings are classified by field presence: "topLeft" means
nested, otherwise both "x" and "y" mean flat.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from hotspot_geometry.boxes.errors import InvalidShapeError
from hotspot_geometry.geometry.shapes import Point, Rectangle


class BoxFormat(str, Enum):
    """Bounding box encoding."""
    FLAT = "flat"
    NESTED = "nested"


@dataclass(frozen=True)
class FlatBox:
    """
    Flat bounding box, structurally identical to Rectangle.

    Example:
        >>> FlatBox(x=0.1, y=0.2, width=0.3, height=0.4).to_dict()
        {'x': 0.1, 'y': 0.2, 'width': 0.3, 'height': 0.4}
    """
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}

    @classmethod
    def from_dict(cls, data: Mapping) -> 'FlatBox':
        """
        Deserialize from dict.

        x and y are required; width/height default to 0.0 (a point-sized box).
        """
        return cls(
            x=float(data['x']),
            y=float(data['y']),
            width=float(data.get('width', 0.0)),
            height=float(data.get('height', 0.0)),
        )


@dataclass(frozen=True)
class NestedBox:
    """
    Nested bounding box written by the annotation editor.

    width/height are stored, not derived: they are expected to equal the
    corner differences but nothing enforces it.

    Attributes:
        top_left: Top-left corner
        bottom_right: Bottom-right corner
        width: Stored width
        height: Stored height
    """
    top_left: Point
    bottom_right: Point
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'topLeft': self.top_left.to_dict(),
            'bottomRight': self.bottom_right.to_dict(),
            'width': self.width,
            'height': self.height,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> 'NestedBox':
        """
        Deserialize from dict.

        Missing pieces are filled in from the others: bottomRight from
        topLeft + width/height, width/height from the corners.
        """
        top_left = Point.from_dict(data['topLeft'])
        bottom_right = (
            Point.from_dict(data['bottomRight']) if data.get('bottomRight') is not None else None
        )

        if 'width' in data:
            width = float(data['width'])
        else:
            width = bottom_right.x - top_left.x if bottom_right is not None else 0.0

        if 'height' in data:
            height = float(data['height'])
        else:
            height = bottom_right.y - top_left.y if bottom_right is not None else 0.0

        if bottom_right is None:
            bottom_right = Point(x=top_left.x + width, y=top_left.y + height)

        return cls(top_left=top_left, bottom_right=bottom_right, width=width, height=height)


LegacyBox = Union[FlatBox, NestedBox]


def detect_format(value: Any) -> BoxFormat:
    """
    Classify a typed box or raw mapping.

    A Rectangle has the flat box's fields and is classified as flat.

    Raises:
        InvalidShapeError: If the value has no "topLeft" and not both "x"
                           and "y"
    """
    if isinstance(value, NestedBox):
        return BoxFormat.NESTED
    if isinstance(value, (FlatBox, Rectangle)):
        return BoxFormat.FLAT

    if isinstance(value, Mapping):
        if 'topLeft' in value:
            return BoxFormat.NESTED
        if 'x' in value and 'y' in value:
            return BoxFormat.FLAT

    raise InvalidShapeError(
        f"Invalid bounding box format: expected 'topLeft' or both 'x' and 'y', got {value!r}",
        value=value,
    )


def parse_box(value: Any) -> LegacyBox:
    """
    Turn a typed box, Rectangle or raw mapping into the matching box type.

    Raises:
        InvalidShapeError: If the format cannot be detected or its fields
                           are malformed
    """
    box_format = detect_format(value)
    if isinstance(value, (FlatBox, NestedBox)):
        return value
    if isinstance(value, Rectangle):
        return FlatBox(x=value.x, y=value.y, width=value.width, height=value.height)

    try:
        if box_format is BoxFormat.NESTED:
            return NestedBox.from_dict(value)
        return FlatBox.from_dict(value)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise InvalidShapeError(f"Malformed {box_format.value} bounding box: {value!r}", value=value) from e
