"""
Rendering Projection Module
===========================

Maps normalized shapes onto a pixel surface of known size.

Design:
- Stateless: every call applies its own style and undoes the dash/alpha
  settings it made
- x quantities scale by canvas width, y quantities by canvas height
- Circle radius scales by min(width, height) so circles stay round on
  non-square canvases
- Polygons with fewer than 3 points draw nothing (they are still being
  authored)
"""

import math
from typing import Optional

from hotspot_geometry.geometry.coordinates import CanvasDimensions
from hotspot_geometry.geometry.shapes import (
    Circle,
    Ellipse,
    Polygon,
    Rectangle,
    Shape,
)
from hotspot_geometry.logging import LogEvent, create_logger
from hotspot_geometry.rendering.style import (
    DrawStyle,
    apply_style,
    paint_path,
    reset_style,
)
from hotspot_geometry.rendering.surface import DrawingSurface

logger = create_logger("rendering")

FULL_TURN = 2 * math.pi
NO_STYLE = DrawStyle()


def render_rectangle(
    surface: DrawingSurface,
    rect: Rectangle,
    dims: CanvasDimensions,
    style: Optional[DrawStyle] = None,
) -> None:
    """Draw a rectangle as a closed four-corner path."""
    style = style or NO_STYLE
    apply_style(surface, style)

    surface.begin_path()
    surface.rect(
        rect.x * dims.width,
        rect.y * dims.height,
        rect.width * dims.width,
        rect.height * dims.height,
    )
    paint_path(surface, style)

    reset_style(surface, style)


def render_circle(
    surface: DrawingSurface,
    circle: Circle,
    dims: CanvasDimensions,
    style: Optional[DrawStyle] = None,
) -> None:
    """Draw a circle; the radius scales by the shorter canvas side."""
    style = style or NO_STYLE
    apply_style(surface, style)

    surface.begin_path()
    surface.arc(
        circle.center_x * dims.width,
        circle.center_y * dims.height,
        circle.radius * dims.min_side,
        0.0,
        FULL_TURN,
    )
    paint_path(surface, style)

    reset_style(surface, style)


def render_ellipse(
    surface: DrawingSurface,
    ellipse: Ellipse,
    dims: CanvasDimensions,
    style: Optional[DrawStyle] = None,
) -> None:
    """Draw an axis-aligned ellipse; radius_x scales by width, radius_y by height."""
    style = style or NO_STYLE
    apply_style(surface, style)

    surface.begin_path()
    surface.ellipse(
        ellipse.center_x * dims.width,
        ellipse.center_y * dims.height,
        ellipse.radius_x * dims.width,
        ellipse.radius_y * dims.height,
        0.0,
        0.0,
        FULL_TURN,
    )
    paint_path(surface, style)

    reset_style(surface, style)


def render_polygon(
    surface: DrawingSurface,
    polygon: Polygon,
    dims: CanvasDimensions,
    style: Optional[DrawStyle] = None,
) -> None:
    """
    Draw a polygon closed back to its first vertex.

    Fewer than 3 points is a silent no-op: the surface is not touched at all.
    """
    if polygon.is_degenerate:
        logger.debug(
            event=LogEvent.POLYGON_DEGENERATE,
            message="Skipping polygon with fewer than 3 vertices",
            metadata={'points': len(polygon.points)},
        )
        return

    style = style or NO_STYLE
    apply_style(surface, style)

    surface.begin_path()
    first, rest = polygon.points[0], polygon.points[1:]
    surface.move_to(first.x * dims.width, first.y * dims.height)
    for point in rest:
        surface.line_to(point.x * dims.width, point.y * dims.height)
    surface.close_path()
    paint_path(surface, style)

    reset_style(surface, style)


def render_shape(
    surface: DrawingSurface,
    shape: Shape,
    dims: CanvasDimensions,
    style: Optional[DrawStyle] = None,
) -> None:
    """
    Dispatch to the renderer for the shape's variant.

    Raises:
        TypeError: If shape is not one of the four shape types
    """
    if isinstance(shape, Rectangle):
        render_rectangle(surface, shape, dims, style)
    elif isinstance(shape, Circle):
        render_circle(surface, shape, dims, style)
    elif isinstance(shape, Ellipse):
        render_ellipse(surface, shape, dims, style)
    elif isinstance(shape, Polygon):
        render_polygon(surface, shape, dims, style)
    else:
        raise TypeError(f"Cannot render {type(shape).__name__}")
