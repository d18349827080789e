"""
Hit-Testing Module
==================

Point-in-shape predicates. Pure functions, no side effects.

Design:
- Rectangle and circle tests are O(1), polygon test is O(n) in vertex count
- Boundaries count as inside for rectangles and circles
- Polygons use ray casting with the odd-even rule (not winding number), so
  self-intersecting polygons flip parity at every crossing
- Degenerate polygons (< 3 vertices) contain nothing; they never raise
"""

from hotspot_geometry.geometry.shapes import (
    Circle,
    HitTestable,
    Point,
    Polygon,
    Rectangle,
)


def point_in_rectangle(point: Point, rect: Rectangle) -> bool:
    """Inclusive bounds check on both axes."""
    return (
        rect.x <= point.x <= rect.x + rect.width
        and rect.y <= point.y <= rect.y + rect.height
    )


def point_in_circle(point: Point, circle: Circle) -> bool:
    """
    Check whether the point is within the circle (circumference included).

    Compares squared distance against squared radius, so no square root.
    """
    dx = point.x - circle.center_x
    dy = point.y - circle.center_y
    return dx * dx + dy * dy <= circle.radius * circle.radius


def point_in_polygon(point: Point, polygon: Polygon) -> bool:
    """
    Ray casting (odd-even rule).

    A horizontal ray is cast from the point toward increasing x. Every edge
    that straddles the point's y and meets the ray to the right of the point
    toggles the result.

    Args:
        point: Point to test
        polygon: Polygon to test against

    Returns:
        True if the point is inside, False otherwise or if the polygon has
        fewer than 3 vertices
    """
    points = polygon.points
    if len(points) < 3:
        return False

    x, y = point.x, point.y
    inside = False

    j = len(points) - 1
    for i in range(len(points)):
        xi, yi = points[i].x, points[i].y
        xj, yj = points[j].x, points[j].y

        # Straddling implies yi != yj, so the division is safe
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside

        j = i

    return inside


def hit_test(point: Point, shape: HitTestable) -> bool:
    """
    Dispatch to the predicate for the shape's variant.

    Raises:
        TypeError: If the shape is not hit-testable (ellipses are draw-only)
    """
    if isinstance(shape, Rectangle):
        return point_in_rectangle(point, shape)
    if isinstance(shape, Circle):
        return point_in_circle(point, shape)
    if isinstance(shape, Polygon):
        return point_in_polygon(point, shape)

    raise TypeError(f"Shape is not hit-testable: {type(shape).__name__}")
