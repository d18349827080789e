"""
Test Hit-Testing
================

Point-in-shape predicates and the vectorised detector.

Usage:
    pytest test_hit_testing.py
"""

import numpy as np
import pytest

from hotspot_geometry.geometry import (
    Circle,
    Ellipse,
    HotspotDetector,
    Point,
    Polygon,
    Rectangle,
    hit_test,
    point_in_circle,
    point_in_polygon,
    point_in_rectangle,
)

SQUARE = Polygon.from_xy([(0, 0), (1, 0), (1, 1), (0, 1)])

# Concave: unit L with the top-right notch removed
L_SHAPE = Polygon.from_xy([
    (0.0, 0.0), (0.6, 0.0), (0.6, 0.2), (0.2, 0.2), (0.2, 0.6), (0.0, 0.6),
])
L_SHAPE_CASES = [
    ((0.1, 0.1), True),
    ((0.4, 0.1), True),
    ((0.1, 0.4), True),
    ((0.4, 0.4), False),
    ((0.7, 0.1), False),
    ((0.1, 0.7), False),
]

# Self-intersecting: diagonals cross at (0.5, 0.5), lobes on the left and right
BOWTIE = Polygon.from_xy([(0, 0), (1, 1), (1, 0), (0, 1)])


# ========== Rectangle ==========

def test_rectangle_center_is_inside():
    rect = Rectangle(x=0.1, y=0.1, width=0.2, height=0.2)
    assert point_in_rectangle(Point(x=0.2, y=0.2), rect)


@pytest.mark.parametrize("x, y", [
    (0.25, 0.25),   # top-left corner
    (0.75, 0.25),   # top-right corner
    (0.75, 0.75),   # bottom-right corner
    (0.25, 0.75),   # bottom-left corner
    (0.5, 0.25),    # top edge
    (0.25, 0.5),    # left edge
])
def test_rectangle_boundary_counts_as_inside(x, y):
    rect = Rectangle(x=0.25, y=0.25, width=0.5, height=0.5)
    assert point_in_rectangle(Point(x=x, y=y), rect)


@pytest.mark.parametrize("x, y", [
    (0.2, 0.5), (0.8, 0.5), (0.5, 0.2), (0.5, 0.8), (0.0, 0.0),
])
def test_rectangle_outside(x, y):
    rect = Rectangle(x=0.25, y=0.25, width=0.5, height=0.5)
    assert not point_in_rectangle(Point(x=x, y=y), rect)


def test_rectangle_out_of_range_values_still_work():
    rect = Rectangle(x=0.9, y=-0.5, width=0.5, height=1.0)
    assert point_in_rectangle(Point(x=1.2, y=-0.25), rect)
    assert not point_in_rectangle(Point(x=0.5, y=0.0), rect)


def test_zero_area_rectangle_contains_its_corner():
    rect = Rectangle(x=0.5, y=0.5, width=0.0, height=0.0)
    assert point_in_rectangle(Point(x=0.5, y=0.5), rect)
    assert not point_in_rectangle(Point(x=0.5, y=0.51), rect)


# ========== Circle ==========

def test_circle_point_just_outside_radius():
    circle = Circle(center_x=0.5, center_y=0.5, radius=0.1)
    assert not point_in_circle(Point(x=0.61, y=0.5), circle)


def test_circle_center_is_inside():
    circle = Circle(center_x=0.5, center_y=0.5, radius=0.1)
    assert point_in_circle(Point(x=0.5, y=0.5), circle)


@pytest.mark.parametrize("x, y", [(0.75, 0.5), (0.25, 0.5), (0.5, 0.75), (0.5, 0.25)])
def test_circle_circumference_counts_as_inside(x, y):
    circle = Circle(center_x=0.5, center_y=0.5, radius=0.25)
    assert point_in_circle(Point(x=x, y=y), circle)


def test_circle_diagonal_outside():
    circle = Circle(center_x=0.5, center_y=0.5, radius=0.25)
    # Inside the bounding square, outside the circle
    assert not point_in_circle(Point(x=0.7, y=0.7), circle)


def test_zero_radius_circle_contains_only_its_center():
    circle = Circle(center_x=0.5, center_y=0.5, radius=0.0)
    assert point_in_circle(Point(x=0.5, y=0.5), circle)
    assert not point_in_circle(Point(x=0.5, y=0.5001), circle)


def test_negative_radius_behaves_like_its_magnitude():
    circle = Circle(center_x=0.5, center_y=0.5, radius=-0.1)
    assert point_in_circle(Point(x=0.55, y=0.5), circle)


# ========== Polygon ==========

def test_square_contains_center():
    assert point_in_polygon(Point(x=0.5, y=0.5), SQUARE)


def test_square_excludes_point_to_the_right():
    assert not point_in_polygon(Point(x=1.5, y=0.5), SQUARE)


@pytest.mark.parametrize("point, expected", L_SHAPE_CASES)
def test_concave_polygon(point, expected):
    x, y = point
    assert point_in_polygon(Point(x=x, y=y), L_SHAPE) is expected


@pytest.mark.parametrize("shift", range(6))
@pytest.mark.parametrize("point, expected", L_SHAPE_CASES)
def test_polygon_containment_invariant_under_rotation(shift, point, expected):
    x, y = point
    points = L_SHAPE.points[shift:] + L_SHAPE.points[:shift]
    assert point_in_polygon(Point(x=x, y=y), Polygon(points=points)) is expected


@pytest.mark.parametrize("point, expected", L_SHAPE_CASES)
def test_polygon_containment_invariant_under_reversal(point, expected):
    x, y = point
    reversed_polygon = Polygon(points=tuple(reversed(L_SHAPE.points)))
    assert point_in_polygon(Point(x=x, y=y), reversed_polygon) is expected


@pytest.mark.parametrize("x, y, expected", [
    (0.1, 0.5, True),     # left lobe
    (0.9, 0.5, True),     # right lobe
    (0.5, 0.2, False),    # top wedge
    (0.5, 0.8, False),    # bottom wedge
])
def test_self_intersecting_polygon_uses_odd_even_rule(x, y, expected):
    assert point_in_polygon(Point(x=x, y=y), BOWTIE) is expected


@pytest.mark.parametrize("points", [
    [],
    [(0.5, 0.5)],
    [(0.0, 0.0), (1.0, 1.0)],
])
def test_degenerate_polygon_contains_nothing(points):
    polygon = Polygon.from_xy(points)
    for x, y in [(0.5, 0.5), (0.0, 0.0), (0.25, 0.75)]:
        assert point_in_polygon(Point(x=x, y=y), polygon) is False


def test_polygon_with_horizontal_edges():
    # Query point shares a y with two horizontal edges
    polygon = Polygon.from_xy([(0.2, 0.2), (0.8, 0.2), (0.8, 0.8), (0.2, 0.8)])
    assert point_in_polygon(Point(x=0.5, y=0.5), polygon)
    assert not point_in_polygon(Point(x=0.1, y=0.2), polygon)


def test_polygon_accepts_list_of_points():
    polygon = Polygon(points=[Point(0, 0), Point(1, 0), Point(0, 1)])
    assert isinstance(polygon.points, tuple)
    assert point_in_polygon(Point(x=0.2, y=0.2), polygon)


# ========== Dispatch ==========

def test_hit_test_dispatches_on_shape_kind():
    point = Point(x=0.5, y=0.5)
    assert hit_test(point, Rectangle(x=0.4, y=0.4, width=0.2, height=0.2))
    assert hit_test(point, Circle(center_x=0.5, center_y=0.55, radius=0.1))
    assert hit_test(point, SQUARE)
    assert not hit_test(point, Polygon.from_xy([(0, 0), (1, 1)]))


def test_hit_test_rejects_draw_only_shapes():
    with pytest.raises(TypeError):
        hit_test(Point(x=0.5, y=0.5), Ellipse(center_x=0.5, center_y=0.5, radius_x=0.1, radius_y=0.2))


# ========== Detector ==========

def test_detect_point_returns_mask_in_input_order():
    shapes = [
        Rectangle(x=0.0, y=0.0, width=0.5, height=0.5),
        Circle(center_x=0.9, center_y=0.9, radius=0.05),
        SQUARE,
    ]
    mask = HotspotDetector.detect_point(shapes, Point(x=0.25, y=0.25))
    assert mask.dtype == bool
    assert mask.tolist() == [True, False, True]


def test_detect_point_with_no_shapes():
    mask = HotspotDetector.detect_point([], Point(x=0.5, y=0.5))
    assert mask.shape == (0,)


@pytest.mark.parametrize("shape", [
    Rectangle(x=0.25, y=0.25, width=0.5, height=0.5),
    Circle(center_x=0.5, center_y=0.5, radius=0.3),
    L_SHAPE,
    BOWTIE,
    SQUARE,
])
def test_detect_points_agrees_with_scalar_predicates(shape):
    rng = np.random.default_rng(seed=7)
    points = rng.uniform(-0.2, 1.2, size=(300, 2))
    # Add exact boundary points
    points = np.vstack([points, [[0.25, 0.25], [0.75, 0.75], [0.8, 0.5], [0.0, 0.0]]])

    mask = HotspotDetector.detect_points(shape, points)
    expected = [hit_test(Point(x=x, y=y), shape) for x, y in points]

    assert mask.tolist() == expected


def test_detect_points_degenerate_polygon():
    mask = HotspotDetector.detect_points(Polygon.from_xy([(0, 0), (1, 1)]), np.array([[0.5, 0.5]]))
    assert mask.tolist() == [False]


def test_detect_points_validates_shape_of_input():
    with pytest.raises(ValueError):
        HotspotDetector.detect_points(SQUARE, np.array([0.1, 0.2, 0.3]))


def test_detect_points_empty():
    assert HotspotDetector.detect_points(SQUARE, np.empty((0, 2))).shape == (0,)
