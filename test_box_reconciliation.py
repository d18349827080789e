"""
Test Box Reconciliation
=======================

Flat/nested bounding box conversion and boundary normalization.

Usage:
    pytest test_box_reconciliation.py
"""

import logging

import pytest

from hotspot_geometry.boxes import (
    BoxFormat,
    FlatBox,
    InvalidShapeError,
    NestedBox,
    detect_format,
    is_consistent,
    normalize_batch,
    normalize_for_boundary,
    to_canonical,
    to_flat_format,
    to_nested_format,
)
from hotspot_geometry.geometry import Point, Rectangle


def make_nested(x, y, right, bottom, width, height):
    return NestedBox(
        top_left=Point(x=x, y=y),
        bottom_right=Point(x=right, y=bottom),
        width=width,
        height=height,
    )


# ========== Conversion ==========

def test_flat_to_nested():
    nested = to_nested_format(FlatBox(x=0.0, y=0.0, width=0.4, height=0.3))

    assert nested.to_dict() == {
        'topLeft': {'x': 0.0, 'y': 0.0},
        'bottomRight': {'x': 0.4, 'y': 0.3},
        'width': 0.4,
        'height': 0.3,
    }


def test_nested_is_returned_unchanged():
    nested = make_nested(0.1, 0.1, 0.3, 0.4, 0.2, 0.3)
    assert to_nested_format(nested) is nested


def test_flat_is_returned_unchanged():
    flat = FlatBox(x=0.1, y=0.2, width=0.3, height=0.4)
    assert to_flat_format(flat) is flat


def test_nested_to_flat_keeps_stored_dimensions():
    # bottomRight says 0.5 x 0.5, stored dimensions say 0.2 x 0.1
    nested = make_nested(0.1, 0.1, 0.6, 0.6, 0.2, 0.1)
    flat = to_flat_format(nested)

    assert flat == FlatBox(x=0.1, y=0.1, width=0.2, height=0.1)


@pytest.mark.parametrize("box", [
    FlatBox(x=0.0, y=0.0, width=0.4, height=0.3),
    FlatBox(x=0.1, y=0.2, width=0.3, height=0.7),
    FlatBox(x=0.95, y=0.95, width=0.2, height=0.2),
    FlatBox(x=-0.1, y=0.5, width=0.0, height=0.0),
])
def test_flat_round_trip_is_exact(box):
    assert to_flat_format(to_nested_format(box)) == box


def test_nested_round_trip_keeps_top_left_and_dimensions_only():
    inconsistent = make_nested(0.1, 0.1, 0.9, 0.9, 0.2, 0.3)
    round_tripped = to_nested_format(to_flat_format(inconsistent))

    assert round_tripped.top_left == inconsistent.top_left
    assert round_tripped.width == inconsistent.width
    assert round_tripped.height == inconsistent.height
    # bottomRight is rebuilt from the stored dimensions
    assert round_tripped.bottom_right == Point(x=0.1 + 0.2, y=0.1 + 0.3)


def test_consistency_check():
    assert is_consistent(FlatBox(x=0.0, y=0.0, width=1.0, height=1.0))
    assert is_consistent(make_nested(0.25, 0.25, 0.75, 0.5, 0.5, 0.25))
    assert not is_consistent(make_nested(0.25, 0.25, 0.75, 0.5, 0.4, 0.25))
    assert is_consistent(make_nested(0.25, 0.25, 0.75, 0.5, 0.4, 0.25), tolerance=0.2)


# ========== Format detection ==========

@pytest.mark.parametrize("value, expected", [
    (FlatBox(x=0, y=0, width=1, height=1), BoxFormat.FLAT),
    (make_nested(0, 0, 1, 1, 1, 1), BoxFormat.NESTED),
    ({'x': 0.1, 'y': 0.2, 'width': 0.3, 'height': 0.4}, BoxFormat.FLAT),
    ({'topLeft': {'x': 0.1, 'y': 0.2}, 'bottomRight': {'x': 0.4, 'y': 0.6}}, BoxFormat.NESTED),
    # topLeft wins when both encodings are present
    ({'topLeft': {'x': 0.1, 'y': 0.2}, 'x': 0.5, 'y': 0.5}, BoxFormat.NESTED),
])
def test_detect_format(value, expected):
    assert detect_format(value) is expected


# ========== Boundary normalization ==========

def test_normalize_flat_mapping():
    nested = normalize_for_boundary({'x': 0.0, 'y': 0.0, 'width': 0.4, 'height': 0.3})

    assert isinstance(nested, NestedBox)
    assert nested.top_left == Point(x=0.0, y=0.0)
    assert nested.bottom_right == Point(x=0.4, y=0.3)


def test_normalize_nested_mapping():
    payload = {
        'topLeft': {'x': 0.1, 'y': 0.1},
        'bottomRight': {'x': 0.5, 'y': 0.4},
        'width': 0.4,
        'height': 0.3,
    }
    nested = normalize_for_boundary(payload)

    assert nested.to_dict() == payload


def test_normalize_fills_in_missing_nested_fields():
    from_corners = normalize_for_boundary({
        'topLeft': {'x': 0.25, 'y': 0.25},
        'bottomRight': {'x': 0.75, 'y': 0.5},
    })
    assert (from_corners.width, from_corners.height) == (0.5, 0.25)

    from_dimensions = normalize_for_boundary({
        'topLeft': {'x': 0.25, 'y': 0.25},
        'width': 0.5,
        'height': 0.25,
    })
    assert from_dimensions.bottom_right == Point(x=0.75, y=0.5)


def test_normalize_flat_mapping_without_dimensions():
    nested = normalize_for_boundary({'x': 0.3, 'y': 0.6})
    assert (nested.width, nested.height) == (0.0, 0.0)
    assert nested.bottom_right == Point(x=0.3, y=0.6)


def test_normalize_typed_boxes():
    flat = FlatBox(x=0.1, y=0.2, width=0.3, height=0.4)
    assert normalize_for_boundary(flat) == to_nested_format(flat)

    nested = make_nested(0.1, 0.2, 0.4, 0.6, 0.3, 0.4)
    assert normalize_for_boundary(nested) is nested


@pytest.mark.parametrize("value", [
    {},
    {'x': 0.1},
    {'y': 0.1, 'width': 0.2, 'height': 0.2},
    {'left': 0.1, 'top': 0.1},
    None,
    [0.1, 0.2, 0.3, 0.4],
    "0.1,0.2,0.3,0.4",
])
def test_normalize_rejects_unknown_encodings(value):
    with pytest.raises(InvalidShapeError) as excinfo:
        normalize_for_boundary(value)

    assert excinfo.value.value == value


def test_rectangle_is_normalized_as_flat_box():
    rect = Rectangle(x=0.25, y=0.25, width=0.5, height=0.25)

    assert detect_format(rect) is BoxFormat.FLAT
    assert normalize_for_boundary(rect) == make_nested(0.25, 0.25, 0.75, 0.5, 0.5, 0.25)

    _, census = normalize_batch([rect])
    assert (census.flat, census.nested) == (1, 0)


def test_invalid_shape_error_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_for_boundary({'width': 1, 'height': 1})


def test_inconsistent_box_passes_through_with_warning(caplog):
    payload = {
        'topLeft': {'x': 0.1, 'y': 0.1},
        'bottomRight': {'x': 0.9, 'y': 0.9},
        'width': 0.2,
        'height': 0.2,
    }

    with caplog.at_level(logging.WARNING, logger="hotspot_geometry.boxes"):
        nested = normalize_for_boundary(payload)

    assert nested.width == 0.2
    assert nested.bottom_right == Point(x=0.9, y=0.9)
    assert "box.inconsistent" in caplog.text


def test_to_canonical_returns_rectangle_for_either_encoding():
    from_flat = to_canonical({'x': 0.1, 'y': 0.2, 'width': 0.3, 'height': 0.4})
    from_nested = to_canonical({
        'topLeft': {'x': 0.1, 'y': 0.2},
        'bottomRight': {'x': 0.4, 'y': 0.6},
        'width': 0.3,
        'height': 0.4,
    })

    assert from_flat == Rectangle(x=0.1, y=0.2, width=0.3, height=0.4)
    assert from_nested == from_flat


def test_to_canonical_rejects_malformed_input():
    with pytest.raises(InvalidShapeError):
        to_canonical({'topleft': {'x': 0, 'y': 0}})


# ========== Batch ==========

def test_normalize_batch_counts_formats():
    boxes, census = normalize_batch([
        {'x': 0.1, 'y': 0.1, 'width': 0.1, 'height': 0.1},
        {'topLeft': {'x': 0.2, 'y': 0.2}, 'bottomRight': {'x': 0.3, 'y': 0.3}, 'width': 0.1, 'height': 0.1},
        FlatBox(x=0.5, y=0.5, width=0.25, height=0.25),
    ])

    assert len(boxes) == 3
    assert all(isinstance(box, NestedBox) for box in boxes)
    assert (census.flat, census.nested, census.total) == (2, 1, 3)
    assert boxes[2].bottom_right == Point(x=0.75, y=0.75)


def test_normalize_batch_reports_offending_index():
    with pytest.raises(InvalidShapeError, match="index 1"):
        normalize_batch([
            {'x': 0.1, 'y': 0.1, 'width': 0.1, 'height': 0.1},
            {'width': 0.1, 'height': 0.1},
        ])


@pytest.mark.parametrize("malformed", [
    {'topLeft': None},
    {'x': 'left', 'y': 0.1},
])
def test_normalize_batch_reports_index_of_malformed_fields(malformed):
    with pytest.raises(InvalidShapeError, match="index 1") as excinfo:
        normalize_batch([{'x': 0.1, 'y': 0.1}, malformed])

    assert excinfo.value.value == malformed


def test_normalize_empty_batch():
    boxes, census = normalize_batch([])
    assert boxes == []
    assert census.total == 0


@pytest.mark.parametrize("value", [
    {'topLeft': None},
    {'topLeft': {'x': 0.1}},
    {'x': 'left', 'y': 0.1},
])
def test_malformed_fields_are_invalid_shapes(value):
    with pytest.raises(InvalidShapeError):
        normalize_for_boundary(value)
