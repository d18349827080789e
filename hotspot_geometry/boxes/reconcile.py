"""
Format Reconciliation Module
============================

Bidirectional conversion between the flat and nested box encodings.

Design:
- Pure conversions (no state); typed inputs in, new values out
- Stored width/height are authoritative: nested -> flat never recomputes
  them from the corners
- normalize_for_boundary is the single entry point for external data and
  the only place a malformed box is rejected
- The nested encoding is canonical at the persistence boundary

Usage:
    box = normalize_for_boundary({"x": 0.1, "y": 0.2, "width": 0.3, "height": 0.1})
    rect = to_canonical(payload)   # Rectangle for hit-testing/rendering
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from hotspot_geometry.boxes.errors import InvalidShapeError
from hotspot_geometry.boxes.formats import (
    BoxFormat,
    FlatBox,
    LegacyBox,
    NestedBox,
    detect_format,
    parse_box,
)
from hotspot_geometry.geometry.shapes import Point, Rectangle
from hotspot_geometry.logging import LogEvent, create_logger

logger = create_logger("boxes")

DEFAULT_TOLERANCE = 1e-6


def to_nested_format(box: LegacyBox) -> NestedBox:
    """
    Convert to the nested encoding.

    Nested boxes are returned unchanged. Flat boxes get
    topLeft = (x, y) and bottomRight = (x + width, y + height).
    """
    if isinstance(box, NestedBox):
        return box

    return NestedBox(
        top_left=Point(x=box.x, y=box.y),
        bottom_right=Point(x=box.x + box.width, y=box.y + box.height),
        width=box.width,
        height=box.height,
    )


def to_flat_format(box: LegacyBox) -> FlatBox:
    """
    Convert to the flat encoding.

    Flat boxes are returned unchanged. For nested boxes x/y come from
    topLeft and the stored width/height are carried through as-is, even if
    bottomRight disagrees with them.
    """
    if isinstance(box, FlatBox):
        return box

    return FlatBox(x=box.top_left.x, y=box.top_left.y, width=box.width, height=box.height)


def is_consistent(box: LegacyBox, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """
    Check that a nested box's stored dimensions match its corners.

    Flat boxes have no redundant fields and are always consistent.
    """
    if isinstance(box, FlatBox):
        return True

    corner_width = box.bottom_right.x - box.top_left.x
    corner_height = box.bottom_right.y - box.top_left.y
    return (
        abs(corner_width - box.width) <= tolerance
        and abs(corner_height - box.height) <= tolerance
    )


def normalize_for_boundary(value: Any) -> NestedBox:
    """
    Normalize a box crossing a serialization boundary.

    Args:
        value: FlatBox, NestedBox, or a raw mapping in either wire format

    Returns:
        The box in the canonical nested encoding

    Raises:
        InvalidShapeError: If value has no "topLeft" and not both "x" and "y"
    """
    try:
        box = parse_box(value)
    except InvalidShapeError as e:
        logger.error(
            event=LogEvent.BOX_REJECTED,
            message="Bounding box matches neither legacy encoding",
            metadata={'value': repr(value)},
            exc_info=e,
        )
        raise

    if not is_consistent(box):
        logger.warning(
            event=LogEvent.BOX_INCONSISTENT,
            message="Nested box dimensions disagree with its corners; keeping stored width/height",
            metadata=box.to_dict(),
        )

    nested = to_nested_format(box)
    logger.debug(
        event=LogEvent.BOX_NORMALIZED,
        message="Normalized bounding box",
        metadata={'source_format': detect_format(box).value},
    )
    return nested


def to_canonical(value: Any) -> Rectangle:
    """
    Single ingress step: any box encoding -> Rectangle.

    Raises:
        InvalidShapeError: Same conditions as normalize_for_boundary
    """
    flat = to_flat_format(normalize_for_boundary(value))
    return Rectangle(x=flat.x, y=flat.y, width=flat.width, height=flat.height)


@dataclass(frozen=True)
class BoxCensus:
    """
    Format counts for a normalized batch.

    Attributes:
        flat: Boxes converted from the flat encoding
        nested: Boxes already nested
    """
    flat: int = 0
    nested: int = 0

    @property
    def total(self) -> int:
        return self.flat + self.nested

    def to_dict(self):
        return {'flat': self.flat, 'nested': self.nested, 'total': self.total}


def normalize_batch(values: Iterable[Any]) -> Tuple[List[NestedBox], BoxCensus]:
    """
    Normalize many boxes at once.

    Args:
        values: Typed boxes or raw mappings

    Returns:
        Tuple of:
        - normalized boxes, in input order
        - census of source formats

    Raises:
        InvalidShapeError: On the first malformed item (nothing is returned
                           for a partially valid batch)
    """
    normalized: List[NestedBox] = []
    flat_count = 0
    nested_count = 0

    for index, value in enumerate(values):
        try:
            box_format = detect_format(value)
            nested = normalize_for_boundary(value)
        except InvalidShapeError as e:
            logger.error(
                event=LogEvent.BOX_REJECTED,
                message="Batch contains a malformed bounding box",
                metadata={'index': index, 'value': repr(value)},
            )
            raise InvalidShapeError(f"Invalid bounding box at index {index}: {e}", value=value) from e

        if box_format is BoxFormat.FLAT:
            flat_count += 1
        else:
            nested_count += 1

        normalized.append(nested)

    census = BoxCensus(flat=flat_count, nested=nested_count)
    logger.info(
        event=LogEvent.BOX_BATCH_NORMALIZED,
        message=f"Normalized {census.total} bounding boxes",
        metadata=census.to_dict(),
    )
    return normalized, census
