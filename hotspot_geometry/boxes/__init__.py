"""
Boxes Layer
===========

Bounded Context: Reconciling the two legacy bounding box encodings.

Responsibilities:
- Typed flat/nested box values and format detection
- Flat <-> nested conversion
- Boundary normalization (rejects malformed external data)

Non-responsibilities:
- Hit-testing (handled by geometry)
- Drawing (handled by rendering)
- Persistence (callers own it)
"""

from hotspot_geometry.boxes.errors import InvalidShapeError
from hotspot_geometry.boxes.formats import (
    BoxFormat,
    FlatBox,
    NestedBox,
    LegacyBox,
    detect_format,
    parse_box,
)
from hotspot_geometry.boxes.reconcile import (
    BoxCensus,
    to_nested_format,
    to_flat_format,
    is_consistent,
    normalize_for_boundary,
    normalize_batch,
    to_canonical,
)

__all__ = [
    "InvalidShapeError",
    "BoxFormat",
    "FlatBox",
    "NestedBox",
    "LegacyBox",
    "detect_format",
    "parse_box",
    "BoxCensus",
    "to_nested_format",
    "to_flat_format",
    "is_consistent",
    "normalize_for_boundary",
    "normalize_batch",
    "to_canonical",
]
