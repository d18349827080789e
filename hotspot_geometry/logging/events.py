"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <area>.<action>

    area: box, polygon, render, config, hit
    action: normalized, rejected, completed, ...

Example Log Query:
    fields @timestamp, event, message, metadata.index
    | filter event = "box.rejected"
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - box.*: Bounding box format reconciliation
    - polygon.*: Polygon geometry edge cases
    - render.*: Drawing onto a surface
    - config.*: Configuration loading
    - hit.*: Hit-test queries
    """

    # ========== Box Events ==========
    BOX_NORMALIZED = "box.normalized"
    """Box converted to the canonical nested encoding."""

    BOX_INCONSISTENT = "box.inconsistent"
    """Nested box whose stored width/height disagree with its corners."""

    BOX_REJECTED = "box.rejected"
    """Box matched neither legacy encoding."""

    BOX_BATCH_NORMALIZED = "box.batch_normalized"
    """Batch of boxes normalized."""

    # ========== Geometry Events ==========
    POLYGON_DEGENERATE = "polygon.degenerate"
    """Polygon with fewer than 3 vertices skipped."""

    # ========== Render Events ==========
    RENDER_COMPLETED = "render.completed"
    """Hotspots painted onto a frame."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Render configuration loaded from YAML."""

    CONFIG_INVALID = "config.invalid"
    """Render configuration failed validation."""

    # ========== Hit Events ==========
    HIT_QUERY = "hit.query"
    """Point tested against a set of hotspots."""

