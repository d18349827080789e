"""
Rendering Layer
===============

Bounded Context: Hotspot visualization and drawing.

Responsibilities:
- Project normalized shapes to pixel space
- Apply per-call draw styles without leaking dash/alpha state
- Draw hotspots and labels on frames

Non-responsibilities:
- Hit-testing (handled by geometry)
- Box format reconciliation (handled by boxes)
- Pointer/touch input (callers own it)

Design:
- Stateless drawing functions
- Canvas-like DrawingSurface interface, FrameSurface for numpy frames
- Configurable styles
"""

from hotspot_geometry.rendering.style import DrawStyle
from hotspot_geometry.rendering.surface import DrawingSurface, FrameSurface
from hotspot_geometry.rendering.projection import (
    render_rectangle,
    render_circle,
    render_ellipse,
    render_polygon,
    render_shape,
)
from hotspot_geometry.rendering.visualizer import HotspotVisualizer

__all__ = [
    "DrawStyle",
    "DrawingSurface",
    "FrameSurface",
    "render_rectangle",
    "render_circle",
    "render_ellipse",
    "render_polygon",
    "render_shape",
    "HotspotVisualizer",
]
