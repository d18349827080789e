"""
Hotspot Visualizer Module
=========================

Paints a set of hotspots onto an image frame.

Design:
- Stateless rendering (styles are configuration, not state)
- No hit-testing, no business logic: the caller says which hotspots are
  hovered
- Uses the projection functions for shapes and supervision for labels

Dependencies:
- supervision (Color, Point, draw_text)
- numpy (frames)
"""

from typing import TYPE_CHECKING, Collection, Optional, Sequence, Tuple

import numpy as np
import supervision as sv

from hotspot_geometry.geometry.coordinates import CanvasDimensions
from hotspot_geometry.geometry.derived import polygon_bounds
from hotspot_geometry.geometry.shapes import Circle, Ellipse, Polygon, Rectangle, Shape
from hotspot_geometry.logging import LogEvent, create_logger
from hotspot_geometry.rendering.projection import render_shape
from hotspot_geometry.rendering.style import DrawStyle
from hotspot_geometry.rendering.surface import FrameSurface

if TYPE_CHECKING:
    from hotspot_geometry.config import HotspotConfig

logger = create_logger("rendering")

DEFAULT_BASE_STYLE = DrawStyle(stroke_style=sv.Color(r=0, g=255, b=0), line_width=2)
DEFAULT_HOVER_STYLE = DrawStyle(
    stroke_style=sv.Color(r=255, g=200, b=0),
    line_width=3,
    fill_style=sv.Color(r=255, g=200, b=0),
    global_alpha=0.35,
)


class HotspotVisualizer:
    """
    Stateless visualizer for hotspot rendering.

    Design Philosophy:
    - SRP: Only draws, doesn't compute hits
    - Configurable styles
    - Hover style is layered over the base style

    Usage:
        visualizer = HotspotVisualizer(
            base_style=DrawStyle(stroke_style="#00ff00", line_width=2),
            hover_style=DrawStyle(fill_style="#ffc800", global_alpha=0.3),
        )

        # Draw one shape
        frame = visualizer.draw_hotspot(frame, circle, label="el pico")

        # Draw a configured set, highlighting the hovered one
        frame = visualizer.draw_hotspots(frame, config.hotspots, hovered_ids={"beak"})
    """

    def __init__(
        self,
        base_style: DrawStyle = DEFAULT_BASE_STYLE,
        hover_style: DrawStyle = DEFAULT_HOVER_STYLE,
        text_color: sv.Color = sv.Color(r=255, g=255, b=255),
        text_background_color: sv.Color = sv.Color(r=0, g=0, b=0),
        text_scale: float = 0.6,
        text_thickness: int = 1,
        text_padding: int = 8,
    ):
        """
        Initialize visualizer with style configuration.

        Args:
            base_style: Style for every hotspot
            hover_style: Options layered over base_style for hovered hotspots
            text_color: Color for labels
            text_background_color: Background color behind labels
            text_scale: Scale factor for text
            text_thickness: Thickness for text
            text_padding: Padding for text background
        """
        self.base_style = base_style
        self.hover_style = hover_style
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding

    def draw_hotspot(
        self,
        frame: np.ndarray,
        shape: Shape,
        label: Optional[str] = None,
        hovered: bool = False,
    ) -> np.ndarray:
        """
        Draw one hotspot on the frame.

        Args:
            frame: Image to draw on (BGR)
            shape: Normalized shape
            label: Optional text shown above the shape
            hovered: Use the hover style

        Returns:
            Frame with the hotspot drawn
        """
        dims = CanvasDimensions.from_frame(frame)
        style = self.base_style.merged_with(self.hover_style) if hovered else self.base_style

        surface = FrameSurface(frame)
        render_shape(surface, shape, dims, style)
        frame = surface.frame

        if label:
            left, top = self._label_anchor(shape, dims)
            frame = sv.draw_text(
                scene=frame,
                text=label,
                text_anchor=sv.Point(x=int(left), y=int(max(top - 15, 15))),
                text_color=self.text_color,
                text_scale=self.text_scale,
                text_thickness=self.text_thickness,
                text_padding=self.text_padding,
                background_color=self.text_background_color,
            )

        return frame

    def draw_hotspots(
        self,
        frame: np.ndarray,
        hotspots: Sequence["HotspotConfig"],
        hovered_ids: Collection[str] = (),
        show_labels: bool = True,
    ) -> np.ndarray:
        """
        Draw every enabled hotspot, hovered ones last so they sit on top.

        Args:
            frame: Image to draw on (BGR)
            hotspots: Configured hotspots
            hovered_ids: Ids drawn with the hover style
            show_labels: Draw labels for hotspots that have one

        Returns:
            Frame with hotspots drawn
        """
        enabled = [h for h in hotspots if h.enabled]
        ordered = sorted(enabled, key=lambda h: h.hotspot_id in hovered_ids)

        for hotspot in ordered:
            frame = self.draw_hotspot(
                frame,
                hotspot.shape,
                label=hotspot.label if show_labels else None,
                hovered=hotspot.hotspot_id in hovered_ids,
            )

        logger.debug(
            event=LogEvent.RENDER_COMPLETED,
            message=f"Drew {len(ordered)} hotspots",
            metadata={'hovered': sorted(set(hovered_ids)), 'skipped': len(hotspots) - len(ordered)},
        )
        return frame

    @staticmethod
    def _label_anchor(shape: Shape, dims: CanvasDimensions) -> Tuple[float, float]:
        """Pixel (left, top) of the shape's bounding box."""
        if isinstance(shape, Rectangle):
            return shape.x * dims.width, shape.y * dims.height
        if isinstance(shape, Circle):
            radius = shape.radius * dims.min_side
            return shape.center_x * dims.width - radius, shape.center_y * dims.height - radius
        if isinstance(shape, Ellipse):
            return (
                (shape.center_x - shape.radius_x) * dims.width,
                (shape.center_y - shape.radius_y) * dims.height,
            )
        if isinstance(shape, Polygon):
            bounds = polygon_bounds(shape)
            return bounds.x * dims.width, bounds.y * dims.height

        raise TypeError(f"Cannot place a label for {type(shape).__name__}")
