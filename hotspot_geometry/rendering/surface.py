"""
Drawing Surface Module
======================

The caller-owned surface that rendering paints onto.

DrawingSurface is the canvas-like interface the projection functions talk
to. FrameSurface implements it on top of a numpy BGR frame, so hotspots can
be painted onto images loaded with OpenCV.

Design:
- Path building (move_to/line_to/arc/...) is separate from painting
  (fill/stroke), like a 2D canvas context
- Curves are flattened to polylines before painting
- Dash patterns are applied by splitting stroked polylines
- global_alpha blends fills and strokes into the frame

Dependencies:
- numpy (frame, point arrays)
- OpenCV (polylines)
- supervision (Color, filled polygons with opacity)
"""

import math
from typing import List, Optional, Protocol, Sequence, Tuple

import cv2
import numpy as np
import supervision as sv

from hotspot_geometry.rendering.style import ColorLike

PixelPoint = Tuple[float, float]


class DrawingSurface(Protocol):
    """Canvas-like drawing surface (interface)."""

    stroke_style: ColorLike
    fill_style: ColorLike
    line_width: float
    global_alpha: float

    def set_line_dash(self, segments: Sequence[float]) -> None:
        ...

    def get_line_dash(self) -> Tuple[float, ...]:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def close_path(self) -> None:
        ...

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        ...

    def arc(
        self, x: float, y: float, radius: float, start_angle: float, end_angle: float
    ) -> None:
        ...

    def ellipse(
        self,
        x: float,
        y: float,
        radius_x: float,
        radius_y: float,
        rotation: float,
        start_angle: float,
        end_angle: float,
    ) -> None:
        ...

    def fill(self) -> None:
        ...

    def stroke(self) -> None:
        ...


def to_color(value: ColorLike) -> sv.Color:
    """Accept sv.Color or hex strings like "#ff8800"."""
    if isinstance(value, sv.Color):
        return value
    return sv.Color.from_hex(value)


def normalize_dash(segments: Sequence[float]) -> Optional[Tuple[float, ...]]:
    """
    Canvas rules for dash patterns.

    Returns:
        The pattern to store (odd-length patterns are repeated once), or
        None if it must be ignored (negative or non-finite entries)
    """
    values = tuple(float(s) for s in segments)
    if any(v < 0 or not math.isfinite(v) for v in values):
        return None
    if len(values) % 2 == 1:
        values = values * 2
    return values


def dash_polyline(
    points: Sequence[PixelPoint], pattern: Sequence[float]
) -> List[List[PixelPoint]]:
    """
    Split a polyline into the "on" pieces of a dash pattern.

    The pattern starts over at the first point of the polyline.

    Args:
        points: Polyline vertices in pixels
        pattern: Alternating dash/gap lengths (must not be all zero)

    Returns:
        List of polylines to draw
    """
    pieces: List[List[PixelPoint]] = []
    if len(points) < 2:
        return pieces

    index = 0
    remaining = pattern[0]
    drawing = True
    current: List[PixelPoint] = [points[0]]

    for (ax, ay), (bx, by) in zip(points[:-1], points[1:]):
        length = math.hypot(bx - ax, by - ay)
        position = 0.0

        while length - position > remaining:
            position += remaining
            t = position / length
            split = (ax + (bx - ax) * t, ay + (by - ay) * t)

            if drawing:
                current.append(split)
                pieces.append(current)
                current = []
            else:
                current = [split]

            drawing = not drawing
            index = (index + 1) % len(pattern)
            remaining = pattern[index]

        remaining -= length - position
        if drawing:
            current.append((bx, by))

    if drawing and len(current) > 1:
        pieces.append(current)

    return pieces


class FrameSurface:
    """
    DrawingSurface over a numpy image (H, W, 3) in BGR order.

    Painting happens on the frame in place; read the result from
    surface.frame.

    Usage:
        frame = cv2.imread("bird.jpg")
        surface = FrameSurface(frame)
        render_circle(surface, circle, CanvasDimensions.from_frame(frame), style)
        cv2.imwrite("out.png", surface.frame)
    """

    ARC_SEGMENTS = 72  # Per full turn
    MIN_ARC_SEGMENTS = 8

    def __init__(self, frame: np.ndarray):
        self.frame = frame

        self._stroke_style = sv.Color.BLACK
        self._fill_style = sv.Color.BLACK
        self._line_width = 1.0
        self._global_alpha = 1.0
        self._line_dash: Tuple[float, ...] = ()

        self._subpaths: List[List[PixelPoint]] = []
        self._closed: List[bool] = []

    # ========== State ==========

    @property
    def stroke_style(self) -> sv.Color:
        return self._stroke_style

    @stroke_style.setter
    def stroke_style(self, value: ColorLike) -> None:
        self._stroke_style = to_color(value)

    @property
    def fill_style(self) -> sv.Color:
        return self._fill_style

    @fill_style.setter
    def fill_style(self, value: ColorLike) -> None:
        self._fill_style = to_color(value)

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, value: float) -> None:
        # Canvas semantics: non-positive widths are ignored
        if value > 0 and math.isfinite(value):
            self._line_width = float(value)

    @property
    def global_alpha(self) -> float:
        return self._global_alpha

    @global_alpha.setter
    def global_alpha(self, value: float) -> None:
        # Canvas semantics: out-of-range alphas are ignored
        if 0.0 <= value <= 1.0:
            self._global_alpha = float(value)

    def set_line_dash(self, segments: Sequence[float]) -> None:
        pattern = normalize_dash(segments)
        if pattern is not None:
            self._line_dash = pattern

    def get_line_dash(self) -> Tuple[float, ...]:
        return self._line_dash

    # ========== Path building ==========

    def begin_path(self) -> None:
        self._subpaths = []
        self._closed = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x, y)])
        self._closed.append(False)

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((x, y))

    def close_path(self) -> None:
        if not self._subpaths:
            return
        self._closed[-1] = True
        # A new subpath starts where the closed one began
        self.move_to(*self._subpaths[-1][0])

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self.move_to(x, y)
        self.line_to(x + width, y)
        self.line_to(x + width, y + height)
        self.line_to(x, y + height)
        self.close_path()

    def arc(
        self, x: float, y: float, radius: float, start_angle: float, end_angle: float
    ) -> None:
        self.ellipse(x, y, radius, radius, 0.0, start_angle, end_angle)

    def ellipse(
        self,
        x: float,
        y: float,
        radius_x: float,
        radius_y: float,
        rotation: float,
        start_angle: float,
        end_angle: float,
    ) -> None:
        radius_x, radius_y = abs(radius_x), abs(radius_y)
        sweep = min(end_angle - start_angle, 2 * math.pi)
        steps = max(self.MIN_ARC_SEGMENTS, int(math.ceil(self.ARC_SEGMENTS * abs(sweep) / (2 * math.pi))))

        cos_r, sin_r = math.cos(rotation), math.sin(rotation)
        for step in range(steps + 1):
            t = start_angle + sweep * step / steps
            ex = radius_x * math.cos(t)
            ey = radius_y * math.sin(t)
            self.line_to(x + ex * cos_r - ey * sin_r, y + ex * sin_r + ey * cos_r)

    # ========== Painting ==========

    def fill(self) -> None:
        for subpath in self._subpaths:
            if len(subpath) < 3:
                continue
            self.frame = sv.draw_filled_polygon(
                scene=self.frame,
                polygon=self._as_int_array(subpath),
                color=self._fill_style,
                opacity=self._global_alpha,
            )

    def stroke(self) -> None:
        polylines = []
        for subpath, closed in zip(self._subpaths, self._closed):
            points = subpath + [subpath[0]] if closed else list(subpath)
            if len(points) < 2:
                continue
            if self._is_solid():
                polylines.append(points)
            else:
                polylines.extend(dash_polyline(points, self._line_dash))

        if not polylines:
            return

        alpha = self._global_alpha
        canvas = self.frame.copy() if alpha < 1.0 else self.frame
        cv2.polylines(
            canvas,
            [self._as_int_array(points) for points in polylines],
            isClosed=False,
            color=self._stroke_style.as_bgr(),
            thickness=max(1, int(round(self._line_width))),
            lineType=cv2.LINE_AA,
        )

        if alpha < 1.0:
            cv2.addWeighted(canvas, alpha, self.frame, 1 - alpha, 0, dst=self.frame)

    def _is_solid(self) -> bool:
        return not self._line_dash or all(length == 0 for length in self._line_dash)

    @staticmethod
    def _as_int_array(points: Sequence[PixelPoint]) -> np.ndarray:
        return np.round(np.array(points, dtype=float)).astype(np.int32)
