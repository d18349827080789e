"""
Draw Style Module
=================

Per-call drawing options, applied to a surface for one shape at a time.

Semantics:
- Omitted options (None) leave the surface's current setting untouched
- A fill happens only when fill_style is given, a stroke only when
  stroke_style is given
- After the shape is drawn, a dash pattern set by the call is reset to
  solid and an alpha set by the call is reset to fully opaque
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

import supervision as sv

ColorLike = Union[str, sv.Color]


@dataclass(frozen=True)
class DrawStyle:
    """
    Immutable drawing options.

    Attributes:
        stroke_style: Outline color (hex string or sv.Color)
        line_width: Outline thickness in pixels
        line_dash: Alternating dash/gap lengths in pixels
        fill_style: Fill color (hex string or sv.Color)
        global_alpha: Opacity 0-1 applied to fill and stroke

    Example:
        >>> style = DrawStyle(stroke_style="#00ff00", line_width=2, line_dash=(6, 4))
    """
    stroke_style: Optional[ColorLike] = None
    line_width: Optional[float] = None
    line_dash: Optional[Tuple[float, ...]] = None
    fill_style: Optional[ColorLike] = None
    global_alpha: Optional[float] = None

    def __post_init__(self):
        if self.line_dash is not None and not isinstance(self.line_dash, tuple):
            object.__setattr__(self, 'line_dash', tuple(self.line_dash))

    def merged_with(self, override: 'DrawStyle') -> 'DrawStyle':
        """New style with every option set in override replacing this one's."""
        changes = {
            name: getattr(override, name)
            for name in ('stroke_style', 'line_width', 'line_dash', 'fill_style', 'global_alpha')
            if getattr(override, name) is not None
        }
        return replace(self, **changes)


def apply_style(surface, style: DrawStyle) -> None:
    """Push the options the style sets onto the surface."""
    if style.stroke_style is not None:
        surface.stroke_style = style.stroke_style
    if style.line_width is not None:
        surface.line_width = style.line_width
    if style.line_dash is not None:
        surface.set_line_dash(style.line_dash)
    if style.fill_style is not None:
        surface.fill_style = style.fill_style
    if style.global_alpha is not None:
        surface.global_alpha = style.global_alpha


def paint_path(surface, style: DrawStyle) -> None:
    """Fill then stroke the current path, as the style asks."""
    if style.fill_style is not None:
        surface.fill()
    if style.stroke_style is not None:
        surface.stroke()


def reset_style(surface, style: DrawStyle) -> None:
    """Undo the dash and alpha settings so they don't leak into the next shape."""
    if style.line_dash is not None:
        surface.set_line_dash(())
    if style.global_alpha is not None:
        surface.global_alpha = 1.0
