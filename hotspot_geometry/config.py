"""
Configuration schema for hotspot rendering.

Defines the draw styles, the hotspots of one image and the canvas they are
rendered onto. Everything is loaded from YAML and validated at construction.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import supervision as sv
import yaml

from hotspot_geometry.boxes import to_canonical
from hotspot_geometry.geometry import (
    Circle,
    HotspotDetector,
    Point,
    Polygon,
    Rectangle,
    Shape,
    shape_from_dict,
)
from hotspot_geometry.logging import LogEvent, create_logger
from hotspot_geometry.rendering import DrawStyle, HotspotVisualizer

logger = create_logger("config")

HIT_TESTABLE = (Rectangle, Circle, Polygon)


def _parse_color(value: str, name: str) -> sv.Color:
    try:
        return sv.Color.from_hex(value)
    except (ValueError, TypeError, AttributeError) as e:
        raise ValueError(f"{name} must be a hex color like '#00ff00', got {value!r}") from e


@dataclass(frozen=True)
class StyleConfig:
    """
    Draw style as written in YAML.

    None means "leave the surface setting alone", as with DrawStyle.
    """

    stroke_color: Optional[str] = "#00ff00"
    line_width: Optional[float] = 2.0
    line_dash: Tuple[float, ...] = ()
    fill_color: Optional[str] = None
    opacity: Optional[float] = None

    def __post_init__(self):
        """Validate style configuration."""
        if self.stroke_color is not None:
            _parse_color(self.stroke_color, "stroke_color")
        if self.fill_color is not None:
            _parse_color(self.fill_color, "fill_color")

        if self.line_width is not None and self.line_width <= 0:
            raise ValueError(f"line_width must be > 0, got {self.line_width}")

        if any(length < 0 for length in self.line_dash):
            raise ValueError(f"line_dash lengths must be >= 0, got {list(self.line_dash)}")

        if self.opacity is not None and not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"opacity must be in [0.0, 1.0], got {self.opacity}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], layered: bool = False) -> "StyleConfig":
        """
        Parse a style section.

        Args:
            data: Style mapping from YAML
            layered: The style is drawn over another one (hover_style), so
                     omitted keys stay None instead of taking the defaults
        """
        if layered:
            data = {"stroke_color": None, "line_width": None, **data}
        data = dict(data)
        if "line_dash" in data:
            data["line_dash"] = tuple(data["line_dash"] or ())
        return cls(**data)

    def to_draw_style(self) -> DrawStyle:
        return DrawStyle(
            stroke_style=_parse_color(self.stroke_color, "stroke_color") if self.stroke_color else None,
            line_width=self.line_width,
            line_dash=self.line_dash or None,
            fill_style=_parse_color(self.fill_color, "fill_color") if self.fill_color else None,
            global_alpha=self.opacity,
        )


@dataclass(frozen=True)
class HotspotConfig:
    """One clickable region of an image."""

    hotspot_id: str
    shape: Shape
    label: Optional[str] = None
    enabled: bool = True

    def __post_init__(self):
        """Validate hotspot configuration."""
        if not self.hotspot_id:
            raise ValueError("hotspot_id cannot be empty")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HotspotConfig":
        """
        Parse one hotspot.

        The region is either a tagged "shape" or a legacy "bounding_box" in
        either box encoding.

        Raises:
            ValueError: If the region is missing or malformed
                        (InvalidShapeError for malformed bounding boxes)
        """
        if "hotspot_id" not in data:
            raise ValueError(f"Hotspot has no 'hotspot_id': {data}")

        if "shape" in data:
            shape = shape_from_dict(data["shape"])
        elif "bounding_box" in data:
            shape = to_canonical(data["bounding_box"])
        else:
            raise ValueError(
                f"Hotspot '{data['hotspot_id']}' needs a 'shape' or a 'bounding_box'"
            )

        return cls(
            hotspot_id=str(data["hotspot_id"]),
            shape=shape,
            label=data.get("label"),
            enabled=data.get("enabled", True),
        )


@dataclass(frozen=True)
class RenderConfig:
    """
    Main configuration for rendering the hotspots of one image.

    Immutable after construction (frozen dataclass).
    """

    # Blank canvas size when no image is given
    canvas_resolution_wh: Tuple[int, int] = (1280, 720)  # (width, height)

    base_style: StyleConfig = field(default_factory=StyleConfig)
    hover_style: StyleConfig = field(
        default_factory=lambda: StyleConfig(
            stroke_color="#ffc800", line_width=3.0, fill_color="#ffc800", opacity=0.35
        )
    )

    label_color: str = "#ffffff"
    label_background_color: str = "#000000"
    text_scale: float = 0.6

    hotspots: List[HotspotConfig] = field(default_factory=list)

    def __post_init__(self):
        """Validate render configuration."""
        width, height = self.canvas_resolution_wh
        if width <= 0 or height <= 0:
            raise ValueError(
                f"canvas_resolution_wh must have positive dimensions, got {self.canvas_resolution_wh}"
            )
        if width > 8192 or height > 8192:
            raise ValueError(
                f"canvas_resolution_wh dimensions too large (max 8192x8192), got {self.canvas_resolution_wh}"
            )

        _parse_color(self.label_color, "label_color")
        _parse_color(self.label_background_color, "label_background_color")

        if self.text_scale <= 0:
            raise ValueError(f"text_scale must be > 0, got {self.text_scale}")

        ids = [hotspot.hotspot_id for hotspot in self.hotspots]
        duplicates = sorted({hid for hid in ids if ids.count(hid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate hotspot ids: {duplicates}")

    def get_hotspot(self, hotspot_id: str) -> Optional[HotspotConfig]:
        for hotspot in self.hotspots:
            if hotspot.hotspot_id == hotspot_id:
                return hotspot
        return None

    def hotspots_at(self, point: Point) -> List[str]:
        """
        Ids of enabled hotspots containing a normalized point, in config order.

        Ellipses are draw-only and never hit.
        """
        candidates = [
            h for h in self.hotspots
            if h.enabled and isinstance(h.shape, HIT_TESTABLE)
        ]
        mask = HotspotDetector.detect_point([h.shape for h in candidates], point)
        hit_ids = [h.hotspot_id for h, hit in zip(candidates, mask) if hit]

        logger.debug(
            event=LogEvent.HIT_QUERY,
            message=f"{len(hit_ids)} hotspots at point",
            metadata={'point': point.to_dict(), 'hits': hit_ids},
        )
        return hit_ids

    def build_visualizer(self) -> HotspotVisualizer:
        return HotspotVisualizer(
            base_style=self.base_style.to_draw_style(),
            hover_style=self.hover_style.to_draw_style(),
            text_color=_parse_color(self.label_color, "label_color"),
            text_background_color=_parse_color(self.label_background_color, "label_background_color"),
            text_scale=self.text_scale,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderConfig":
        """Build from a parsed YAML/JSON document."""
        kwargs: Dict[str, Any] = {}

        if "canvas_resolution_wh" in data:
            kwargs["canvas_resolution_wh"] = tuple(data["canvas_resolution_wh"])
        if "base_style" in data:
            kwargs["base_style"] = StyleConfig.from_dict(data["base_style"] or {})
        if "hover_style" in data:
            kwargs["hover_style"] = StyleConfig.from_dict(data["hover_style"] or {}, layered=True)
        for key in ("label_color", "label_background_color", "text_scale"):
            if key in data:
                kwargs[key] = data[key]

        kwargs["hotspots"] = [
            HotspotConfig.from_dict(h) for h in data.get("hotspots", [])
        ]
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "RenderConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            canvas_resolution_wh: [1024, 768]  # [width, height]

            base_style:
              stroke_color: "#00ff00"
              line_width: 2
              line_dash: [6, 4]

            hover_style:
              fill_color: "#ffc800"
              opacity: 0.35

            hotspots:
              - hotspot_id: "beak"
                label: "el pico"
                shape: {type: circle, centerX: 0.42, centerY: 0.31, radius: 0.05}
              - hotspot_id: "wing"
                label: "el ala"
                bounding_box: {x: 0.5, y: 0.4, width: 0.3, height: 0.2}
              - hotspot_id: "tail"
                label: "la cola"
                bounding_box:
                  topLeft: {x: 0.1, y: 0.6}
                  bottomRight: {x: 0.3, y: 0.8}
                  width: 0.2
                  height: 0.2

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the YAML or any section is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(yaml_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

        try:
            config = cls.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.error(
                event=LogEvent.CONFIG_INVALID,
                message="Render configuration failed validation",
                metadata={'path': str(yaml_path)},
                exc_info=e,
            )
            raise

        logger.info(
            event=LogEvent.CONFIG_LOADED,
            message=f"Loaded {len(config.hotspots)} hotspots",
            metadata={'path': str(yaml_path)},
        )
        return config
