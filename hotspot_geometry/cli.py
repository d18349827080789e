"""
Hotspot Geometry CLI - Main entry point.

Normalize bounding boxes, query hotspots at a point and render hotspots onto
images from the command line.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import cv2
import numpy as np
import yaml

from hotspot_geometry.boxes import normalize_batch
from hotspot_geometry.config import RenderConfig
from hotspot_geometry.geometry import CanvasDimensions, Point, to_normalized_point
from hotspot_geometry.logging import LogEvent, create_logger, set_log_level

logger = create_logger("cli")


def load_document(path: str) -> Any:
    """
    Load a YAML (or JSON) document.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file can't be parsed
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML/JSON in {path}: {e}")


def normalize_command(args: argparse.Namespace) -> None:
    document = load_document(args.file)
    boxes = document.get("boxes", []) if isinstance(document, dict) else document
    if not isinstance(boxes, list):
        raise ValueError("Expected a list of boxes or a mapping with a 'boxes' list")

    normalized, census = normalize_batch(boxes)
    print(json.dumps(
        {
            "boxes": [box.to_dict() for box in normalized],
            "census": census.to_dict(),
        },
        indent=2,
    ))


def hit_command(args: argparse.Namespace) -> None:
    config = RenderConfig.from_yaml(Path(args.config))

    if args.pixel:
        width, height = config.canvas_resolution_wh
        point = to_normalized_point(args.x, args.y, CanvasDimensions(width=width, height=height))
    else:
        point = Point(x=args.x, y=args.y)

    for hotspot_id in config.hotspots_at(point):
        print(hotspot_id)


def render_command(args: argparse.Namespace) -> None:
    config = RenderConfig.from_yaml(Path(args.config))

    if args.image:
        frame = cv2.imread(args.image)
        if frame is None:
            raise FileNotFoundError(f"Could not read image: {args.image}")
    else:
        width, height = config.canvas_resolution_wh
        frame = np.zeros((height, width, 3), dtype=np.uint8)

    hovered: List[str] = args.hover or []
    unknown = [hid for hid in hovered if config.get_hotspot(hid) is None]
    if unknown:
        raise ValueError(f"Unknown hotspot ids: {', '.join(unknown)}")

    visualizer = config.build_visualizer()
    frame = visualizer.draw_hotspots(
        frame, config.hotspots, hovered_ids=set(hovered), show_labels=not args.no_labels
    )

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(output), frame):
        raise ValueError(f"Could not write image: {output}")

    logger.info(
        event=LogEvent.RENDER_COMPLETED,
        message=f"Rendered {len(config.hotspots)} hotspots",
        metadata={'output': str(output), 'hovered': hovered},
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hotspot-geometry",
        description="Hotspot Geometry - normalize, hit-test and render image hotspots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a list of boxes (either encoding) to the nested encoding
  hotspot-geometry normalize boxes.yaml

  # Which hotspots contain a normalized point?
  hotspot-geometry hit config/hotspots.yaml --x 0.42 --y 0.31

  # Same, with pixel coordinates on the configured canvas
  hotspot-geometry hit config/hotspots.yaml --x 430 --y 238 --pixel

  # Render hotspots onto an image, highlighting one
  hotspot-geometry render config/hotspots.yaml --image bird.jpg --output out.png --hover beak
"""
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='JSON log verbosity on stderr (default: WARNING)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # normalize command
    normalize = subparsers.add_parser('normalize', help='Normalize boxes to the nested encoding')
    normalize.add_argument('file', help='YAML/JSON list of boxes')

    # hit command
    hit = subparsers.add_parser('hit', help='List hotspots containing a point')
    hit.add_argument('config', help='Path to hotspot config YAML')
    hit.add_argument('--x', type=float, required=True, help='Point x')
    hit.add_argument('--y', type=float, required=True, help='Point y')
    hit.add_argument(
        '--pixel',
        action='store_true',
        help='Interpret x/y as pixels on canvas_resolution_wh'
    )

    # render command
    render = subparsers.add_parser('render', help='Render hotspots onto an image')
    render.add_argument('config', help='Path to hotspot config YAML')
    render.add_argument('--output', required=True, help='Output image path')
    render.add_argument('--image', help='Source image (default: blank canvas)')
    render.add_argument('--hover', nargs='*', help='Hotspot ids to highlight')
    render.add_argument('--no-labels', action='store_true', help='Skip hotspot labels')

    return parser


COMMANDS = {
    'normalize': normalize_command,
    'hit': hit_command,
    'render': render_command,
}


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    set_log_level(getattr(logging, args.log_level))

    try:
        COMMANDS[args.command](args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
