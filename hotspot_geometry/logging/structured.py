"""
Structured JSON Logger
======================

One JSON object per log line, tagged with the component that emitted it and
a typed LogEvent.

Components:
    boxes      - boundary normalization and batch censuses
    rendering  - degenerate polygons, completed renders
    config     - loaded / rejected render configs, hit queries
    cli        - command outcomes

Every component logs under "hotspot_geometry.<component>", so the standard
logging tree still works (caplog, handlers on "hotspot_geometry", ...).

Example:
    >>> logger = create_logger("boxes")
    >>> logger.info(
    ...     event=LogEvent.BOX_BATCH_NORMALIZED,
    ...     message="Normalized 12 bounding boxes",
    ...     metadata={'flat': 4, 'nested': 8}
    ... )

Output:
    {"timestamp": "2025-10-24T15:30:45.123456+00:00", "level": "INFO",
     "component": "boxes", "event": "box.batch_normalized",
     "message": "Normalized 12 bounding boxes",
     "metadata": {"flat": 4, "nested": 8}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .events import LogEvent

ROOT_LOGGER_NAME = "hotspot_geometry"

_components: Dict[str, "StructuredLogger"] = {}


class StructuredLogger:
    """
    Thin JSON wrapper around a standard library logger.

    Attributes:
        component: Component name, included in every entry
        logger: Underlying logging.Logger
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        self.component = component
        self.logger = logging.getLogger(logger_name or f"{ROOT_LOGGER_NAME}.{component}")
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        # Skip building the entry when nobody listens at this level
        if not self.logger.isEnabledFor(level):
            return

        entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': logging.getLevelName(level),
            'component': self.component,
            'event': LogEvent(event).value,
            'message': message,
        }
        if metadata:
            entry['metadata'] = metadata
        if exc_info is not None:
            entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info),
            }

        # default=str keeps numpy scalars and enums serializable
        self.logger.log(
            level,
            json.dumps(entry, default=str),
            exc_info=exc_info if level >= logging.ERROR else None,
        )

    def debug(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Per-item detail (every normalized box, every skipped polygon)."""
        self._log(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Once-per-operation summaries."""
        self._log(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """
        Data that was accepted but looks wrong.

        Example:
            >>> logger.warning(
            ...     event=LogEvent.BOX_INCONSISTENT,
            ...     message="Nested box dimensions disagree with its corners",
            ...     metadata={'width': 0.2, 'bottomRight': {'x': 0.9, 'y': 0.9}}
            ... )
        """
        self._log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Rejected input. The exception type and message go into the entry,
        the traceback goes to the handler.

        Example:
            >>> try:
            ...     normalize_for_boundary(payload)
            ... except InvalidShapeError as e:
            ...     logger.error(event=LogEvent.BOX_REJECTED, message="Rejected box", exc_info=e)
            ...     raise
        """
        self._log(logging.ERROR, event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)


class JSONFormatter(logging.Formatter):
    """Pass-through: StructuredLogger messages are already JSON."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(component: str, level: int = logging.INFO) -> StructuredLogger:
    """
    Create the logger for a component and remember it for set_log_level.

    Example:
        >>> logger = create_logger("rendering", level=logging.DEBUG)
    """
    logger = StructuredLogger(component=component, level=level)
    _components[component] = logger
    return logger


def set_log_level(level: int) -> None:
    """Change the level of every component logger created so far."""
    for logger in _components.values():
        logger.set_level(level)
