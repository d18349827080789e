"""
Logging Layer
=============

Bounded Context: Observability

JSON log lines for the boxes, rendering, config and cli components.

Public API
----------
    LogEvent: Typed event names
    StructuredLogger: JSON logger for one component
    create_logger: Factory used by every module ("hotspot_geometry.<component>")
    set_log_level: Change the level of all component loggers at once

Typical levels:
    ERROR    box.rejected, config.invalid
    WARNING  box.inconsistent
    INFO     box.batch_normalized, config.loaded, render.completed (cli)
    DEBUG    box.normalized, polygon.degenerate, hit.query
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger, set_log_level

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
    'set_log_level',
]
