"""
Box Errors
==========

The only data error raised by the geometry core.
"""

from typing import Any


class InvalidShapeError(ValueError):
    """
    Raised when a bounding box matches neither legacy encoding.

    Attributes:
        value: The rejected input
    """

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value
