"""
Error types raised by cruxring.

DataError      the input session cannot be analyzed at all.
GeometryError  one ring cannot be built; synthesis skips it and moves on.

Non-finite numbers are never raised: they are dropped where they appear.
"""


class CruxRingError(Exception):
    """Base class for cruxring errors."""


class DataError(CruxRingError, ValueError):
    """Session too short or without any valid rows."""


class GeometryError(CruxRingError, ValueError):
    """Degenerate ring: non-positive radius or fewer than 3 finite points."""

    def __init__(self, message: str, ring_index: int = None):
        super().__init__(message)
        self.ring_index = ring_index
