"""
Live Session Buffer

Bounded accumulation of streamed accelerometer points.
Old points fall off the front; every snapshot is an independent Session.
"""

import collections
import logging
from typing import Iterable, Optional

import numpy as np

from cruxring.errors import DataError
from cruxring.ingest.session import Session

logger = logging.getLogger(__name__)


class LiveSessionBuffer:
    """
    Fixed-capacity buffer for points arriving from a live device.

    Points are (time, magnitude), or (time, x, y, z) via append_components().
    Non-finite or negative points are counted and skipped.
    """

    def __init__(self, max_samples: int = 20_000):
        if max_samples < 1:
            raise ValueError(f"max_samples must be >= 1, got {max_samples}")
        self.max_samples = max_samples

        self._time = collections.deque(maxlen=max_samples)
        self._magnitude = collections.deque(maxlen=max_samples)

        self.total_received = 0
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._time)

    def append(self, time: float, magnitude: float) -> bool:
        """Add one point. Returns False when the point was skipped."""
        self.total_received += 1
        if not (np.isfinite(time) and np.isfinite(magnitude)) or magnitude < 0:
            self.dropped += 1
            return False
        self._time.append(float(time))
        self._magnitude.append(float(magnitude))
        return True

    def append_components(self, time: float, x: float, y: float, z: float) -> bool:
        return self.append(time, float(np.sqrt(x * x + y * y + z * z)))

    def extend(self, time: Iterable[float], magnitude: Iterable[float]) -> int:
        """Add many points. Returns how many were kept."""
        kept = 0
        for t, m in zip(time, magnitude):
            kept += self.append(t, m)
        if kept:
            logger.debug("buffer +%d points (%d held)", kept, len(self))
        return kept

    def snapshot(self, last_n: Optional[int] = None) -> Session:
        """Immutable Session of the buffered points (optionally only the newest last_n)."""
        if not self._time:
            raise DataError("Live buffer is empty")
        time = np.fromiter(self._time, dtype=np.float64, count=len(self._time))
        magnitude = np.fromiter(self._magnitude, dtype=np.float64, count=len(self._magnitude))
        if last_n is not None:
            time = time[-last_n:]
            magnitude = magnitude[-last_n:]
        return Session(time=time, magnitude=magnitude)

    def clear(self) -> None:
        self._time.clear()
        self._magnitude.clear()
