"""
Session: an immutable, ordered series of acceleration samples.

Construction is the only place samples are validated:
- rows with a non-finite time or magnitude are dropped
- rows with a negative magnitude are dropped
- zero surviving rows → DataError

Arrays are stored read-only so every downstream stage can share them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple, Optional, Union

import numpy as np
import polars as pl

from cruxring.errors import DataError

logger = logging.getLogger(__name__)


class Sample(NamedTuple):
    time: float       # seconds
    magnitude: float  # m/s^2, >= 0


@dataclass(frozen=True, eq=False)
class Session:
    time: np.ndarray
    magnitude: np.ndarray

    def __post_init__(self):
        for name in ('time', 'magnitude'):
            arr = np.asarray(getattr(self, name), dtype=np.float64)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    # -----------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------

    @classmethod
    def from_arrays(cls, time, magnitude) -> Session:
        """Build a session from parallel time / magnitude sequences."""
        t = np.asarray(time, dtype=np.float64).ravel()
        m = np.asarray(magnitude, dtype=np.float64).ravel()
        if len(t) != len(m):
            raise DataError(
                f"time and magnitude differ in length ({len(t)} vs {len(m)})"
            )

        valid = np.isfinite(t) & np.isfinite(m) & (m >= 0)
        n_dropped = int((~valid).sum())
        if n_dropped > 0:
            logger.warning("dropped %d invalid samples of %d", n_dropped, len(t))
        if not valid.any():
            raise DataError("No valid samples in session")

        return cls(time=t[valid].copy(), magnitude=m[valid].copy())

    @classmethod
    def from_samples(cls, samples: Iterable[Union[Sample, tuple]]) -> Session:
        rows = list(samples)
        if not rows:
            raise DataError("No valid samples in session")
        t, m = zip(*rows)
        return cls.from_arrays(t, m)

    @classmethod
    def from_components(cls, time, x, y, z) -> Session:
        """Magnitude from the three accelerometer axes (Euclidean norm)."""
        xyz = np.column_stack([
            np.asarray(x, dtype=np.float64).ravel(),
            np.asarray(y, dtype=np.float64).ravel(),
            np.asarray(z, dtype=np.float64).ravel(),
        ])
        return cls.from_arrays(time, np.linalg.norm(xyz, axis=1))

    @classmethod
    def from_frame(
        cls,
        df: pl.DataFrame,
        time_col: str = "time",
        magnitude_col: str = "magnitude",
    ) -> Session:
        for col in (time_col, magnitude_col):
            if col not in df.columns:
                raise DataError(f"Column '{col}' not found in frame")
        return cls.from_arrays(
            df[time_col].cast(pl.Float64).to_numpy(),
            df[magnitude_col].cast(pl.Float64).to_numpy(),
        )

    # -----------------------------------------------------------------
    # Access
    # -----------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.time)

    def __iter__(self) -> Iterator[Sample]:
        for t, m in zip(self.time, self.magnitude):
            yield Sample(float(t), float(m))

    def to_frame(self) -> pl.DataFrame:
        return pl.DataFrame({
            "time": self.time,
            "magnitude": self.magnitude,
        })

    @property
    def duration(self) -> float:
        return float(self.time.max() - self.time.min())

    def summary(self) -> dict:
        """Recording statistics shown next to a session."""
        return {
            'sample_count': len(self),
            'duration': self.duration,
            'max_magnitude': float(self.magnitude.max()),
            'mean_magnitude': float(self.magnitude.mean()),
        }

    def is_time_ordered(self, strict: bool = False) -> bool:
        diffs = np.diff(self.time)
        return bool(np.all(diffs > 0)) if strict else bool(np.all(diffs >= 0))


def as_session(data: Union[Session, pl.DataFrame, Iterable], time_col: Optional[str] = None) -> Session:
    """Coerce a frame or sample iterable to a Session."""
    if isinstance(data, Session):
        return data
    if isinstance(data, pl.DataFrame):
        return Session.from_frame(data, time_col=time_col or "time")
    return Session.from_samples(data)
