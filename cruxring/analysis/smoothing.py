"""Centered moving average with shrinking edge windows."""
import numpy as np


def smooth(values, window: int = 5) -> np.ndarray:
    """
    Moving average over a window of `window` samples centered on each point.

    Near the boundaries the window is clipped to the data (no padding,
    no wrap), so the first output is the mean of values[0 .. window // 2].
    """
    x = np.asarray(values, dtype=np.float64).ravel()
    n = len(x)
    if n == 0 or window <= 1:
        return x.copy()

    half = window // 2
    # Offset by the first sample so a constant signal smooths to exactly itself.
    ref = x[0]
    csum = np.concatenate([[0.0], np.cumsum(x - ref)])

    idx = np.arange(n)
    lo = np.maximum(0, idx - half)
    hi = np.minimum(n - 1, idx + half) + 1
    return (csum[hi] - csum[lo]) / (hi - lo) + ref
