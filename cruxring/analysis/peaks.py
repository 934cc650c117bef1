"""
Peak detection on a smoothed magnitude series.

    threshold = mean(a) + std(a) * peak_threshold_factor

A sample i in [1, n-2] is a candidate when it is a strict local maximum
above the threshold. Candidates are accepted in scan order unless an
already accepted peak lies fewer than `min_peak_distance` indices away.
The `max_moves` most prominent peaks are kept and returned in time order.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from cruxring.config import get_threshold

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Peak:
    index: int
    time: float
    acceleration: float
    prominence: float   # a[i] - min(a[i-1], a[i+1])


def find_candidates(
    values: np.ndarray,
    time: np.ndarray,
    threshold: float,
    min_peak_distance: int,
) -> List[Peak]:
    """Distance-filtered local maxima above `threshold`, in scan order."""
    a = np.asarray(values, dtype=np.float64)
    n = len(a)
    if n < get_threshold('peaks.min_samples', 3):
        return []

    mid = a[1:-1]
    is_max = (mid > a[:-2]) & (mid > a[2:]) & (mid > threshold)
    indices = np.flatnonzero(is_max) + 1

    accepted: List[Peak] = []
    for i in indices:
        # Accepted indices only grow, so the last one is always the nearest.
        if accepted and i - accepted[-1].index < min_peak_distance:
            continue
        accepted.append(Peak(
            index=int(i),
            time=float(time[i]),
            acceleration=float(a[i]),
            prominence=float(a[i] - min(a[i - 1], a[i + 1])),
        ))
    return accepted


def select_peaks(candidates: List[Peak], max_moves: int) -> List[Peak]:
    """Top `max_moves` by prominence (ties keep scan order), re-sorted by time."""
    ranked = sorted(candidates, key=lambda p: p.prominence, reverse=True)
    return sorted(ranked[:max_moves], key=lambda p: p.time)


def detect_peaks(
    values: np.ndarray,
    time: np.ndarray,
    peak_threshold_factor: float = 0.5,
    min_peak_distance: int = 10,
    max_moves: int = 15,
) -> Tuple[List[Peak], dict]:
    """
    Detect move peaks.

    Parameters
    ----------
    values : np.ndarray
        Smoothed magnitude series.
    time : np.ndarray
        Sample times, same length as `values`.
    peak_threshold_factor : float
        Standard deviations above the mean a peak must reach.
    min_peak_distance : int
        Minimum index gap between accepted peaks.
    max_moves : int
        Maximum number of peaks kept.

    Returns
    -------
    (peaks, info)
        peaks : list of Peak, ascending time
        info : dict with threshold, mean, std, n_candidates, n_selected
    """
    a = np.asarray(values, dtype=np.float64)
    t = np.asarray(time, dtype=np.float64)

    if len(a) < get_threshold('peaks.min_samples', 3):
        return [], _empty_info()

    mean = float(np.mean(a))
    std = float(np.std(a))
    threshold = mean + std * peak_threshold_factor

    candidates = find_candidates(a, t, threshold, min_peak_distance)
    selected = select_peaks(candidates, max_moves)

    logger.info(
        "peak detection: mean=%.2f std=%.2f threshold=%.2f, kept %d of %d candidates",
        mean, std, threshold, len(selected), len(candidates),
    )

    return selected, {
        'threshold': threshold,
        'mean': mean,
        'std': std,
        'n_candidates': len(candidates),
        'n_selected': len(selected),
    }


def _empty_info() -> dict:
    return {
        'threshold': float('nan'),
        'mean': float('nan'),
        'std': float('nan'),
        'n_candidates': 0,
        'n_selected': 0,
    }
