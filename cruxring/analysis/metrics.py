"""
Per-move metrics.

- average_speed_proxy: mean |a[j] * dt[j]| over a window around the peak.
  This is a crude rectangle-rule integration of acceleration, used only
  as a relative intensity measure. It is not a physical speed.
- crux_flags: a peak is a crux when its acceleration exceeds the mean
  peak acceleration of the pass by the configured ratio.
- classify_move_type: one of two policies, chosen once per pass.
"""

from typing import List, Sequence

import numpy as np

from cruxring.analysis.moves import Move, MoveType
from cruxring.analysis.peaks import Peak
from cruxring.config import CONFIG, MoveTypePolicy


def average_speed_proxy(
    values: np.ndarray,
    time: np.ndarray,
    index: int,
    radius: int,
) -> float:
    """Mean of |a[j] * (t[j+1] - t[j])| for j in [index - radius, index + radius)."""
    a = np.asarray(values, dtype=np.float64)
    t = np.asarray(time, dtype=np.float64)
    n = len(a)

    start = max(0, index - radius)
    end = min(n - 1, index + radius)
    if end <= start:
        return 0.0

    dt = t[start + 1:end + 1] - t[start:end]
    return float(np.mean(np.abs(a[start:end] * dt)))


def crux_flags(peaks: Sequence[Peak]) -> List[bool]:
    if not peaks:
        return []
    ratio = CONFIG['crux']['mean_ratio']
    mean_accel = float(np.mean([p.acceleration for p in peaks]))
    return [p.acceleration > mean_accel * ratio for p in peaks]


def classify_move_type(
    acceleration: float,
    prominence: float,
    policy: MoveTypePolicy = 'prominence',
) -> MoveType:
    """
    Move type from peak shape.

    'prominence'       acceleration + prominence thresholds → dynamic / static
    'magnitude_bands'  acceleration bands → dyno / dynamic / powerful / static
    """
    if policy == 'prominence':
        cfg = CONFIG['move_type']['prominence']
        if acceleration > cfg['dynamic_acceleration'] and prominence > cfg['dynamic_prominence']:
            return MoveType.DYNAMIC
        if acceleration > cfg['fallback_acceleration']:
            return MoveType.DYNAMIC
        return MoveType.STATIC

    if policy == 'magnitude_bands':
        cfg = CONFIG['move_type']['magnitude_bands']
        if acceleration > cfg['dyno']:
            return MoveType.DYNO
        if acceleration > cfg['dynamic']:
            return MoveType.DYNAMIC
        if acceleration > cfg['powerful']:
            return MoveType.POWERFUL
        return MoveType.STATIC

    raise ValueError(f"Unknown move type policy: {policy}")


def build_moves(
    peaks: Sequence[Peak],
    values: np.ndarray,
    time: np.ndarray,
    speed_calculation_radius: int,
    policy: MoveTypePolicy = 'prominence',
    start_time: float = 0.0,
) -> List[Move]:
    """
    Start move followed by one Move per peak.

    Dynamics are left at 0.0 here; normalize_dynamics() fills them in.
    """
    moves = [Move.start(start_time)]
    for seq, (peak, is_crux) in enumerate(zip(peaks, crux_flags(peaks)), start=1):
        moves.append(Move(
            sequence_index=seq,
            time=peak.time,
            raw_magnitude=average_speed_proxy(values, time, peak.index, speed_calculation_radius),
            dynamics=0.0,
            is_crux=is_crux,
            move_type=classify_move_type(peak.acceleration, peak.prominence, policy),
            peak_acceleration=peak.acceleration,
            prominence=peak.prominence,
            data_index=peak.index,
        ))
    return moves
