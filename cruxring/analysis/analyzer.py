"""
Move analysis: session in, MoveSet out.

    magnitudes → smooth → detect_peaks → build_moves → normalize_dynamics

Pure and synchronous: identical inputs give identical MoveSets.
"""

import logging
from typing import Optional

from cruxring.analysis.grading import estimate_grade
from cruxring.analysis.metrics import build_moves
from cruxring.analysis.moves import MoveSet
from cruxring.analysis.normalize import normalize_dynamics
from cruxring.analysis.peaks import detect_peaks
from cruxring.analysis.smoothing import smooth
from cruxring.config import AnalyzerSettings, get_threshold
from cruxring.errors import DataError
from cruxring.ingest.session import Session

logger = logging.getLogger(__name__)


def analyze(session: Session, settings: Optional[AnalyzerSettings] = None) -> MoveSet:
    """
    Detect climbing moves in a session.

    Args:
        session: Ordered acceleration samples.
        settings: Detection settings. Defaults to AnalyzerSettings().

    Returns:
        MoveSet: start move plus up to `settings.max_moves` detected moves,
        time-ordered, dynamics normalized to [0, 1]. `metadata` carries the
        detection threshold, candidate counts and a grade estimate.

    Raises:
        DataError: fewer than 3 samples.
    """
    settings = settings or AnalyzerSettings()

    min_samples = get_threshold('peaks.min_samples', 3)
    if len(session) < min_samples:
        raise DataError(
            f"Session has {len(session)} samples; at least {min_samples} needed"
        )

    smoothed = smooth(session.magnitude, settings.smoothing_window)
    peaks, info = detect_peaks(
        smoothed,
        session.time,
        peak_threshold_factor=settings.peak_threshold_factor,
        min_peak_distance=settings.min_peak_distance,
        max_moves=settings.max_moves,
    )

    moves = build_moves(
        peaks,
        smoothed,
        session.time,
        speed_calculation_radius=settings.speed_calculation_radius,
        policy=settings.move_type_policy,
        start_time=float(session.time[0]),
    )

    metadata = {
        'sample_count': len(session),
        'smoothing_window': settings.smoothing_window,
        'peak_threshold_factor': settings.peak_threshold_factor,
        'move_type_policy': settings.move_type_policy,
        'threshold': info['threshold'],
        'n_candidates': info['n_candidates'],
        'n_detected': len(peaks),
        'grade_estimate': estimate_grade(float(session.magnitude.max())),
    }
    result = normalize_dynamics(MoveSet(tuple(moves), metadata=metadata))

    logger.info(
        "analyzed %d samples: %d moves (%d crux)",
        len(session), len(result.detected), len(result.crux_indices),
    )
    return result
