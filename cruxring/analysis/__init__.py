"""
Signal analysis: acceleration session → ordered moves.

Stages:
- smooth              moving average with shrinking edges
- detect_peaks        dynamic threshold, distance filter, prominence ranking
- build_moves         speed proxy, crux flag, move type per peak
- normalize_dynamics  raw magnitudes → shared [0, 1] scale

analyze() runs all four.
"""

from cruxring.analysis.moves import Move, MoveSet, MoveType
from cruxring.analysis.smoothing import smooth
from cruxring.analysis.peaks import Peak, detect_peaks, find_candidates, select_peaks
from cruxring.analysis.metrics import (
    average_speed_proxy,
    build_moves,
    classify_move_type,
    crux_flags,
)
from cruxring.analysis.normalize import normalize_dynamics, raw_dynamics
from cruxring.analysis.grading import estimate_grade
from cruxring.analysis.analyzer import analyze

__all__ = [
    'Move',
    'MoveSet',
    'MoveType',
    'smooth',
    'Peak',
    'detect_peaks',
    'find_candidates',
    'select_peaks',
    'average_speed_proxy',
    'build_moves',
    'classify_move_type',
    'crux_flags',
    'normalize_dynamics',
    'raw_dynamics',
    'estimate_grade',
    'analyze',
]
