"""
Dynamics normalization.

Maps every detected move's raw magnitude onto [0, 1] against the min/max
of the current MoveSet. Moves without a usable raw value get a
position-based stand-in: 0.3 + 0.4 * (index / count). A flat set
(max == min) maps to 0.5 everywhere. The start move stays at 0.

Always recomputed from the whole set; nothing is cached per move.
"""

from dataclasses import replace
from typing import Iterable, Union

import numpy as np

from cruxring.analysis.moves import Move, MoveSet
from cruxring.config import CONFIG


def raw_dynamics(moves: Iterable[Move]) -> np.ndarray:
    """Raw value per move, with the position-based fallback for missing ones."""
    moves = list(moves)
    count = len(moves)
    cfg = CONFIG['normalize']

    raw = np.empty(count, dtype=np.float64)
    for i, move in enumerate(moves):
        value = move.raw_magnitude
        if value is None or not np.isfinite(value):
            value = cfg['fallback_offset'] + cfg['fallback_span'] * (i / count)
        raw[i] = value
    return raw


def normalize_dynamics(moves: Union[MoveSet, Iterable[Move]]) -> MoveSet:
    """Return a new MoveSet with dynamics in [0, 1]."""
    source = moves if isinstance(moves, MoveSet) else MoveSet(tuple(moves))
    detected_pos = [i for i, m in enumerate(source) if not m.is_start]
    if not detected_pos:
        return MoveSet(source.moves, metadata=dict(source.metadata))

    raw = raw_dynamics(source)[detected_pos]
    lo = float(raw.min())
    hi = float(raw.max())

    if hi - lo > 0:
        scaled = np.clip((raw - lo) / (hi - lo), 0.0, 1.0)
    else:
        scaled = np.full(len(raw), CONFIG['normalize']['flat_value'])

    updated = list(source.moves)
    for pos, value in zip(detected_pos, scaled):
        updated[pos] = replace(updated[pos], dynamics=float(value))
    for pos, move in enumerate(updated):
        if move.is_start and move.dynamics != 0.0:
            updated[pos] = replace(move, dynamics=0.0)

    return MoveSet(tuple(updated), metadata=dict(source.metadata))
