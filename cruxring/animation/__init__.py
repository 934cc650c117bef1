"""Rebuild/recolour decisions and per-frame liquid motion."""

from cruxring.animation.controller import (
    BaselineGeometry,
    ChangeKind,
    RingController,
    classify_change,
    perturb,
)

__all__ = [
    'BaselineGeometry',
    'ChangeKind',
    'RingController',
    'classify_change',
    'perturb',
]
