"""cruxring configuration module."""

from .thresholds import CONFIG, get_threshold
from .settings import (
    AnalyzerSettings,
    VisualizerSettings,
    RingSpec,
    MoveTypePolicy,
    STRUCTURAL_KEYS,
    MATERIAL_KEYS,
)

__all__ = [
    # Thresholds
    "CONFIG",
    "get_threshold",
    # Settings
    "AnalyzerSettings",
    "VisualizerSettings",
    "RingSpec",
    "MoveTypePolicy",
    "STRUCTURAL_KEYS",
    "MATERIAL_KEYS",
]
