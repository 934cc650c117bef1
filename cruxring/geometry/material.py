"""
Ring colour and opacity.

Vertex colour blends from the normal colour to the crux colour within a
normalized distance of 0.12 of each crux move (linear falloff, hard
cutoff). Ring opacity dims toward the outside and fades toward the
centre, never below 0.1.
"""

from typing import Sequence, Tuple

import numpy as np

from cruxring.analysis.moves import Move
from cruxring.config import CONFIG


def hex_to_rgb(color: int) -> Tuple[float, float, float]:
    """0xRRGGBB → (r, g, b) floats in [0, 1]."""
    return (
        ((color >> 16) & 0xFF) / 255.0,
        ((color >> 8) & 0xFF) / 255.0,
        (color & 0xFF) / 255.0,
    )


def crux_influence(positions: np.ndarray, moves: Sequence[Move]) -> np.ndarray:
    """Per-position crux weight in [0, 1]; 0 beyond the fade range of every crux."""
    fade = CONFIG['material']['crux_fade_range']
    t = np.asarray(positions, dtype=np.float64)
    influence = np.zeros_like(t)
    count = len(moves)

    for k, move in enumerate(moves):
        if not move.is_crux:
            continue
        dist = np.abs(t - k / count)
        dist = np.minimum(dist, 1.0 - dist)
        influence = np.maximum(influence, np.where(dist < fade, 1.0 - dist / fade, 0.0))
    return influence


def vertex_colors(
    positions: np.ndarray,
    moves: Sequence[Move],
    normal_color: int,
    crux_color: int,
) -> np.ndarray:
    """(n, 3) float RGB per vertex."""
    weight = crux_influence(positions, moves)[:, None]
    normal = np.array(hex_to_rgb(normal_color))
    crux = np.array(hex_to_rgb(crux_color))
    return normal + (crux - normal) * weight


def ring_opacity(
    ring_index: int,
    ring_count: int,
    opacity: float,
    center_fade: float,
) -> float:
    cfg = CONFIG['material']
    progress = ring_index / ring_count
    value = opacity * (1 - progress * cfg['outer_dimming'])
    value *= 1 - center_fade * (1 - progress) ** cfg['center_fade_exponent']
    return float(max(cfg['min_opacity'], value))
