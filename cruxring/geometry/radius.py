"""
Ring radius synthesis.

One ring = one closed loop of control points around the origin. The
radius at each angular sample grows with the interpolated move dynamics
at that angle, scaled harder on outer rings:

    ring_progress = ring_index / ring_count
    radius = base_ring_radius + dynamics_effect * ring_progress^0.6
             + organic noise + crux boost + liquid wave
    z      = three depth harmonics + dynamics-linked tilt

Ring 0 has ring_progress 0 and stays an undeformed circle.

Control points only; curve.resample_closed() turns them into the final
polyline.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from cruxring.analysis.moves import Move
from cruxring.config import CONFIG, RingSpec
from cruxring.errors import GeometryError


def detail_level(move_count: int) -> int:
    """Control points per ring: 4 per move, clamped to [8, 32]."""
    cfg = CONFIG['radius']
    return int(min(max(move_count * cfg['detail_per_move'], cfg['detail_min']), cfg['detail_max']))


def base_ring_radius(spec: RingSpec) -> float:
    """
    Undeformed radius of a ring.

    Raises GeometryError when the result is non-positive or non-finite.
    """
    eps = CONFIG['radius']['ring_spacing_epsilon']
    radius = (spec.base_radius + spec.ring_index * (spec.ring_spacing + eps)) * spec.combined_size
    if not math.isfinite(radius) or radius <= 0:
        raise GeometryError(
            f"ring {spec.ring_index}: base radius {radius} is not positive",
            ring_index=spec.ring_index,
        )
    return radius


def enhance_dynamics(dynamics: np.ndarray) -> np.ndarray:
    """
    Three-segment response curve: flat below 0.3, linear to 0.6, steep above.

    Continuous at both joins (0.03 at 0.3, 0.48 at 0.6).
    """
    cfg = CONFIG['radius']['enhancement']
    d = np.asarray(dynamics, dtype=np.float64)

    low = d * cfg['low_gain']
    mid = cfg['mid_offset'] + (d - cfg['low_cutoff']) * cfg['mid_gain']
    high = cfg['high_offset'] + np.power(np.maximum(d - cfg['mid_cutoff'], 0.0), cfg['high_exponent']) * cfg['high_gain']

    return np.where(d < cfg['low_cutoff'], low, np.where(d < cfg['mid_cutoff'], mid, high))


def interpolate_dynamics(dynamics: Sequence[float], positions: np.ndarray) -> np.ndarray:
    """
    Dynamics at normalized positions t in [0, 1).

    Move k sits at t = k / move_count; between moves the value is a linear
    blend, and the last move blends back into move 0.
    """
    d = np.asarray(dynamics, dtype=np.float64)
    count = len(d)
    scaled = np.asarray(positions, dtype=np.float64) * count
    lower = np.floor(scaled).astype(int)
    frac = scaled - lower
    current = d[lower % count]
    following = d[(lower + 1) % count]
    return current + (following - current) * frac


def crux_boost(
    positions: np.ndarray,
    moves: Sequence[Move],
    crux_emphasis: float,
) -> np.ndarray:
    """Max over crux moves of dynamics * emphasis * 0.3 * exp(-15 * circular distance)."""
    cfg = CONFIG['radius']['crux']
    t = np.asarray(positions, dtype=np.float64)
    boost = np.zeros_like(t)
    count = len(moves)

    for k, move in enumerate(moves):
        if not move.is_crux:
            continue
        dist = np.abs(t - k / count)
        dist = np.minimum(dist, 1.0 - dist)
        strength = np.exp(-dist * cfg['falloff_rate'])
        boost = np.maximum(boost, move.dynamics * crux_emphasis * cfg['gain'] * strength)
    return boost


def organic_noise(positions: np.ndarray) -> np.ndarray:
    """Fixed high-frequency ripple, unscaled."""
    cfg = CONFIG['radius']['noise']
    t = np.asarray(positions, dtype=np.float64)
    ripple = np.zeros_like(t)
    for freq, weight in zip(cfg['frequencies'], cfg['weights']):
        ripple += np.sin(t * math.pi * freq) * weight
    return ripple


def liquid_wave(positions: np.ndarray, ring_index: int, liquid_size: float) -> np.ndarray:
    """Two-term standing wave; liquid_size sets the wave frequency."""
    cfg = CONFIG['radius']['liquid']
    t = np.asarray(positions, dtype=np.float64)
    freq = cfg['base_frequency'] * liquid_size
    amp = cfg['amplitude']
    primary = np.sin(t * math.pi * freq + ring_index * cfg['primary_phase_per_ring']) * amp
    secondary = np.cos(
        t * math.pi * freq * cfg['secondary_ratio'] + ring_index * cfg['secondary_phase_per_ring']
    ) * amp * cfg['secondary_amplitude_ratio']
    return primary + secondary


def depth_profile(
    positions: np.ndarray,
    dynamics: np.ndarray,
    ring_index: int,
    depth_effect: float,
    ring_progress: float,
) -> np.ndarray:
    cfg = CONFIG['radius']['depth']
    t = np.asarray(positions, dtype=np.float64)
    scale = depth_effect * ring_progress

    z = np.zeros_like(t)
    for harmonic, (weight, phase) in enumerate(zip(cfg['weights'], cfg['phase_per_ring']), start=1):
        wave = np.sin if harmonic < 3 else np.cos
        z += wave(t * math.pi * 2 * harmonic + ring_index * phase) * weight * scale
    z += (np.asarray(dynamics) - 0.5) * cfg['dynamics_gain'] * scale
    return z


def synthesize_ring_points(
    moves: Sequence[Move],
    spec: RingSpec,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Control points for one ring.

    Parameters
    ----------
    moves : sequence of Move
        Full move list including the start move (at least 2).
    spec : RingSpec
        Settings snapshot for this ring.

    Returns
    -------
    (points, positions)
        points : (k, 3) array of finite x, y, z control points
        positions : (k,) normalized position t of each kept point

    Raises
    ------
    GeometryError
        Non-positive base radius, or fewer than 3 finite points.
    """
    cfg = CONFIG['radius']
    move_count = len(moves)
    base = base_ring_radius(spec)
    progress = spec.ring_progress
    progress_scale = progress ** cfg['progress_exponent']

    n = detail_level(move_count)
    t = np.arange(n, dtype=np.float64) / n
    angle = t * 2 * math.pi + math.pi / 2

    dynamics = np.clip(interpolate_dynamics([m.dynamics for m in moves], t), 0.0, 1.0)
    enhanced = enhance_dynamics(dynamics) * (1 + progress * cfg['outer_gain'])
    dynamics_effect = enhanced * spec.dynamics_multiplier

    radius = base + dynamics_effect * progress_scale
    if spec.organic_noise > 0:
        radius = radius + (
            organic_noise(t) * dynamics_effect * progress_scale
            * spec.organic_noise * cfg['noise']['gain']
        )
    radius = radius + crux_boost(t, moves, spec.crux_emphasis) * progress
    radius = radius + liquid_wave(t, spec.ring_index, spec.liquid_size) * dynamics_effect * progress_scale

    x = np.cos(angle) * radius
    y = np.sin(angle) * radius
    z = depth_profile(t, dynamics, spec.ring_index, spec.depth_effect, progress)

    points = np.column_stack([x, y, z])
    finite = np.isfinite(points).all(axis=1)
    if finite.sum() < 3:
        raise GeometryError(
            f"ring {spec.ring_index}: {int(finite.sum())} finite points, need 3",
            ring_index=spec.ring_index,
        )
    return points[finite], t[finite]
