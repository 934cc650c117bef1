"""Shared fixtures: synthetic sessions and hand-built move sets."""

import numpy as np
import pytest

from cruxring.analysis.moves import Move, MoveSet, MoveType
from cruxring.config import VisualizerSettings
from cruxring.ingest.session import Session


DT = 0.01


def _gaussian_bumps(n, centers, heights, sigma=8.0, floor=9.8, noise=0.1, seed=42):
    rng = np.random.default_rng(seed)
    idx = np.arange(n, dtype=np.float64)
    signal = floor + rng.uniform(-noise, noise, n)
    for center, height in zip(centers, heights):
        signal += (height - floor) * np.exp(-((idx - center) ** 2) / (2 * sigma ** 2))
    return signal


# ---------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------

@pytest.fixture
def flat_session():
    """100 samples of gravity only."""
    n = 100
    return Session.from_arrays(np.arange(n) * DT, np.full(n, 9.8))


@pytest.fixture
def three_bump_session():
    """Three well-separated bumps of 15, 30 and 12 m/s^2 on a 9.8 +/- 0.1 floor."""
    n = 2000
    magnitude = _gaussian_bumps(n, centers=[400, 1000, 1600], heights=[15.0, 30.0, 12.0])
    return Session.from_arrays(np.arange(n) * DT, magnitude)


@pytest.fixture
def noisy_session():
    """Busy signal with many candidate peaks."""
    rng = np.random.default_rng(7)
    n = 1500
    magnitude = 9.8 + np.abs(rng.normal(0, 4.0, n))
    return Session.from_arrays(np.arange(n) * DT, magnitude)


# ---------------------------------------------------------------------
# Move sets
# ---------------------------------------------------------------------

@pytest.fixture
def make_moveset():
    """Factory: MoveSet from dynamics (index 0 is the start move) and crux indices."""
    def _make(dynamics, crux=()):
        moves = []
        for i, d in enumerate(dynamics):
            moves.append(Move(
                sequence_index=i,
                time=float(i),
                raw_magnitude=float(d),
                dynamics=float(d),
                is_crux=i in crux,
                move_type=MoveType.START if i == 0 else MoveType.DYNAMIC,
            ))
        return MoveSet(tuple(moves))
    return _make


@pytest.fixture
def climb_moves(make_moveset):
    """Five moves, crux on move 3."""
    return make_moveset([0.0, 0.2, 0.5, 1.0, 0.7], crux=(3,))


# ---------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------

@pytest.fixture
def small_settings():
    """Few, coarse rings so synthesis tests stay fast."""
    return VisualizerSettings(ring_count=6, curve_resolution=60)


@pytest.fixture
def zeroed_settings():
    """Single ring with every deformation switched off."""
    return VisualizerSettings(
        ring_count=1,
        base_radius=1.0,
        dynamics_multiplier=0.0,
        organic_noise=0.0,
        crux_emphasis=0.0,
        liquid_size=0.0,
        depth_effect=0.0,
    )
