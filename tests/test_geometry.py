"""Tests for ring radius synthesis, curve resampling and materials."""

import math

import numpy as np
import pytest

from cruxring.analysis.moves import Move, MoveType
from cruxring.config import VisualizerSettings
from cruxring.errors import GeometryError
from cruxring.geometry import (
    base_ring_radius,
    crux_boost,
    crux_influence,
    detail_level,
    enhance_dynamics,
    hex_to_rgb,
    interpolate_dynamics,
    resample_closed,
    ring_opacity,
    synthesize_ring_points,
    vertex_colors,
)


def _nan_move(seq):
    return Move(
        sequence_index=seq, time=float(seq), raw_magnitude=None,
        dynamics=float('nan'), is_crux=False, move_type=MoveType.STATIC,
    )


# ---------------------------------------------------------------------
# Radius terms
# ---------------------------------------------------------------------

class TestDetailLevel:

    @pytest.mark.parametrize("moves,expected", [(1, 8), (2, 8), (3, 12), (5, 20), (8, 32), (20, 32)])
    def test_clamped(self, moves, expected):
        assert detail_level(moves) == expected


class TestEnhancement:

    def test_segments(self):
        out = enhance_dynamics(np.array([0.2, 0.45, 0.6, 1.0]))
        np.testing.assert_allclose(out, [0.02, 0.255, 0.48, 0.48 + 0.4 ** 2.5 * 8.0])

    def test_continuous_at_joins(self):
        eps = 1e-9
        for join in (0.3, 0.6):
            lo, hi = enhance_dynamics(np.array([join - eps, join]))
            assert hi == pytest.approx(lo, abs=1e-6)

    def test_monotonic(self):
        d = np.linspace(0, 1, 101)
        assert np.all(np.diff(enhance_dynamics(d)) >= 0)


class TestInterpolation:

    def test_lerp_and_wrap(self):
        out = interpolate_dynamics([0.0, 1.0], np.array([0.0, 0.25, 0.5, 0.75]))
        np.testing.assert_allclose(out, [0.0, 0.5, 1.0, 0.5])

    def test_exact_at_move_positions(self):
        d = [0.0, 0.2, 0.9, 0.4]
        out = interpolate_dynamics(d, np.arange(4) / 4)
        np.testing.assert_allclose(out, d)


class TestCruxBoost:

    def test_peak_at_crux_position(self, climb_moves):
        t = np.array([3 / 5])
        assert crux_boost(t, climb_moves.moves, crux_emphasis=8.0)[0] == pytest.approx(1.0 * 8.0 * 0.3)

    def test_falls_off_with_distance(self, climb_moves):
        t = np.array([0.6, 0.65, 0.8])
        boost = crux_boost(t, climb_moves.moves, crux_emphasis=8.0)
        assert boost[0] > boost[1] > boost[2] > 0

    def test_no_crux_no_boost(self, make_moveset):
        moves = make_moveset([0.0, 0.5, 1.0])
        assert np.all(crux_boost(np.linspace(0, 1, 10), moves.moves, 8.0) == 0)


class TestBaseRadius:

    def test_formula(self):
        spec = VisualizerSettings(base_radius=2.0, ring_spacing=0.1, combined_size=1.5).ring_spec(4)
        assert base_ring_radius(spec) == pytest.approx((2.0 + 4 * 0.101) * 1.5)

    def test_monotonic_in_ring_index(self):
        settings = VisualizerSettings(ring_spacing=0.05)
        radii = [base_ring_radius(settings.ring_spec(i)) for i in range(settings.ring_count)]
        assert all(b >= a for a, b in zip(radii, radii[1:]))

    @pytest.mark.parametrize("base_radius,combined_size", [(-1.0, 1.0), (1.0, 0.0), (float('inf'), 1.0)])
    def test_degenerate_rejected(self, base_radius, combined_size):
        spec = VisualizerSettings(base_radius=base_radius, combined_size=combined_size).ring_spec(0)
        with pytest.raises(GeometryError):
            base_ring_radius(spec)


class TestRingPoints:

    def test_inner_ring_is_circle(self, climb_moves):
        """Ring 0 has zero progress, so no dynamics deformation."""
        spec = VisualizerSettings(base_radius=2.5).ring_spec(0)
        points, t = synthesize_ring_points(climb_moves.moves, spec)
        assert points.shape == (20, 3)
        np.testing.assert_allclose(np.hypot(points[:, 0], points[:, 1]), 2.5)
        np.testing.assert_allclose(points[:, 2], 0.0, atol=1e-12)

    def test_first_point_at_twelve_oclock(self, climb_moves):
        spec = VisualizerSettings(base_radius=2.5).ring_spec(0)
        points, _ = synthesize_ring_points(climb_moves.moves, spec)
        assert points[0, 0] == pytest.approx(0.0, abs=1e-12)
        assert points[0, 1] == pytest.approx(2.5)

    def test_outer_rings_deform(self, climb_moves):
        settings = VisualizerSettings()
        points, _ = synthesize_ring_points(climb_moves.moves, settings.ring_spec(20))
        r = np.hypot(points[:, 0], points[:, 1])
        assert r.max() - r.min() > 0.1

    def test_non_finite_points_dropped(self, make_moveset):
        base = make_moveset([0.0, 0.3, 0.5, 0.8, 0.2])
        moves = list(base.moves)
        moves[2] = _nan_move(2)
        spec = VisualizerSettings().ring_spec(5)
        points, t = synthesize_ring_points(moves, spec)
        assert len(points) == 12
        assert np.isfinite(points).all()
        assert len(t) == len(points)

    def test_too_few_points(self):
        moves = [_nan_move(0), _nan_move(1)]
        with pytest.raises(GeometryError):
            synthesize_ring_points(moves, VisualizerSettings().ring_spec(3))


# ---------------------------------------------------------------------
# Curve
# ---------------------------------------------------------------------

class TestResampleClosed:

    def test_passes_through_control_points(self):
        square = np.array([[1.0, 0, 0], [0, 1.0, 0], [-1.0, 0, 0], [0, -1.0, 0]])
        samples, u = resample_closed(square, 8)
        assert samples.shape == (8, 3)
        np.testing.assert_allclose(samples[::2], square, atol=1e-12)
        np.testing.assert_allclose(u, np.arange(8) / 8)

    def test_circle_accuracy(self):
        theta = np.arange(16) / 16 * 2 * math.pi
        circle = np.column_stack([np.cos(theta), np.sin(theta), np.zeros(16)])
        samples, _ = resample_closed(circle, 240)
        r = np.hypot(samples[:, 0], samples[:, 1])
        assert np.max(np.abs(r - 1.0)) < 1e-3

    def test_too_few_points(self):
        with pytest.raises(GeometryError):
            resample_closed(np.zeros((2, 3)), 10)

    def test_non_finite_input(self):
        pts = np.array([[1.0, 0, 0], [0, np.nan, 0], [-1.0, 0, 0]])
        with pytest.raises(GeometryError):
            resample_closed(pts, 12)


# ---------------------------------------------------------------------
# Material
# ---------------------------------------------------------------------

class TestMaterial:

    def test_hex_to_rgb(self):
        assert hex_to_rgb(0xFF0000) == (1.0, 0.0, 0.0)
        assert hex_to_rgb(0x0000FF) == (0.0, 0.0, 1.0)

    def test_crux_influence_linear_cutoff(self, climb_moves):
        t = np.array([0.6, 0.66, 0.72, 0.9])
        np.testing.assert_allclose(crux_influence(t, climb_moves.moves), [1.0, 0.5, 0.0, 0.0], atol=1e-12)

    def test_vertex_colors_blend(self, climb_moves):
        colors = vertex_colors(np.array([0.6, 0.0]), climb_moves.moves, 0x000000, 0xFFFFFF)
        np.testing.assert_allclose(colors[0], [1.0, 1.0, 1.0])
        np.testing.assert_allclose(colors[1], [0.0, 0.0, 0.0])

    def test_opacity_formula(self):
        expected = 0.8 * (1 - 0.5 * 0.3) * (1 - 0.5 * 0.5 ** 2.5)
        assert ring_opacity(14, 28, opacity=0.8, center_fade=0.5) == pytest.approx(expected)

    def test_opacity_floor(self):
        assert ring_opacity(0, 28, opacity=1.0, center_fade=1.0) == pytest.approx(0.1)

    def test_opacity_bounds(self):
        for opacity in (0.1, 0.5, 1.0):
            for fade in (0.0, 0.5, 1.0):
                values = [ring_opacity(i, 28, opacity, fade) for i in range(28)]
                assert all(0.1 <= v <= opacity + 1e-12 for v in values)
