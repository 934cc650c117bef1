"""Tests for ring set synthesis and material updates."""

import numpy as np
import pytest

from cruxring.analysis.moves import Move, MoveSet
from cruxring.config import VisualizerSettings
from cruxring.errors import GeometryError
from cruxring.geometry import build_ring, synthesize_rings, update_materials


class TestSynthesizeRings:

    def test_zeroed_modifiers_give_circle(self, make_moveset, zeroed_settings):
        """All modifiers off, equal dynamics: a circle of base radius."""
        moves = make_moveset([0.5, 0.5, 0.5, 0.5])
        rings = synthesize_rings(moves, zeroed_settings)
        assert rings.successful == 1
        pos = rings[0].positions
        assert pos.shape == (zeroed_settings.curve_resolution, 3)
        radius = np.hypot(pos[:, 0], pos[:, 1])
        assert np.max(np.abs(radius - 1.0)) < 1e-3
        assert np.max(np.abs(pos[:, 2])) < 1e-9

    def test_all_rings_built(self, climb_moves, small_settings):
        rings = synthesize_rings(climb_moves, small_settings)
        assert rings.successful == 6
        assert rings.failed == ()
        assert rings.indices == list(range(6))
        assert rings.move_count == 5
        for ring in rings:
            assert len(ring) == 60
            assert ring.colors.shape == (60, 3)
            assert np.isfinite(ring.positions).all()

    def test_deterministic(self, climb_moves, small_settings):
        a = synthesize_rings(climb_moves, small_settings)
        b = synthesize_rings(climb_moves, small_settings)
        for ra, rb in zip(a, b):
            np.testing.assert_array_equal(ra.positions, rb.positions)
            np.testing.assert_array_equal(ra.colors, rb.colors)
            assert ra.opacity == rb.opacity

    def test_opacity_bounds(self, climb_moves):
        settings = VisualizerSettings(opacity=0.7, center_fade=0.4, curve_resolution=30)
        rings = synthesize_rings(climb_moves, settings)
        assert all(0.1 <= r.opacity <= 0.7 for r in rings)

    def test_crux_region_coloured(self, climb_moves, small_settings):
        ring = synthesize_rings(climb_moves, small_settings)[3]
        crux_vertex = int(round(3 / 5 * 60))
        np.testing.assert_allclose(ring.colors[crux_vertex], [0xDE / 255, 0x50 / 255, 0x1B / 255])
        np.testing.assert_allclose(ring.colors[0], [0x0C / 255, 1.0, 0xDB / 255])

    def test_positions_read_only(self, climb_moves, small_settings):
        ring = synthesize_rings(climb_moves, small_settings)[1]
        with pytest.raises(ValueError):
            ring.positions[0, 0] = 99.0


class TestInsufficientAndFailures:

    def test_start_move_only(self, small_settings):
        rings = synthesize_rings(MoveSet((Move.start(),)), small_settings)
        assert rings.insufficient_data
        assert len(rings) == 0
        assert rings.move_count == 1

    def test_bad_rings_skipped_and_counted(self, climb_moves):
        """Rings with a non-positive base radius are skipped; the rest are built."""
        settings = VisualizerSettings(base_radius=-0.0105, curve_resolution=30)
        rings = synthesize_rings(climb_moves, settings)
        assert rings.failed == tuple(range(11))
        assert rings.successful == 17
        assert rings.ring(5) is None
        assert rings.ring(11).ring_index == 11

    def test_build_ring_raises(self, climb_moves):
        settings = VisualizerSettings(base_radius=-1.0)
        with pytest.raises(GeometryError) as exc:
            build_ring(climb_moves, settings.ring_spec(2), settings)
        assert exc.value.ring_index == 2


class TestUpdateMaterials:

    def test_recolour_keeps_positions(self, climb_moves, small_settings):
        rings = synthesize_rings(climb_moves, small_settings)
        tuned = small_settings.with_updates(opacity=0.5, crux_color=0xFFFFFF)
        updated = update_materials(rings, climb_moves, tuned)

        assert updated is not rings
        for before, after in zip(rings, updated):
            assert after.positions is before.positions
            assert after.opacity <= 0.5
        crux_vertex = int(round(3 / 5 * 60))
        np.testing.assert_allclose(updated[3].colors[crux_vertex], [1.0, 1.0, 1.0])

    def test_original_untouched(self, climb_moves, small_settings):
        rings = synthesize_rings(climb_moves, small_settings)
        opacities = [r.opacity for r in rings]
        update_materials(rings, climb_moves, small_settings.with_updates(opacity=0.2))
        assert [r.opacity for r in rings] == opacities
