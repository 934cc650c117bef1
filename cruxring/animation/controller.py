"""
Ring update controller.

Decides how much work a new (moves, settings) pair needs:

    STRUCTURAL  new MoveSet, or a structural setting changed → rebuild all rings
    MATERIAL    only colour/opacity settings changed → recolour in place
    NONE        nothing relevant changed

Per-frame liquid motion is a pure function of a BaselineGeometry captured
at rebuild time, so repeated frames never accumulate drift.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from cruxring.analysis.moves import MoveSet
from cruxring.config import CONFIG, MATERIAL_KEYS, STRUCTURAL_KEYS, VisualizerSettings
from cruxring.geometry.rings import RingSet, synthesize_rings, update_materials

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    NONE = "none"
    MATERIAL = "material"
    STRUCTURAL = "structural"

    def __str__(self) -> str:
        return self.value


def classify_change(
    old: Optional[VisualizerSettings],
    new: VisualizerSettings,
) -> ChangeKind:
    """Structural wins over material; animation-only changes are NONE."""
    if old is None:
        return ChangeKind.STRUCTURAL
    if any(getattr(old, key) != getattr(new, key) for key in STRUCTURAL_KEYS):
        return ChangeKind.STRUCTURAL
    if any(getattr(old, key) != getattr(new, key) for key in MATERIAL_KEYS):
        return ChangeKind.MATERIAL
    return ChangeKind.NONE


@dataclass(frozen=True, eq=False)
class BaselineGeometry:
    """
    Vertex positions of every ring as built, plus their polar decomposition.

    All arrays are read-only; perturb() reads them and returns new arrays.
    """
    ring_indices: Tuple[int, ...]
    ring_count: int
    positions: Tuple[np.ndarray, ...]    # (n, 3) per ring
    radii: Tuple[np.ndarray, ...]        # in-plane radius per vertex
    directions: Tuple[np.ndarray, ...]   # (n, 2) unit (cos, sin) per vertex

    @classmethod
    def capture(cls, ring_set: RingSet) -> 'BaselineGeometry':
        positions, radii, directions = [], [], []
        for ring in ring_set.rings:
            pos = ring.positions
            n = len(pos)
            r = np.hypot(pos[:, 0], pos[:, 1])

            # Vertices at the origin take their index angle as direction.
            theta = np.arange(n) / n * 2 * math.pi
            safe = np.where(r > 0, r, 1.0)
            cos = np.where(r > 0, pos[:, 0] / safe, np.cos(theta))
            sin = np.where(r > 0, pos[:, 1] / safe, np.sin(theta))
            direction = np.column_stack([cos, sin])

            r.setflags(write=False)
            direction.setflags(write=False)
            positions.append(pos)
            radii.append(r)
            directions.append(direction)

        return cls(
            ring_indices=tuple(ring.ring_index for ring in ring_set.rings),
            ring_count=ring_set.ring_count,
            positions=tuple(positions),
            radii=tuple(radii),
            directions=tuple(directions),
        )

    def __len__(self) -> int:
        return len(self.positions)


def perturb(
    baseline: BaselineGeometry,
    t: float,
    settings: VisualizerSettings,
) -> Tuple[np.ndarray, ...]:
    """
    Displaced vertex positions at wall-clock time `t`.

    Returns one (n, 3) array per ring, same order and point count as the
    baseline. With animation or the liquid effect switched off the
    baseline arrays themselves are returned.
    """
    if not (settings.animation_enabled and settings.liquid_effect):
        return baseline.positions

    cfg = CONFIG['perturbation']
    phase = t * settings.liquid_speed if settings.liquid_speed > 0 else 0.0

    displaced = []
    for ring_index, pos, r0, direction in zip(
        baseline.ring_indices, baseline.positions, baseline.radii, baseline.directions
    ):
        n = len(pos)
        progress = ring_index / baseline.ring_count
        theta = np.arange(n) / n * 2 * math.pi

        radius = r0 + (
            np.sin(theta * cfg['radial_harmonic'] + phase * cfg['radial_time_gain'])
            * settings.organic_noise * progress * cfg['radial_amplitude']
        )
        z = pos[:, 2] + (
            np.sin(theta * cfg['depth_harmonic'] + phase)
            * settings.depth_effect * progress * cfg['depth_amplitude']
        )
        displaced.append(np.column_stack([direction[:, 0] * radius, direction[:, 1] * radius, z]))
    return tuple(displaced)


class RingController:
    """
    Owns the current MoveSet, settings, RingSet and baseline.

    Single-threaded: callers debounce settings changes and call update()
    at most once per frame, then frame(t) every frame.
    """

    def __init__(self, settings: Optional[VisualizerSettings] = None):
        self.settings: Optional[VisualizerSettings] = None
        self.moves: Optional[MoveSet] = None
        self.ring_set: Optional[RingSet] = None
        self.baseline: Optional[BaselineGeometry] = None
        self._initial_settings = settings or VisualizerSettings()
        self.rebuild_count = 0
        self.material_update_count = 0

    def update(self, moves: MoveSet, settings: Optional[VisualizerSettings] = None) -> ChangeKind:
        """
        Apply a new MoveSet and/or settings.

        Returns the kind of work performed.
        """
        if settings is None:
            settings = self.settings or self._initial_settings

        if moves is not self.moves:
            kind = ChangeKind.STRUCTURAL
        else:
            kind = classify_change(self.settings, settings)
        logger.debug("update classified as %s", kind)

        if kind is ChangeKind.STRUCTURAL:
            self.rebuild(moves, settings)
        elif kind is ChangeKind.MATERIAL:
            self.ring_set = update_materials(self.ring_set, moves, settings)
            self.material_update_count += 1
        self.settings = settings
        return kind

    def rebuild(self, moves: MoveSet, settings: VisualizerSettings) -> RingSet:
        """Discard every ring and synthesize from scratch."""
        self.moves = moves
        self.settings = settings
        self.ring_set = synthesize_rings(moves, settings)
        self.baseline = BaselineGeometry.capture(self.ring_set)
        self.rebuild_count += 1
        return self.ring_set

    def frame(self, t: float) -> Tuple[np.ndarray, ...]:
        """Vertex positions to render at time `t`."""
        if self.baseline is None:
            return ()
        return perturb(self.baseline, t, self.settings)
