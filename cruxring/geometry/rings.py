"""
Ring Synthesis
==============
MoveSet + VisualizerSettings → RingSet.

Each ring is built independently:

    synthesize_ring_points → resample_closed → vertex_colors / ring_opacity

A ring that cannot be built (GeometryError) is logged and skipped; the
rest are still produced and the skip is counted in RingSet.failed.
A MoveSet with fewer than 2 moves yields an empty RingSet flagged
insufficient_data.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

import numpy as np

from cruxring.analysis.moves import MoveSet
from cruxring.config import VisualizerSettings
from cruxring.config.settings import RingSpec
from cruxring.errors import GeometryError
from cruxring.geometry.curve import resample_closed
from cruxring.geometry.material import ring_opacity, vertex_colors
from cruxring.geometry.radius import synthesize_ring_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class RingGeometry:
    """One closed polyline with per-vertex colour and a ring opacity."""
    ring_index: int
    positions: np.ndarray        # (curve_resolution, 3), read-only
    colors: np.ndarray           # (curve_resolution, 3), RGB in [0, 1]
    opacity: float
    parameters: np.ndarray       # normalized position of each vertex, [0, 1)

    def __post_init__(self):
        for name in ('positions', 'colors', 'parameters'):
            arr = np.asarray(getattr(self, name), dtype=np.float64)
            if arr.flags.writeable:
                arr = arr.copy()
                arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    def __len__(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class RingSet:
    rings: Tuple[RingGeometry, ...] = ()
    failed: Tuple[int, ...] = ()        # ring indices skipped on GeometryError
    ring_count: int = 0
    move_count: int = 0
    insufficient_data: bool = False
    metadata: dict = field(default_factory=dict, compare=False)

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self):
        return iter(self.rings)

    def __getitem__(self, index) -> RingGeometry:
        return self.rings[index]

    @property
    def successful(self) -> int:
        return len(self.rings)

    @property
    def indices(self) -> list:
        return [r.ring_index for r in self.rings]

    def ring(self, ring_index: int) -> Optional[RingGeometry]:
        """Ring by ring index, None if it was skipped."""
        for r in self.rings:
            if r.ring_index == ring_index:
                return r
        return None


def build_ring(
    moves: MoveSet,
    spec: RingSpec,
    settings: VisualizerSettings,
) -> RingGeometry:
    """
    Build a single ring.

    Raises:
        GeometryError: degenerate ring (bad radius, too few finite points,
        non-finite spline output).
    """
    control, knots = synthesize_ring_points(moves.moves, spec)
    try:
        positions, params = resample_closed(control, spec.curve_resolution, knots)
    except GeometryError as e:
        raise GeometryError(f"ring {spec.ring_index}: {e}", ring_index=spec.ring_index) from e

    return RingGeometry(
        ring_index=spec.ring_index,
        positions=positions,
        colors=vertex_colors(params, moves.moves, settings.normal_color, settings.crux_color),
        opacity=ring_opacity(spec.ring_index, spec.ring_count, settings.opacity, settings.center_fade),
        parameters=params,
    )


def synthesize_rings(moves: MoveSet, settings: Optional[VisualizerSettings] = None) -> RingSet:
    """
    Build every ring 0..ring_count-1.

    Args:
        moves: Normalized MoveSet (start move included).
        settings: Visualizer settings. Defaults to VisualizerSettings().

    Returns:
        RingSet with the successfully built rings in ring-index order.
    """
    settings = settings or VisualizerSettings()

    if not moves.can_synthesize:
        logger.warning(
            "insufficient data: %d move(s), need at least 2 for ring synthesis",
            len(moves),
        )
        return RingSet(
            ring_count=settings.ring_count,
            move_count=len(moves),
            insufficient_data=True,
        )

    rings = []
    failed = []
    for ring_index in range(settings.ring_count):
        try:
            rings.append(build_ring(moves, settings.ring_spec(ring_index), settings))
        except GeometryError as e:
            logger.warning("skipping ring %d: %s", ring_index, e)
            failed.append(ring_index)

    logger.info(
        "synthesized %d of %d rings for %d moves (%d failed)",
        len(rings), settings.ring_count, len(moves), len(failed),
    )
    return RingSet(
        rings=tuple(rings),
        failed=tuple(failed),
        ring_count=settings.ring_count,
        move_count=len(moves),
    )


def update_materials(
    ring_set: RingSet,
    moves: MoveSet,
    settings: VisualizerSettings,
) -> RingSet:
    """
    Recolour an existing RingSet without resampling.

    Vertex positions are shared with the input set, not copied.
    """
    rings = tuple(
        replace(
            ring,
            colors=vertex_colors(ring.parameters, moves.moves, settings.normal_color, settings.crux_color),
            opacity=ring_opacity(ring.ring_index, ring_set.ring_count, settings.opacity, settings.center_fade),
        )
        for ring in ring_set.rings
    )
    return replace(ring_set, rings=rings)
