"""
Ring geometry: MoveSet → closed 3D curves.

- radius    control points per ring (dynamics, noise, crux boost, liquid, depth)
- curve     periodic cubic spline resampling
- material  vertex colour and ring opacity
- rings     RingGeometry / RingSet, synthesize_rings, update_materials
"""

from cruxring.geometry.radius import (
    base_ring_radius,
    crux_boost,
    detail_level,
    enhance_dynamics,
    interpolate_dynamics,
    synthesize_ring_points,
)
from cruxring.geometry.curve import resample_closed
from cruxring.geometry.material import (
    crux_influence,
    hex_to_rgb,
    ring_opacity,
    vertex_colors,
)
from cruxring.geometry.rings import (
    RingGeometry,
    RingSet,
    build_ring,
    synthesize_rings,
    update_materials,
)

__all__ = [
    'base_ring_radius',
    'crux_boost',
    'detail_level',
    'enhance_dynamics',
    'interpolate_dynamics',
    'synthesize_ring_points',
    'resample_closed',
    'crux_influence',
    'hex_to_rgb',
    'ring_opacity',
    'vertex_colors',
    'RingGeometry',
    'RingSet',
    'build_ring',
    'synthesize_rings',
    'update_materials',
]
