"""
Settings models for analysis and ring synthesis.

Usage:
    settings = VisualizerSettings(ring_count=40, organic_noise=0.5)
    spec = settings.ring_spec(3)

    tuned = settings.with_updates(opacity=0.6)   # validated copy
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


MoveTypePolicy = Literal['prominence', 'magnitude_bands']


class AnalyzerSettings(BaseModel):
    """Knobs for turning a session into moves."""
    model_config = ConfigDict(frozen=True)

    smoothing_window: int = Field(5, ge=1, description="Moving-average window (odd)")
    peak_threshold_factor: float = Field(
        0.5, description="Threshold = mean + std * factor"
    )
    min_peak_distance: int = Field(10, ge=1, description="Minimum index gap between peaks")
    speed_calculation_radius: int = Field(
        20, ge=1, description="Half-width of the speed-proxy window"
    )
    max_moves: int = Field(15, ge=1, description="Keep at most this many peaks")
    move_type_policy: MoveTypePolicy = Field(
        'prominence', description="Move type classification used for a whole pass"
    )

    @field_validator('smoothing_window')
    @classmethod
    def _window_is_odd(cls, value: int) -> int:
        if value % 2 == 0:
            raise ValueError(f"smoothing_window must be odd, got {value}")
        return value

    def with_updates(self, **changes) -> 'AnalyzerSettings':
        return type(self).model_validate({**self.model_dump(), **changes})


class VisualizerSettings(BaseModel):
    """Flat settings record for ring synthesis and animation."""
    model_config = ConfigDict(frozen=True)

    # Structural
    ring_count: int = Field(28, ge=1)
    base_radius: float = Field(2.5)
    ring_spacing: float = Field(0.0)
    curve_resolution: int = Field(240, ge=3)
    combined_size: float = Field(1.0)
    liquid_size: float = Field(1.0)
    dynamics_multiplier: float = Field(4.9)
    organic_noise: float = Field(0.02)
    depth_effect: float = Field(2.0)
    crux_emphasis: float = Field(8.0)

    # Material
    opacity: float = Field(1.0, ge=0.1, le=1.0)
    center_fade: float = Field(1.0, ge=0.0, le=1.0)
    line_opacity: float = Field(1.0, ge=0.0, le=1.0)
    segment_opacity: float = Field(0.25, ge=0.0, le=1.0)
    attempt_opacity: float = Field(0.55, ge=0.0, le=1.0)
    normal_color: int = Field(0x0CFFDB, ge=0, le=0xFFFFFF)
    crux_color: int = Field(0xDE501B, ge=0, le=0xFFFFFF)

    # Animation (per-frame only, never triggers rebuild)
    animation_enabled: bool = True
    liquid_effect: bool = True
    liquid_speed: float = Field(0.5, ge=0.0)

    def with_updates(self, **changes) -> 'VisualizerSettings':
        return type(self).model_validate({**self.model_dump(), **changes})

    def ring_spec(self, ring_index: int) -> 'RingSpec':
        return RingSpec(
            ring_index=ring_index,
            ring_count=self.ring_count,
            base_radius=self.base_radius,
            ring_spacing=self.ring_spacing,
            dynamics_multiplier=self.dynamics_multiplier,
            organic_noise=self.organic_noise,
            crux_emphasis=self.crux_emphasis,
            depth_effect=self.depth_effect,
            liquid_size=self.liquid_size,
            curve_resolution=self.curve_resolution,
            combined_size=self.combined_size,
        )


@dataclass(frozen=True)
class RingSpec:
    """Settings snapshot for synthesizing one ring."""
    ring_index: int
    ring_count: int
    base_radius: float
    ring_spacing: float
    dynamics_multiplier: float
    organic_noise: float
    crux_emphasis: float
    depth_effect: float
    liquid_size: float
    curve_resolution: int
    combined_size: float

    @property
    def ring_progress(self) -> float:
        return self.ring_index / self.ring_count


# Changing any of these discards every ring and resamples from scratch.
STRUCTURAL_KEYS = (
    'ring_count',
    'base_radius',
    'ring_spacing',
    'curve_resolution',
    'combined_size',
    'liquid_size',
    'dynamics_multiplier',
    'organic_noise',
    'depth_effect',
    'crux_emphasis',
)

# Changing only these rewrites colour/opacity of the existing rings.
MATERIAL_KEYS = (
    'opacity',
    'center_fade',
    'line_opacity',
    'segment_opacity',
    'attempt_opacity',
    'normal_color',
    'crux_color',
)
