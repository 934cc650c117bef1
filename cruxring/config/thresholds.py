"""
Threshold Configuration
=======================
Every numeric constant used by move analysis and ring synthesis.
Single source of truth. Settings models hold what a user tunes;
this tree holds what the algorithms are built around.

Usage:
    from cruxring.config import CONFIG, get_threshold
    ratio = CONFIG['crux']['mean_ratio']
    ratio = get_threshold('crux.mean_ratio')
"""

CONFIG = {

    # =================================================================
    # Peak Detection
    # =================================================================
    'peaks': {
        'min_samples': 3,
    },

    # =================================================================
    # Crux Classification
    # =================================================================
    'crux': {
        'mean_ratio': 1.2,          # peak accel > mean peak accel * ratio
    },

    # =================================================================
    # Move Type Classification
    # =================================================================
    'move_type': {
        'prominence': {
            'dynamic_acceleration': 12.0,
            'dynamic_prominence': 2.0,
            'fallback_acceleration': 10.0,
        },
        'magnitude_bands': {
            'dyno': 30.0,
            'dynamic': 20.0,
            'powerful': 15.0,
        },
    },

    # =================================================================
    # Dynamics Normalization
    # =================================================================
    'normalize': {
        'fallback_offset': 0.3,
        'fallback_span': 0.4,
        'flat_value': 0.5,
    },

    # =================================================================
    # Ring Radius Synthesis
    # =================================================================
    'radius': {
        'detail_per_move': 4,
        'detail_min': 8,
        'detail_max': 32,
        'ring_spacing_epsilon': 0.001,
        'progress_exponent': 0.6,
        'outer_gain': 1.2,
        'enhancement': {
            'low_cutoff': 0.3,
            'low_gain': 0.1,
            'mid_cutoff': 0.6,
            'mid_offset': 0.03,
            'mid_gain': 1.5,
            'high_offset': 0.48,
            'high_exponent': 2.5,
            'high_gain': 8.0,
        },
        'noise': {
            'frequencies': (200.0, 400.0, 800.0, 1600.0),
            'weights': (0.005, 0.003, 0.002, 0.001),
            'gain': 10.0,
        },
        'crux': {
            'falloff_rate': 15.0,
            'gain': 0.3,
        },
        'liquid': {
            'base_frequency': 20.0,
            'secondary_ratio': 0.75,
            'amplitude': 0.05,
            'secondary_amplitude_ratio': 0.6,
            'primary_phase_per_ring': 0.5,
            'secondary_phase_per_ring': 0.3,
        },
        'depth': {
            'weights': (1.0, 0.3, 0.15),
            'phase_per_ring': (0.0, 0.3, 0.7),
            'dynamics_gain': 0.4,
        },
    },

    # =================================================================
    # Curve Colour and Opacity
    # =================================================================
    'material': {
        'crux_fade_range': 0.12,
        'outer_dimming': 0.3,
        'center_fade_exponent': 2.5,
        'min_opacity': 0.1,
    },

    # =================================================================
    # Per-frame Liquid Perturbation
    # =================================================================
    'perturbation': {
        'radial_harmonic': 5.0,
        'radial_time_gain': 2.0,
        'radial_amplitude': 0.5,
        'depth_harmonic': 2.0,
        'depth_amplitude': 0.5,
    },

    # =================================================================
    # Grade Estimate (max magnitude bands, m/s^2)
    # =================================================================
    'grade': {
        'bands': (
            (25.0, 'V10+'),
            (20.0, 'V7-V9'),
            (18.0, 'V5-V6'),
            (15.0, 'V3-V4'),
            (12.0, 'V1-V2'),
        ),
        'default': 'V0',
    },
}


def get_threshold(path: str, default=None):
    """
    Get a threshold value by dot-notation path.

    Example:
        get_threshold('crux.mean_ratio')              # Returns 1.2
        get_threshold('radius.liquid.amplitude')      # Returns 0.05
    """
    keys = path.split('.')
    value = CONFIG
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
