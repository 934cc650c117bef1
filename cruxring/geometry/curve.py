"""
Closed curve resampling.

Control points are joined by a periodic cubic spline (C2 everywhere,
including the seam between the last and first point) and sampled at
`resolution` evenly spaced parameter values.
"""

from typing import Optional, Tuple

import numpy as np
from scipy.interpolate import CubicSpline

from cruxring.errors import GeometryError


def resample_closed(
    points: np.ndarray,
    resolution: int,
    positions: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Resample a closed loop of control points.

    Args:
        points: (k, 3) control points, k >= 3, first point not repeated.
        resolution: Number of output points.
        positions: Normalized parameter of each control point, strictly
            increasing within [0, 1). Defaults to i / k.

    Returns:
        (samples, u): (resolution, 3) points and their normalized
        positions in [0, 1).

    Raises:
        GeometryError: fewer than 3 points, non-finite input or output.
    """
    pts = np.asarray(points, dtype=np.float64)
    k = len(pts)
    if k < 3:
        raise GeometryError(f"closed curve needs 3 control points, got {k}")
    if resolution < 3:
        raise GeometryError(f"curve resolution must be at least 3, got {resolution}")
    if not np.isfinite(pts).all():
        raise GeometryError("control points must be finite")

    if positions is None:
        knots = np.arange(k, dtype=np.float64) / k
    else:
        knots = np.asarray(positions, dtype=np.float64)

    # Close the loop: the first point reappears one full turn later.
    u = np.append(knots, knots[0] + 1.0)
    closed = np.vstack([pts, pts[:1]])
    spline = CubicSpline(u, closed, axis=0, bc_type='periodic')

    u_out = knots[0] + np.arange(resolution, dtype=np.float64) / resolution
    samples = spline(u_out)

    if not np.isfinite(samples).all():
        raise GeometryError("spline produced non-finite points")
    return samples, np.mod(u_out, 1.0)
