"""Horizontal coordinates → 3D scene coordinates.

Coordinate system:
  Azimuth 0° (north)  → +z
  Azimuth 90° (east)  → -x  (mirrored so east sits on the right when looking north from the south)
  Altitude 0°         → y = 0 (horizon plane)
  Altitude 90°        → y = radius (zenith)
"""

import math
from collections.abc import Sequence

import numpy as np

from lunartrack.models import TrackPoint

DEFAULT_RADIUS = 4.0


def project(point: TrackPoint, radius: float = DEFAULT_RADIUS) -> tuple[float, float, float]:
    """Map a track point onto a sphere of the given radius.

    No clamping is applied; altitude and azimuth are expected in their
    natural ranges.

    Args:
        point: Sample to project.
        radius: Sphere radius in scene units.

    Returns:
        (x, y, z) tuple.
    """
    alt = math.radians(point.altitude_deg)
    az = math.radians(point.azimuth_deg)
    return (
        -radius * math.cos(alt) * math.sin(az),
        radius * math.sin(alt),
        radius * math.cos(alt) * math.cos(az),
    )


def project_points(
    points: Sequence[TrackPoint], radius: float = DEFAULT_RADIUS
) -> np.ndarray:
    """Project a run of points into an (n, 3) vertex array for a polyline."""
    alt = np.radians(np.array([p.altitude_deg for p in points], dtype=float))
    az = np.radians(np.array([p.azimuth_deg for p in points], dtype=float))
    return np.column_stack(
        (
            -radius * np.cos(alt) * np.sin(az),
            radius * np.sin(alt),
            radius * np.cos(alt) * np.cos(az),
        )
    ).reshape(-1, 3)
