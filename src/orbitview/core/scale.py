"""
Scale Normalizer
Maps arbitrary-scale raw coordinates into a bounded visual radius.
"""
from __future__ import annotations

import numpy as np
import numpy.typing as npt

from orbitview.config import DESIRED_SCENE_RADIUS, SCALE_MIN, SCALE_MAX


def max_distance(positions: npt.ArrayLike) -> float:
    """Largest Euclidean distance from the origin, 0.0 for an empty set."""
    pts = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    if pts.shape[0] == 0:
        return 0.0
    return float(np.linalg.norm(pts, axis=1).max())


def compute_scale_factor(
    positions: npt.ArrayLike,
    desired_radius: float = DESIRED_SCENE_RADIUS
) -> float:
    """
    Scale factor bounding the scene to `desired_radius` render units.

    An empty set gives 1.0 (nothing to fit). A non-empty set with zero extent
    (every entity at the origin) uses a floor distance of 1 so the division
    stays finite. The result is clamped to [SCALE_MIN, SCALE_MAX].

    Example:
        >>> compute_scale_factor([[100.0, 0.0, 0.0]])
        0.3
    """
    pts = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    if pts.shape[0] == 0:
        return 1.0

    dist = max_distance(pts) or 1.0
    scale = desired_radius / dist
    return float(min(max(scale, SCALE_MIN), SCALE_MAX))
