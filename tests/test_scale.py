from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, strategies as st

from orbitview.config import SCALE_MIN, SCALE_MAX
from orbitview.core.scale import compute_scale_factor, max_distance

coordinate = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
point = st.tuples(coordinate, coordinate, coordinate)
point_sets = st.lists(point, min_size=1, max_size=30)


def test_single_entity_example() -> None:
    assert max_distance([[100.0, 0.0, 0.0]]) == pytest.approx(100.0)
    assert compute_scale_factor([[100.0, 0.0, 0.0]]) == pytest.approx(0.3)


def test_empty_set_gives_unit_scale() -> None:
    assert compute_scale_factor([]) == 1.0
    assert compute_scale_factor(np.empty((0, 3))) == 1.0


def test_uses_farthest_entity() -> None:
    positions = [[3.0, 4.0, 0.0], [0.0, 0.0, -60.0], [1.0, 1.0, 1.0]]
    assert compute_scale_factor(positions) == pytest.approx(0.5)


def test_zero_extent_uses_floor_distance() -> None:
    # Every entity at the origin: 30 / 1, clamped to the upper bound
    assert compute_scale_factor([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]) == SCALE_MAX


@pytest.mark.parametrize(
    "positions, expected",
    [
        ([[1e9, 0.0, 0.0]], SCALE_MIN),
        ([[0.001, 0.0, 0.0]], SCALE_MAX),
    ],
)
def test_extreme_scenes_are_clamped(positions, expected) -> None:
    assert compute_scale_factor(positions) == expected


@given(point_sets)
def test_scale_always_within_bounds(points) -> None:
    scale = compute_scale_factor(points)
    assert SCALE_MIN <= scale <= SCALE_MAX
    assert np.isfinite(scale)


@given(point_sets)
def test_scale_is_deterministic(points) -> None:
    assert compute_scale_factor(points) == compute_scale_factor(list(reversed(points)))


@given(point_sets)
def test_doubling_distances_never_increases_scale(points) -> None:
    pts = np.asarray(points, dtype=np.float64)
    assert compute_scale_factor(pts * 2.0) <= compute_scale_factor(pts)
