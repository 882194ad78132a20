from __future__ import annotations

import numpy as np
import pytest

from orbitview.config import (
    BODY_FLOOR_RADIUS, BODY_COLOR, BODY_COLOR_SELECTED, BODY_EMISSIVE_INTENSITY_SELECTED,
    ORBIT_OPACITY, ORBIT_OPACITY_SELECTED,
)
from orbitview.core.projector import body_radius, project_entity, project_scene, project_sun
from orbitview.core.scale import compute_scale_factor
from orbitview.model.scene import Entity, Scene


def test_projection_is_scale_linear(scene: Scene) -> None:
    scale = compute_scale_factor(scene.positions())
    bodies = project_scene(scene, scale)

    assert [b.entity_id for b in bodies] == ["a", "b"]
    for body, entity in zip(bodies, scene.entities):
        np.testing.assert_array_equal(body.position, np.asarray(entity.position) * scale)
        assert body.orbit.shape == (len(entity.orbit), 3)
        if entity.orbit:
            np.testing.assert_array_equal(body.orbit, np.asarray(entity.orbit) * scale)


def test_single_entity_example() -> None:
    scene = Scene(entities=(Entity(id="x", name="X", position=(100.0, 0.0, 0.0), size=1.0),))
    scale = compute_scale_factor(scene.positions())
    (body,) = project_scene(scene, scale)
    np.testing.assert_allclose(body.position, [30.0, 0.0, 0.0])


def test_orbit_order_preserved() -> None:
    orbit = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0), (1.0, 0.0, 0.0))
    entity = Entity(id="o", name="O", position=(1.0, 0.0, 0.0), size=1.0, orbit=orbit)
    body = project_entity(entity, 2.0)
    np.testing.assert_array_equal(body.orbit, np.asarray(orbit) * 2.0)


def test_empty_orbit_projects_to_empty_array() -> None:
    entity = Entity(id="e", name="E", position=(1.0, 2.0, 3.0), size=1.0)
    assert project_entity(entity, 0.5).orbit.shape == (0, 3)


@pytest.mark.parametrize(
    "size, scale, expected",
    [
        (1.0, 2.0, 2.0),
        (1.0, 0.1, 0.5),  # shrinks no further than half the raw size
        (0.01, 0.02, BODY_FLOOR_RADIUS),
    ],
)
def test_body_radius(size: float, scale: float, expected: float) -> None:
    assert body_radius(size, scale) == pytest.approx(expected)


def test_selected_entity_gets_distinct_encoding(scene: Scene) -> None:
    bodies = {b.entity_id: b for b in project_scene(scene, 0.3, selected_id="b")}

    assert bodies["b"].selected
    assert bodies["b"].color == BODY_COLOR_SELECTED
    assert bodies["b"].emissive_intensity == BODY_EMISSIVE_INTENSITY_SELECTED
    assert bodies["b"].orbit_opacity == ORBIT_OPACITY_SELECTED

    assert not bodies["a"].selected
    assert bodies["a"].color == BODY_COLOR
    assert bodies["a"].orbit_opacity == ORBIT_OPACITY


def test_unknown_selection_highlights_nothing(scene: Scene) -> None:
    bodies = project_scene(scene, 0.3, selected_id="missing")
    assert not any(b.selected for b in bodies)


def test_empty_scene_projects_nothing() -> None:
    assert project_scene(Scene(), 1.0) == []


def test_sun_grows_with_scale_but_never_shrinks() -> None:
    small = project_sun(0.02)
    large = project_sun(4.0)
    assert small.radius == pytest.approx(2.0)
    assert small.glow_radius == pytest.approx(3.0)
    assert large.radius == pytest.approx(8.0)
    assert large.light_intensity == pytest.approx(16.0)
