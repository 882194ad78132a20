from __future__ import annotations

import numpy as np
import pytest

from orbitview.model.scene import Entity, Scene


def test_find_returns_entity_or_none(scene: Scene) -> None:
    assert scene.find("b").name == "Beta"
    assert scene.find("missing") is None
    assert scene.find(None) is None
    assert scene.find("") is None


def test_positions_shape(scene: Scene) -> None:
    assert scene.positions().shape == (2, 3)
    assert Scene().positions().shape == (0, 3)


def test_duplicate_ids_rejected() -> None:
    e = Entity(id="x", name="X", position=(0.0, 0.0, 0.0), size=1.0)
    with pytest.raises(ValueError):
        Scene(entities=(e, e))


def test_entities_are_immutable(scene: Scene) -> None:
    with pytest.raises(AttributeError):
        scene.entities[0].name = "Renamed"


def test_to_dict_matches_external_shape(scene: Scene) -> None:
    data = scene.to_dict()
    assert data["metadata"] == {"count": 2, "coordinate_system": "test"}
    assert data["asteroids"][1] == {
        "id": "b", "name": "Beta", "position": [0.0, 50.0, 0.0], "size": 0.5, "orbit": [],
    }
    np.testing.assert_array_equal(scene.entities[0].orbit_array()[1], [0.0, 0.0, 100.0])
