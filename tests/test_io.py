from __future__ import annotations

import json
import math
import os

import pytest

from orbitview.config import DEFAULT_SCENE_PATH
from orbitview.model.io import SceneIO, SceneValidationError
from orbitview.model.scene import Scene


def payload(**overrides):
    asteroid = {
        "id": "1",
        "name": "Ceres",
        "position": [2.0, 0.5, 1.0],
        "size": 0.47,
        "orbit": [[2.0, 0.0, 0.0], [0.0, 0.0, 2.0]],
    }
    asteroid.update(overrides)
    return {"asteroids": [asteroid], "metadata": {"count": 1, "time_point": "2025-01-01", "coordinate_system": "ecliptic"}}


def test_parse_valid_payload() -> None:
    scene = SceneIO.parse(payload())
    (entity,) = scene.entities
    assert entity.id == "1"
    assert entity.position == (2.0, 0.5, 1.0)
    assert entity.orbit == ((2.0, 0.0, 0.0), (0.0, 0.0, 2.0))
    assert scene.metadata.time_point == "2025-01-01"
    assert scene.metadata.coordinate_system == "ecliptic"


def test_numeric_ids_are_coerced_to_strings() -> None:
    assert SceneIO.parse(payload(id=433)).entities[0].id == "433"


def test_missing_metadata_defaults_count() -> None:
    data = payload()
    del data["metadata"]
    scene = SceneIO.parse(data)
    assert scene.metadata.count == 1
    assert scene.metadata.time_point is None


def test_empty_payload_gives_empty_scene() -> None:
    scene = SceneIO.parse({})
    assert scene.is_empty
    assert scene.metadata.count == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"position": [1.0, 2.0]},
        {"position": [1.0, 2.0, 3.0, 4.0]},
        {"position": [1.0, math.nan, 3.0]},
        {"position": [1.0, None, 3.0]},
        {"orbit": [[1.0, 2.0, 3.0], [1.0, math.inf, 0.0]]},
        {"orbit": [[1.0, 2.0]]},
        {"size": 0.0},
        {"size": -1.0},
        {"size": math.inf},
        {"id": ""},
    ],
)
def test_malformed_entities_are_rejected(overrides) -> None:
    with pytest.raises(SceneValidationError) as exc_info:
        SceneIO.parse(payload(**overrides))
    assert exc_info.value.details


def test_duplicate_ids_are_rejected() -> None:
    data = payload()
    data["asteroids"].append(dict(data["asteroids"][0]))
    with pytest.raises(SceneValidationError, match="duplicate"):
        SceneIO.parse(data)


def test_non_object_payload_is_rejected() -> None:
    with pytest.raises(SceneValidationError):
        SceneIO.parse([1, 2, 3])


def test_validation_error_is_a_value_error() -> None:
    assert issubclass(SceneValidationError, ValueError)


def test_load_missing_file(tmp_path) -> None:
    with pytest.raises(SceneValidationError):
        SceneIO.load(str(tmp_path / "nope.json"))


def test_load_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SceneValidationError):
        SceneIO.load(str(path))


def test_load_non_utf8_file(tmp_path) -> None:
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00garbage\x80\x81")
    with pytest.raises(SceneValidationError, match="not a readable JSON scene"):
        SceneIO.load(str(path))


def test_export_writes_input_shape(tmp_path) -> None:
    scene = SceneIO.parse(payload())
    path = tmp_path / "scene.json"
    SceneIO.export(scene, str(path))

    written = json.loads(path.read_text(encoding="utf-8"))
    assert set(written) == {"asteroids", "metadata"}
    assert written["asteroids"][0]["orbit"] == [[2.0, 0.0, 0.0], [0.0, 0.0, 2.0]]
    assert SceneIO.load(str(path)) == scene


@pytest.mark.skipif(not os.path.exists(DEFAULT_SCENE_PATH), reason="sample scene not bundled")
def test_bundled_sample_scene_is_valid() -> None:
    scene = SceneIO.load(DEFAULT_SCENE_PATH)
    assert isinstance(scene, Scene)
    assert len(scene) == scene.metadata.count
    assert all(len(e.orbit) > 1 for e in scene.entities)
