"""
Scene Snapshot (Data Model)
===========================
This module defines the immutable scene handed to the viewer by the data source.

Why is this file needed?
------------------------
1. Identity: Scenes are replaced wholesale on reload, never mutated, so the
   scale factor can be cached per scene instance.
2. Decoupling: Views and the camera core read from these objects; only the
   I/O layer (model.io) creates them, after validation.

Classes:
    Entity: One orbiting body with its pre-computed orbit path.
    SceneMetadata: Display-only information about the snapshot.
    Scene: Ordered collection of entities plus metadata.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

Point3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Entity:
    id: str
    name: str
    position: Point3
    size: float
    # Order is rendering-significant; the path is not guaranteed to be closed.
    orbit: Tuple[Point3, ...] = ()

    def position_array(self) -> npt.NDArray[np.float64]:
        return np.asarray(self.position, dtype=np.float64)

    def orbit_array(self) -> npt.NDArray[np.float64]:
        """Orbit points as an (N, 3) array. An empty orbit gives shape (0, 3)."""
        if not self.orbit:
            return np.empty((0, 3), dtype=np.float64)
        return np.asarray(self.orbit, dtype=np.float64)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "position": list(self.position),
            "size": self.size,
            "orbit": [list(pt) for pt in self.orbit],
        }


@dataclass(frozen=True)
class SceneMetadata:
    count: int = 0
    time_point: Optional[str] = None
    coordinate_system: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"count": self.count}
        if self.time_point is not None:
            data["time_point"] = self.time_point
        if self.coordinate_system is not None:
            data["coordinate_system"] = self.coordinate_system
        return data


@dataclass(frozen=True)
class Scene:
    entities: Tuple[Entity, ...] = ()
    metadata: SceneMetadata = field(default_factory=SceneMetadata)

    def __post_init__(self) -> None:
        ids = [e.id for e in self.entities]
        if len(ids) != len(set(ids)):
            raise ValueError("Entity ids must be unique within a scene.")

    def __len__(self) -> int:
        return len(self.entities)

    @property
    def is_empty(self) -> bool:
        return not self.entities

    def find(self, entity_id: Optional[str]) -> Optional[Entity]:
        """Look up an entity by id. Unknown or empty ids return None."""
        if not entity_id:
            return None
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def positions(self) -> npt.NDArray[np.float64]:
        """Raw entity positions as an (N, 3) array."""
        if not self.entities:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([e.position for e in self.entities], dtype=np.float64)

    def to_dict(self) -> Dict[str, Any]:
        """Reproduces the external payload shape ('asteroids' / 'metadata')."""
        return {
            "asteroids": [e.to_dict() for e in self.entities],
            "metadata": self.metadata.to_dict(),
        }
