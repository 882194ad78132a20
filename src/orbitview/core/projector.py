"""
Render Projector
================
Turns raw scene entities into render-space draw data.

Positions and orbit points are multiplied elementwise by the scale factor;
point order and count are preserved. The selected entity gets the highlighted
colour/emissive encoding, everything else shares the neutral one. Nothing here
holds state or touches the renderer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

import numpy as np

from orbitview.config import (
    BODY_MIN_SCALE, BODY_FLOOR_RADIUS,
    BODY_COLOR, BODY_COLOR_SELECTED,
    BODY_EMISSIVE, BODY_EMISSIVE_SELECTED,
    BODY_EMISSIVE_INTENSITY, BODY_EMISSIVE_INTENSITY_SELECTED,
    ORBIT_COLOR, ORBIT_COLOR_SELECTED, ORBIT_OPACITY, ORBIT_OPACITY_SELECTED,
    SUN_RADIUS, SUN_GLOW_RADIUS, SUN_GLOW_OPACITY, SUN_LIGHT_INTENSITY, SUN_LIGHT_RANGE,
    SUN_COLOR, SUN_EMISSIVE, SUN_GLOW_COLOR,
)

if TYPE_CHECKING:
    import numpy.typing as npt
    from orbitview.model.scene import Entity, Scene


@dataclass(frozen=True, eq=False)
class ProjectedBody:
    entity_id: str
    name: str
    position: npt.NDArray[np.float64]  # (3,) render space
    orbit: npt.NDArray[np.float64]  # (N, 3) render space
    radius: float
    color: str
    emissive: str
    emissive_intensity: float
    orbit_color: str
    orbit_opacity: float
    selected: bool = False


@dataclass(frozen=True)
class SunGlyph:
    """The central body, always drawn at the origin."""
    radius: float
    glow_radius: float
    glow_opacity: float
    light_intensity: float
    light_range: float
    color: str = SUN_COLOR
    emissive: str = SUN_EMISSIVE
    glow_color: str = SUN_GLOW_COLOR


def body_radius(size: float, scale: float) -> float:
    """Visual radius; never smaller than BODY_FLOOR_RADIUS so tiny bodies stay pickable."""
    return max(size * max(BODY_MIN_SCALE, scale), BODY_FLOOR_RADIUS)


def project_points(points: npt.ArrayLike, scale: float) -> npt.NDArray[np.float64]:
    return np.asarray(points, dtype=np.float64) * scale


def project_entity(entity: Entity, scale: float, selected: bool = False) -> ProjectedBody:
    return ProjectedBody(
        entity_id=entity.id,
        name=entity.name,
        position=project_points(entity.position_array(), scale),
        orbit=project_points(entity.orbit_array(), scale),
        radius=body_radius(entity.size, scale),
        color=BODY_COLOR_SELECTED if selected else BODY_COLOR,
        emissive=BODY_EMISSIVE_SELECTED if selected else BODY_EMISSIVE,
        emissive_intensity=BODY_EMISSIVE_INTENSITY_SELECTED if selected else BODY_EMISSIVE_INTENSITY,
        orbit_color=ORBIT_COLOR_SELECTED if selected else ORBIT_COLOR,
        orbit_opacity=ORBIT_OPACITY_SELECTED if selected else ORBIT_OPACITY,
        selected=selected,
    )


def project_scene(scene: Scene, scale: float, selected_id: Optional[str] = None) -> List[ProjectedBody]:
    """Projects every entity in scene order. An unknown `selected_id` highlights nothing."""
    return [
        project_entity(entity, scale, selected=(selected_id is not None and entity.id == selected_id))
        for entity in scene.entities
    ]


def project_sun(scale: float) -> SunGlyph:
    # The sun only grows with the scene, it never shrinks below its base size
    grow = max(1.0, scale)
    return SunGlyph(
        radius=SUN_RADIUS * grow,
        glow_radius=SUN_GLOW_RADIUS * grow,
        glow_opacity=SUN_GLOW_OPACITY,
        light_intensity=SUN_LIGHT_INTENSITY * grow,
        light_range=SUN_LIGHT_RANGE * grow,
    )
